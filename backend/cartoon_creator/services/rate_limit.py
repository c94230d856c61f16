import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict

from redis import Redis

logger = logging.getLogger(__name__)


@dataclass
class _Window:
    count: int
    reset_at: float


class InMemoryRateLimiter:
    """Fixed-window counter per key, local to this process.

    Counters are lost on restart and are not shared between server
    instances; use RedisRateLimiter for that.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def check(self, key: str) -> bool:
        now = self._clock()
        with self._lock:
            window = self._windows.get(key)

            if window is None or now > window.reset_at:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_seconds)
                return True

            if window.count >= self.max_requests:
                return False

            window.count += 1
            return True

    def count(self, key: str) -> int:
        with self._lock:
            window = self._windows.get(key)
            return window.count if window else 0

    def reset(self):
        with self._lock:
            self._windows.clear()


class RedisRateLimiter:
    """Fixed-window counter stored in Redis.

    Each check sends SET NX EX and INCR in one MULTI; the TTL is set only
    when the window key is created.
    """

    def __init__(
        self,
        client: Redis,
        max_requests: int,
        window_seconds: int,
        prefix: str = "ratelimit:story:",
    ):
        self.client = client
        self.max_requests = max_requests
        self.window_seconds = int(window_seconds)
        self.prefix = prefix

    def check(self, key: str) -> bool:
        redis_key = f"{self.prefix}{key}"
        pipe = self.client.pipeline(transaction=True)
        pipe.set(redis_key, 0, ex=self.window_seconds, nx=True)
        pipe.incr(redis_key)
        _, count = pipe.execute()
        count = int(count)
        return count <= self.max_requests


def build_rate_limiter(settings):
    if settings.RATE_LIMIT_BACKEND == "redis":
        from cartoon_creator.core.redis import redis_client

        logger.info("[RateLimit] Using Redis backend at %s", settings.REDIS_URL)
        return RedisRateLimiter(
            redis_client,
            settings.RATE_LIMIT_MAX_REQUESTS,
            settings.RATE_LIMIT_WINDOW_SECONDS,
        )

    return InMemoryRateLimiter(
        settings.RATE_LIMIT_MAX_REQUESTS,
        settings.RATE_LIMIT_WINDOW_SECONDS,
    )
