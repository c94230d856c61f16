from redis import Redis

from cartoon_creator.core.config import settings

redis_client = Redis.from_url(settings.REDIS_URL)
