import logging

from rq import SimpleWorker, Queue

from cartoon_creator.core.config import settings
from cartoon_creator.core.queue import RENDER_QUEUE_NAME
from cartoon_creator.core.redis import redis_client

listen = [RENDER_QUEUE_NAME]

if __name__ == '__main__':
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    queues = [Queue(name, connection=redis_client) for name in listen]
    worker = SimpleWorker(queues, connection=redis_client)
    logging.getLogger("worker").info("[Worker] Listening on queues: %s", listen)
    worker.work()
