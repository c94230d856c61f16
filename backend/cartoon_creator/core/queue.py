from rq import Queue

from cartoon_creator.core.redis import redis_client

RENDER_QUEUE_NAME = "render_queue"

render_queue = Queue(RENDER_QUEUE_NAME, connection=redis_client)
