# ebe/db/redis.py
import redis
from ebe.core.config import settings


def get_redis_client():
    """
    Creates and returns a new Redis client instance.
    The connection is opened lazily on the first command.
    """
    return redis.from_url(settings.REDIS_URL, decode_responses=True)


# Shared instance used by the waiting-room notifier.
redis_client = get_redis_client()
