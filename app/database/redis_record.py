from redis import Redis

from app.utils.env import get_redis_url


class RedisRecord:
    """@brief Base for repositories persisting values under a Redis namespace."""

    _PREFIX = "starcharts:"

    def __init__(
        self, redis_client: Redis | None = None, redis_url: str | None = None
    ) -> None:
        """@brief Create or receive the Redis client.

        @param redis_client Optional pre-configured Redis client.
        @param redis_url Optional Redis URL. Falls back to `get_redis_url()`.
        """
        url = redis_url or get_redis_url()
        self._redis = redis_client or Redis.from_url(url, decode_responses=True)

    @classmethod
    def _namespaced(cls, key: str) -> str:
        return cls._PREFIX + key
