import json
from typing import Any

from redis import Redis

from app.database.redis_record import RedisRecord
from app.utils.env import get_cache_ttl_seconds


class CacheRecord(RedisRecord):
    """@brief JSON lookup cache with a fixed expiration per entry."""

    _PREFIX = "starcharts:cache:"

    def __init__(
        self,
        redis_client: Redis | None = None,
        redis_url: str | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        """@brief Initialize Redis connectivity and entry expiration.

        @param redis_client Optional pre-configured Redis client.
        @param redis_url Optional Redis URL. Falls back to `get_redis_url()`.
        @param ttl_seconds Optional expiration of each entry.
        Falls back to `get_cache_ttl_seconds()`.
        @throws ValueError If `ttl_seconds` is less than 1.
        """
        if ttl_seconds is None:
            ttl_seconds = get_cache_ttl_seconds()

        if ttl_seconds < 1:
            raise ValueError("CACHE_TTL_SECONDS must be greater than or equal to 1.")

        super().__init__(redis_client=redis_client, redis_url=redis_url)
        self._ttl_seconds = ttl_seconds

    def get_json(self, key: str) -> Any | None:
        """@brief Read and decode a cached JSON value.

        @param key Cache key without namespace prefix.
        @return Decoded value, or None when missing or undecodable.
        """
        raw = self._redis.get(self._namespaced(key))
        if raw is None:
            return None

        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            return None

    def set_json(self, key: str, value: Any) -> None:
        """@brief Encode and store a JSON value with the configured TTL.

        @param key Cache key without namespace prefix.
        @param value JSON-serializable value.
        """
        self._redis.set(self._namespaced(key), json.dumps(value), ex=self._ttl_seconds)
