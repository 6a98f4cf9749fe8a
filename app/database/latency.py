from math import isfinite
from typing import Literal, get_args

from redis import Redis

from app.database.redis_record import RedisRecord
from app.utils.env import get_latency_history_limit

LatencyTarget = Literal["chart", "details"]


class LatencyRecord(RedisRecord):
    """@brief Bounded Redis lists of request latencies, one per route group."""

    _PREFIX = "starcharts:latency:"

    def __init__(
        self,
        redis_client: Redis | None = None,
        redis_url: str | None = None,
        history_limit: int | None = None,
    ) -> None:
        """@brief Initialize Redis connectivity and latency retention settings.

        @param redis_client Optional pre-configured Redis client.
        @param redis_url Optional Redis URL. Falls back to `get_redis_url()`.
        @param history_limit Optional max history size per list.
        Falls back to `get_latency_history_limit()`.
        @throws ValueError If `history_limit` is less than 1.
        """
        if history_limit is None:
            history_limit = get_latency_history_limit()

        if history_limit < 1:
            raise ValueError("LATENCY_HISTORY_LIMIT must be greater than or equal to 1.")

        super().__init__(redis_client=redis_client, redis_url=redis_url)
        self._history_limit = history_limit

    @classmethod
    def _key_for(cls, target: LatencyTarget) -> str:
        """@brief Resolve the Redis list holding samples of a route group.

        @throws ValueError If target is not a known route group.
        """
        if target not in get_args(LatencyTarget):
            raise ValueError("target must be 'chart' or 'details'.")
        return cls._namespaced(target)

    def push_latency(self, target: LatencyTarget, latency_ms: float) -> None:
        """@brief Append a sample and keep only the newest `history_limit` ones.

        @param target Route group (`chart` or `details`).
        @param latency_ms Request latency in milliseconds.
        @throws ValueError If target is invalid or latency is not finite.
        """
        key = self._key_for(target)
        value = float(latency_ms)

        if not isfinite(value):
            raise ValueError("latency_ms must be a finite number.")

        pipeline = self._redis.pipeline()
        pipeline.rpush(key, value)
        pipeline.ltrim(key, -self._history_limit, -1)
        pipeline.execute()

    def get_latencies(self, target: LatencyTarget) -> list[float]:
        """@brief Read the finite samples stored for a route group.

        @param target Route group (`chart` or `details`).
        @return Latencies in milliseconds, oldest first. Invalid entries are skipped.
        """
        latencies: list[float] = []
        for raw in self._redis.lrange(self._key_for(target), 0, -1):
            try:
                value = float(raw)
            except (TypeError, ValueError):
                continue
            if isfinite(value):
                latencies.append(value)
        return latencies
