from app.database.cache import CacheRecord
from app.github.client import GitHubClient
from app.github.source import StarSource
from app.utils.env import get_cache_backend


def get_star_source() -> StarSource:
    """@brief Resolve the configured star source for repository lookups.

    @return GitHub client, memoizing lookups in Redis when
    `CACHE_BACKEND` is `redis`.
    @throws ValueError If `CACHE_BACKEND` has an invalid value.
    """
    backend = get_cache_backend()

    if backend == "redis":
        return GitHubClient(cache=CacheRecord())

    return GitHubClient()
