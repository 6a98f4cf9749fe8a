import os


def _get_positive_int(key: str, default: str) -> int:
    """@brief Read an integer environment variable that must be positive.

    @param key Environment variable name.
    @param default Fallback value when the variable is unset/empty.
    @return Parsed integer value.
    @throws ValueError If the value is not an integer or is less than 1.
    """
    raw = os.getenv(key, "").strip() or default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer.") from exc

    if value < 1:
        raise ValueError(f"{key} must be greater than or equal to 1.")
    return value


def get_github_api_url() -> str:
    """@brief Return the base URL of the GitHub REST API.

    @return URL from `GITHUB_API_URL` without trailing slash
    (default `https://api.github.com`).
    """
    value = os.getenv("GITHUB_API_URL", "").strip() or "https://api.github.com"
    return value.rstrip("/")


def get_github_token() -> str | None:
    """@brief Return optional GitHub token used for authenticated lookups.

    @return Token from `GITHUB_TOKEN`, or None when unset.
    """
    value = os.getenv("GITHUB_TOKEN", "").strip()
    return value or None


def get_github_max_stargazers() -> int:
    """@brief Return the largest star count the service is willing to list.

    @return Integer from `GITHUB_MAX_STARGAZERS` (default `40000`).
    """
    return _get_positive_int("GITHUB_MAX_STARGAZERS", "40000")


def get_github_page_size() -> int:
    """@brief Return the number of stargazers requested per API page.

    @return Integer from `GITHUB_PAGE_SIZE` (default `100`).
    """
    return _get_positive_int("GITHUB_PAGE_SIZE", "100")


def get_github_timeout_seconds() -> int:
    """@brief Return the timeout applied to each GitHub API request.

    @return Integer seconds from `GITHUB_TIMEOUT_SECONDS` (default `10`).
    """
    return _get_positive_int("GITHUB_TIMEOUT_SECONDS", "10")


def get_cache_backend() -> str:
    """@brief Return configured lookup cache backend.

    @return Backend identifier from `CACHE_BACKEND` (`redis` or `none`).
    @throws ValueError If backend is not supported.
    """
    backend = os.getenv("CACHE_BACKEND", "redis").strip().lower()
    if backend not in {"redis", "none"}:
        raise ValueError("CACHE_BACKEND must be either 'redis' or 'none'.")
    return backend


def get_cache_ttl_seconds() -> int:
    """@brief Return expiration applied to cached GitHub lookups.

    @return Integer seconds from `CACHE_TTL_SECONDS` (default `86400`).
    """
    return _get_positive_int("CACHE_TTL_SECONDS", "86400")


def get_redis_url() -> str:
    """@brief Return Redis connection URL used by application components.

    @return Redis URL from `REDIS_URL` (default `redis://redis:6379/0`).
    """
    return os.getenv("REDIS_URL", "redis://redis:6379/0")


def get_latency_history_limit() -> int:
    """@brief Return max number of latency samples retained in Redis lists.

    @return Integer history limit from `LATENCY_HISTORY_LIMIT` (default `100`).
    """
    return int(os.getenv("LATENCY_HISTORY_LIMIT", "100"))


def get_log_level() -> str:
    """@brief Return the root logging level name.

    @return Upper-cased level from `LOG_LEVEL` (default `INFO`).
    """
    return os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO"


def get_latency_tracking_enabled() -> bool:
    """@brief Return whether request latencies are recorded in Redis.

    @return False when `LATENCY_TRACKING` is `0`, `false`, `no` or `off`
    (default enabled).
    """
    value = os.getenv("LATENCY_TRACKING", "true").strip().lower()
    return value not in {"0", "false", "no", "off"}
