import logging
import math
import re
from typing import Any

import requests
from redis.exceptions import RedisError

from app.database.cache import CacheRecord
from app.github.source import StarSource
from app.schemas.repo_metadata import RepoMetadata
from app.schemas.star_event import StarEvent
from app.utils.env import (
    get_github_api_url,
    get_github_max_stargazers,
    get_github_page_size,
    get_github_timeout_seconds,
    get_github_token,
)
from app.utils.error import ErrorKind, RepositoryError

_LOGGER = logging.getLogger(__name__)

_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+/[A-Za-z0-9._-]+")

STAR_MEDIA_TYPE = "application/vnd.github.v3.star+json"
TOO_MANY_STARS_MESSAGE = (
    "repository has too many stargazers, GitHub won't allow us to list all stars"
)


class GitHubClient(StarSource):
    def __init__(
        self,
        session: requests.Session | None = None,
        cache: CacheRecord | None = None,
        api_url: str | None = None,
        token: str | None = None,
        max_stargazers: int | None = None,
        page_size: int | None = None,
        timeout_seconds: int | None = None,
    ) -> None:
        """@brief Initialize the GitHub REST client.

        @param session Optional pre-configured `requests` session.
        @param cache Optional lookup cache. Lookups are not memoized when None.
        @param api_url Optional API base URL. Falls back to `get_github_api_url()`.
        @param token Optional bearer token. Falls back to `get_github_token()`.
        @param max_stargazers Optional enumeration limit.
        Falls back to `get_github_max_stargazers()`.
        @param page_size Optional stargazers per page.
        Falls back to `get_github_page_size()`.
        @param timeout_seconds Optional per-request timeout.
        Falls back to `get_github_timeout_seconds()`.
        """
        self._api_url = (api_url or get_github_api_url()).rstrip("/")
        self._max_stargazers = max_stargazers or get_github_max_stargazers()
        self._page_size = page_size or get_github_page_size()
        self._timeout_seconds = timeout_seconds or get_github_timeout_seconds()
        self._cache = cache

        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/vnd.github+json"})

        token = token or get_github_token()
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def _get(
        self,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """@brief Issue a GET request, mapping transport errors.

        @throws RepositoryError `TRANSIENT` when GitHub cannot be reached.
        """
        try:
            return self._session.get(
                url, params=params, headers=headers, timeout=self._timeout_seconds
            )
        except requests.RequestException as exc:
            raise RepositoryError(
                ErrorKind.TRANSIENT, f"failed to reach GitHub: {exc}"
            ) from exc

    def _cache_get(self, key: str) -> Any | None:
        if self._cache is None:
            return None
        try:
            return self._cache.get_json(key)
        except RedisError as exc:
            _LOGGER.warning("Failed to read cache key '%s': %s", key, exc)
            return None

    def _cache_set(self, key: str, value: Any) -> None:
        if self._cache is None:
            return
        try:
            self._cache.set_json(key, value)
        except RedisError as exc:
            _LOGGER.warning("Failed to write cache key '%s': %s", key, exc)

    def resolve_repository(self, name: str) -> RepoMetadata:
        """@brief Resolve repository metadata from `GET /repos/{owner}/{repo}`.

        @param name Repository identifier formatted as `owner/repo`.
        @return Parsed repository metadata.
        @throws RepositoryError `NOT_FOUND` for malformed names and HTTP 404,
        `TRANSIENT` for any other failure.
        """
        name = name.strip()
        if not _NAME_PATTERN.fullmatch(name) or ".." in name:
            raise RepositoryError(
                ErrorKind.NOT_FOUND, f"invalid repository name: '{name}'"
            )

        cache_key = f"repo:{name}"
        cached = self._cache_get(cache_key)
        if cached is not None:
            try:
                return RepoMetadata.model_validate(cached)
            except ValueError:
                _LOGGER.warning("Ignoring malformed cache entry '%s'", cache_key)

        response = self._get(f"{self._api_url}/repos/{name}")
        if response.status_code == 404:
            raise RepositoryError(ErrorKind.NOT_FOUND, f"repository not found: {name}")
        if not response.ok:
            raise RepositoryError(
                ErrorKind.TRANSIENT,
                f"GitHub returned HTTP {response.status_code} for {name}",
            )

        try:
            metadata = RepoMetadata.model_validate(response.json())
        except ValueError as exc:
            raise RepositoryError(
                ErrorKind.TRANSIENT, f"malformed repository payload for {name}"
            ) from exc

        self._cache_set(cache_key, metadata.model_dump(mode="json"))
        return metadata

    def _fetch_stargazer_page(self, name: str, page: int) -> list[StarEvent]:
        """@brief Fetch and parse one page of stargazers.

        @param name Repository identifier formatted as `owner/repo`.
        @param page One-based page number.
        @return Star events found on the page. Rows without `starred_at` are skipped.
        @throws RepositoryError `TRANSIENT` on HTTP or payload errors.
        """
        response = self._get(
            f"{self._api_url}/repos/{name}/stargazers",
            params={"per_page": self._page_size, "page": page},
            headers={"Accept": STAR_MEDIA_TYPE},
        )
        if not response.ok:
            raise RepositoryError(
                ErrorKind.TRANSIENT,
                f"GitHub returned HTTP {response.status_code} "
                f"for {name} stargazers page {page}",
            )

        try:
            rows = response.json()
            if not isinstance(rows, list):
                raise ValueError("stargazers payload must be a list")
            return [
                StarEvent.model_validate({"starred_at": row["starred_at"]})
                for row in rows
                if isinstance(row, dict) and row.get("starred_at")
            ]
        except ValueError as exc:
            raise RepositoryError(
                ErrorKind.TRANSIENT,
                f"malformed stargazers payload for {name} page {page}",
            ) from exc

    def fetch_star_events(self, repo: RepoMetadata) -> list[StarEvent]:
        """@brief Page through every stargazer of a repository, oldest first.

        @param repo Metadata returned by `resolve_repository`.
        @return Star events in the order GitHub lists them.
        @throws RepositoryError `TOO_MANY_STARS` when `stargazers_count`
        exceeds the configured limit, `TRANSIENT` on retrieval failures.
        """
        if repo.stargazers_count > self._max_stargazers:
            raise RepositoryError(ErrorKind.TOO_MANY_STARS, TOO_MANY_STARS_MESSAGE)

        if repo.stargazers_count == 0:
            return []

        cache_key = f"stargazers:{repo.full_name}:{repo.stargazers_count}"
        cached = self._cache_get(cache_key)
        if cached is not None:
            try:
                return [StarEvent.model_validate(item) for item in cached]
            except (TypeError, ValueError):
                _LOGGER.warning("Ignoring malformed cache entry '%s'", cache_key)

        events: list[StarEvent] = []
        last_page = math.ceil(repo.stargazers_count / self._page_size)
        for page in range(1, last_page + 1):
            page_events = self._fetch_stargazer_page(repo.full_name, page)
            if not page_events:
                break
            events.extend(page_events)

        self._cache_set(cache_key, [event.model_dump(mode="json") for event in events])
        return events
