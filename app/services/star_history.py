from fastapi import status

from app.github.source import StarSource
from app.schemas.repo_metadata import RepoMetadata
from app.schemas.star_event import StarEvent
from app.utils.error import ErrorKind, PlainTextHTTPException, RepositoryError
from app.utils.trace import Tracer


class StarHistoryService:
    def __init__(self, source: StarSource, tracer: Tracer) -> None:
        """@brief Initialize shared repository lookup dependencies.

        @param source Star source resolving repositories and star events.
        @param tracer Tracer receiving request logs and timing spans.
        """
        self._source = source
        self._tracer = tracer

    def _resolve(self, name: str) -> RepoMetadata:
        """@brief Resolve repository metadata.

        @param name Repository identifier formatted as `owner/repo`.
        @return Repository metadata.
        @throws PlainTextHTTPException HTTP 400 with the raw error text when
        the lookup fails for any reason.
        """
        try:
            return self._source.resolve_repository(name)
        except RepositoryError as exc:
            raise PlainTextHTTPException(
                status.HTTP_400_BAD_REQUEST, exc.message
            ) from exc

    def _collect_stars(self, repo: RepoMetadata, tracer: Tracer) -> list[StarEvent]:
        """@brief Fetch star events, letting only the too-many-stars error through.

        @param repo Resolved repository metadata.
        @param tracer Tracer bound to the repository context.
        @return Star events in chronological order.
        @throws RepositoryError Re-raised unchanged when its kind is
        `TOO_MANY_STARS`.
        @throws PlainTextHTTPException HTTP 503 with the raw error text for
        every other retrieval failure.
        """
        try:
            return self._source.fetch_star_events(repo)
        except RepositoryError as exc:
            if exc.kind is ErrorKind.TOO_MANY_STARS:
                raise
            tracer.error("failed to get stars", exc=exc)
            raise PlainTextHTTPException(
                status.HTTP_503_SERVICE_UNAVAILABLE, exc.message
            ) from exc
