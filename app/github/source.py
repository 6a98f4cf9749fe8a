from abc import ABC, abstractmethod

from app.schemas.repo_metadata import RepoMetadata
from app.schemas.star_event import StarEvent


class StarSource(ABC):
    @abstractmethod
    def resolve_repository(self, name: str) -> RepoMetadata:
        """@brief Look up repository metadata.

        @param name Repository identifier formatted as `owner/repo`.
        @return Metadata describing the repository.
        @throws RepositoryError When the repository cannot be resolved.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_star_events(self, repo: RepoMetadata) -> list[StarEvent]:
        """@brief Retrieve every star event of a repository, oldest first.

        @param repo Metadata previously returned by `resolve_repository`.
        @return Star events in chronological order.
        @throws RepositoryError With kind `TOO_MANY_STARS` when the repository
        exceeds the enumeration limit, or another kind on retrieval failure.
        """
        raise NotImplementedError
