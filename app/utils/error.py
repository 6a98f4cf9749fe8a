from enum import Enum

from fastapi import HTTPException


class ErrorKind(Enum):
    """@brief Failure categories reported by a star source."""

    NOT_FOUND = "not_found"
    TOO_MANY_STARS = "too_many_stars"
    TRANSIENT = "transient"


class RepositoryError(Exception):
    """@brief Tagged failure raised while looking up a repository or its stars.

    @details Callers branch on `kind`; the message is only meant for display.
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        """@brief Build a repository error.

        @param kind Failure category.
        @param message Human readable description shown to clients.
        """
        super().__init__(message)
        self.kind = kind

    @property
    def message(self) -> str:
        """@brief Return the display message of the error."""
        return str(self)


class PlainTextHTTPException(HTTPException):
    """@brief HTTPException whose detail is written as a `text/plain` body."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(status_code=status_code, detail=message)
