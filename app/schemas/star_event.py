from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StarEvent(BaseModel):
    """@brief Instant at which one account starred a repository.

    @details Produced by star sources (`app/github/client.py`) in ascending
    order and consumed by the series builder (`app/core/series.py`).

    @note Naive datetimes are interpreted as UTC.
    """

    model_config = ConfigDict(frozen=True)

    starred_at: datetime = Field(
        ..., description="Time-zoned instant the repository was starred"
    )

    @field_validator("starred_at")
    @classmethod
    def ensure_timezone(cls, starred_at: datetime) -> datetime:
        """@brief Attach UTC to naive timestamps."""
        if starred_at.tzinfo is None:
            return starred_at.replace(tzinfo=timezone.utc)
        return starred_at
