from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class RepoMetadata(BaseModel):
    """@brief Subset of the GitHub repository payload used by the service."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    full_name: str = Field(..., description="Repository name as `owner/repo`")
    stargazers_count: int = Field(
        default=0, ge=0, description="Current number of stargazers"
    )
    description: str | None = Field(default=None)
    html_url: str | None = Field(default=None)
    created_at: datetime | None = Field(default=None)
