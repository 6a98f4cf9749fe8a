from app.schemas.healthcheck import HealthCheckResponse, Metrics
from app.schemas.repo_metadata import RepoMetadata
from app.schemas.star_event import StarEvent
from app.schemas.time_series import TimeSeries

__all__ = [
    "HealthCheckResponse",
    "Metrics",
    "RepoMetadata",
    "StarEvent",
    "TimeSeries",
]
