from pydantic import BaseModel


class Metrics(BaseModel):
    avg: float
    p95: float


class HealthCheckResponse(BaseModel):
    chart_latency_ms: Metrics
    details_latency_ms: Metrics
    cache_backend: str
