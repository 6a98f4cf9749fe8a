import math

from fastapi import HTTPException, status

from app.database.latency import LatencyRecord
from app.schemas.healthcheck import HealthCheckResponse, Metrics
from app.utils.env import get_cache_backend


class HealthCheckService:
    def __init__(self, latency_record: LatencyRecord | None = None) -> None:
        """@brief Initialize healthcheck service dependencies.

        @param latency_record Optional latency repository implementation.
        """
        self._latency_record = latency_record or LatencyRecord()

    @staticmethod
    def _summarize(latencies: list[float]) -> Metrics:
        """@brief Summarize samples as average and nearest-rank P95.

        @param latencies Latency samples in milliseconds.
        @return Metrics object. Both values are 0.0 when there are no samples.
        """
        if not latencies:
            return Metrics(avg=0.0, p95=0.0)

        ordered = sorted(latencies)
        p95_index = max(1, math.ceil(0.95 * len(ordered))) - 1
        return Metrics(avg=sum(ordered) / len(ordered), p95=ordered[p95_index])

    def healthcheck(self) -> HealthCheckResponse:
        """@brief Build healthcheck response from Redis latency lists.

        @return HealthCheckResponse with chart and details latency metrics.
        @throws HTTPException HTTP 503 when Redis cannot be read.
        """
        try:
            chart_latencies = self._latency_record.get_latencies("chart")
            details_latencies = self._latency_record.get_latencies("details")
        except Exception as exc:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Telemetry backend unavailable for healthcheck.",
            ) from exc

        return HealthCheckResponse(
            chart_latency_ms=self._summarize(chart_latencies),
            details_latency_ms=self._summarize(details_latencies),
            cache_backend=get_cache_backend(),
        )
