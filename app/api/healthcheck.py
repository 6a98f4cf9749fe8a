from fastapi import APIRouter

from app.schemas.healthcheck import HealthCheckResponse
from app.services.healthcheck import HealthCheckService

router = APIRouter(tags=["Health Check"])


@router.get("/healthcheck", response_model=HealthCheckResponse)
def healthcheck() -> HealthCheckResponse:
    """@brief Return latency metrics of the chart and details routes.

    @return HealthCheckResponse with latency metrics and cache backend.
    """
    service = HealthCheckService()
    return service.healthcheck()
