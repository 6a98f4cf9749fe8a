import logging
import time

from fastapi import Request
from starlette.concurrency import run_in_threadpool

from app.database.latency import LatencyRecord, LatencyTarget
from app.utils.env import get_latency_tracking_enabled

_LOGGER = logging.getLogger(__name__)


def _target_from_path(path: str) -> LatencyTarget | None:
    """@brief Map an HTTP path to a latency route group.

    @param path Request path (e.g., `/owner/repo.svg` or `/owner/repo`).
    @return `chart` for SVG chart routes, `details` for repository pages,
    otherwise `None`.
    """
    segments = [segment for segment in path.split("/") if segment]
    if len(segments) != 2:
        return None
    if segments[1].endswith(".svg"):
        return "chart"
    return "details"


def build_latency_record() -> LatencyRecord | None:
    """@brief Create the latency record shared by every request.

    @return LatencyRecord, or None when `LATENCY_TRACKING` disables it.
    """
    if not get_latency_tracking_enabled():
        return None
    return LatencyRecord()


async def track_request_latency(request: Request, call_next):
    """@brief FastAPI middleware that measures and stores request latency.

    @param request Incoming FastAPI request object.
    @param call_next FastAPI middleware callback used to continue request handling.
    @return Response produced by downstream handlers.

    @details
    Only successful (`2xx`) repository responses are recorded, using the
    record stored on `app.state.latency_record`. The blocking Redis write
    runs in the threadpool; failures are logged and never affect the response.
    """
    start_time = time.perf_counter()
    response = await call_next(request)

    record: LatencyRecord | None = getattr(request.app.state, "latency_record", None)
    target = _target_from_path(request.url.path)
    if record is not None and target is not None and 200 <= response.status_code < 300:
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0
        try:
            await run_in_threadpool(record.push_latency, target, elapsed_ms)
        except Exception as exc:
            _LOGGER.warning("Failed to store latency in Redis: %s", exc)

    return response
