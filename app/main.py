import logging

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from app.api.healthcheck import router as healthcheck_router
from app.api.repositories import router as repositories_router
from app.middleware.date import add_date_header
from app.middleware.latency import build_latency_record, track_request_latency
from app.utils.env import get_log_level
from app.utils.error import PlainTextHTTPException

logging.basicConfig(
    level=get_log_level(),
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="Star History Charts")
app.state.latency_record = build_latency_record()
app.middleware("http")(track_request_latency)
app.middleware("http")(add_date_header)
app.include_router(healthcheck_router)
app.include_router(repositories_router)


@app.get("/")
def root() -> dict[str, str]:
    return {"message": "Star History Charts API"}


@app.exception_handler(PlainTextHTTPException)
async def handle_plain_text_error(
    _request: Request, exc: PlainTextHTTPException
) -> PlainTextResponse:
    """@brief Write repository lookup failures as plain-text bodies.

    @param _request Incoming request associated with the failure.
    @param exc Raised exception carrying status code and message.
    @return PlainTextResponse whose body is the raw error message.
    """
    return PlainTextResponse(content=str(exc.detail), status_code=exc.status_code)
