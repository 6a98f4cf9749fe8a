import logging
import time
from contextlib import contextmanager
from typing import Any, Iterator


class Tracer:
    """@brief Logger wrapper carrying bound fields and timed spans.

    @details Handlers receive a tracer through dependency injection instead of
    reaching for a module logger, so tests can swap in `NoopTracer`.
    """

    def __init__(
        self,
        logger: logging.Logger | None = None,
        fields: dict[str, Any] | None = None,
    ) -> None:
        """@brief Initialize the tracer.

        @param logger Logger receiving the records. Defaults to this module's.
        @param fields Context fields prefixed to every message.
        """
        self._logger = logger or logging.getLogger(__name__)
        self._fields = dict(fields or {})

    def with_fields(self, **fields: Any) -> "Tracer":
        """@brief Return a tracer with additional bound context fields.

        @param fields Key/value pairs to attach (e.g. `repo="owner/name"`).
        @return New tracer sharing the same logger.
        """
        return type(self)(self._logger, {**self._fields, **fields})

    def _format(self, message: str) -> str:
        if not self._fields:
            return message
        context = " ".join(f"{key}={value}" for key, value in self._fields.items())
        return f"[{context}] {message}"

    def info(self, message: str, *args: Any) -> None:
        self._logger.info(self._format(message), *args)

    def warning(self, message: str, *args: Any) -> None:
        self._logger.warning(self._format(message), *args)

    def error(
        self, message: str, *args: Any, exc: BaseException | None = None
    ) -> None:
        """@brief Log an error, appending the exception text when provided."""
        if exc is not None:
            self._logger.error(self._format(f"{message}: %s"), *args, exc)
            return
        self._logger.error(self._format(message), *args)

    @contextmanager
    def span(self, name: str) -> Iterator[None]:
        """@brief Time a block of work and log its outcome.

        @param name Span name used in the log record.
        @throws Exception Re-raises whatever the wrapped block raises.
        """
        start_time = time.perf_counter()
        try:
            yield
        except Exception as exc:
            elapsed_ms = (time.perf_counter() - start_time) * 1000.0
            self.error("%s failed after %.2fms", name, elapsed_ms, exc=exc)
            raise
        elapsed_ms = (time.perf_counter() - start_time) * 1000.0
        self.info("%s completed in %.2fms", name, elapsed_ms)


class NoopTracer(Tracer):
    """@brief Tracer that drops every record."""

    def info(self, message: str, *args: Any) -> None:
        return None

    def warning(self, message: str, *args: Any) -> None:
        return None

    def error(
        self, message: str, *args: Any, exc: BaseException | None = None
    ) -> None:
        return None

    @contextmanager
    def span(self, name: str) -> Iterator[None]:
        yield


def get_tracer() -> Tracer:
    """@brief Resolve the tracer used by repository handlers.

    @return Tracer writing to the `app.repository` logger.
    """
    return Tracer(logging.getLogger("app.repository"))
