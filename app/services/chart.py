from app.core.chart import ChartSpec, error_svg, render_chart
from app.core.series import build_series
from app.github.source import StarSource
from app.services.star_history import StarHistoryService
from app.utils.error import ErrorKind, RepositoryError
from app.utils.trace import Tracer


class RepositoryChartService(StarHistoryService):
    def __init__(
        self, source: StarSource, tracer: Tracer, spec: ChartSpec | None = None
    ) -> None:
        """@brief Initialize chart rendering dependencies.

        @param source Star source resolving repositories and star events.
        @param tracer Tracer receiving request logs and timing spans.
        @param spec Optional chart styling. Defaults to `ChartSpec()`.
        """
        super().__init__(source, tracer)
        self._spec = spec or ChartSpec()

    def render_chart(self, owner: str, repo: str) -> bytes:
        """@brief Orchestrate lookup, series building, and SVG rendering.

        @param owner Repository owner path segment.
        @param repo Repository name path segment.
        @return SVG bytes: the star history chart, the error graphic when the
        repository has too many stars, or an empty body if rendering fails.
        @throws PlainTextHTTPException HTTP 400 when the repository cannot be
        resolved, HTTP 503 when its stars cannot be retrieved.
        """
        name = f"{owner}/{repo}"
        tracer = self._tracer.with_fields(repo=name)

        with tracer.span("collect_stars"):
            metadata = self._resolve(name)
            try:
                events = self._collect_stars(metadata, tracer)
            except RepositoryError as exc:
                if exc.kind is not ErrorKind.TOO_MANY_STARS:
                    raise
                tracer.info("rendering error graphic: %s", exc.message)
                return error_svg(exc.message)

        series = build_series(events)

        with tracer.span("chart"):
            try:
                return render_chart(series, self._spec)
            except Exception as exc:
                tracer.error("failed to render graph", exc=exc)
                return b""
