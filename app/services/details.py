from html import escape

import plotly.express as px
import plotly.graph_objects as go

from app.core.series import build_series
from app.schemas.repo_metadata import RepoMetadata
from app.schemas.time_series import TimeSeries
from app.services.star_history import StarHistoryService
from app.utils.error import ErrorKind, RepositoryError

SERIES_COLOR = "rgb(129, 199, 239)"


class RepositoryDetailsService(StarHistoryService):
    @staticmethod
    def _title(metadata: RepoMetadata) -> str:
        """@brief Build the chart title from repository details.

        @param metadata Resolved repository metadata.
        @return Title with name, star count, and optional description.
        """
        title = f"{metadata.full_name} ({metadata.stargazers_count} stars)"
        if metadata.description:
            title = f"{title}<br><sup>{escape(metadata.description)}</sup>"
        return title

    @classmethod
    def render_series(cls, metadata: RepoMetadata, series: TimeSeries) -> str:
        """@brief Render an interactive Plotly line chart of the star history.

        @param metadata Repository details used in the title.
        @param series Star history points to be visualized.
        @return Full HTML document containing the rendered chart.
        """
        figure = px.line(
            x=list(series.x_values),
            y=list(series.y_values),
            labels={"x": "Time", "y": "Stargazers"},
            title=cls._title(metadata),
        )
        figure.update_traces(
            line={"color": SERIES_COLOR, "width": 2},
            hovertemplate="Time: %{x}<br>Stargazers: %{y:.0f}<extra></extra>",
        )
        figure.update_yaxes(tickformat=".0f", rangemode="nonnegative")
        figure.update_layout(template="plotly_white")

        return figure.to_html(full_html=True, include_plotlyjs="cdn")

    @classmethod
    def render_message(cls, metadata: RepoMetadata, message: str) -> str:
        """@brief Render an empty chart carrying an error message.

        @param metadata Repository details used in the title.
        @param message Text shown in red where the chart would be.
        @return Full HTML document.
        """
        figure = go.Figure()
        figure.add_annotation(
            text=message,
            showarrow=False,
            font={"color": "red"},
            xref="paper",
            yref="paper",
            x=0.5,
            y=0.5,
        )
        figure.update_xaxes(visible=False)
        figure.update_yaxes(visible=False)
        figure.update_layout(title=cls._title(metadata), template="plotly_white")

        return figure.to_html(full_html=True, include_plotlyjs="cdn")

    def render_details(self, owner: str, repo: str) -> str:
        """@brief Orchestrate lookup and rendering of the details page.

        @param owner Repository owner path segment.
        @param repo Repository name path segment.
        @return Full HTML document.
        @throws PlainTextHTTPException HTTP 400 when the repository cannot be
        resolved, HTTP 503 when its stars cannot be retrieved.
        """
        name = f"{owner}/{repo}"
        tracer = self._tracer.with_fields(repo=name)

        with tracer.span("details"):
            metadata = self._resolve(name)
            try:
                events = self._collect_stars(metadata, tracer)
            except RepositoryError as exc:
                if exc.kind is not ErrorKind.TOO_MANY_STARS:
                    raise
                return self.render_message(metadata, exc.message)

            return self.render_series(metadata, build_series(events))
