import io
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Callable
from xml.sax.saxutils import escape

from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter, MaxNLocator

from app.schemas.time_series import TimeSeries

SVG_CONTENT_TYPE = "image/svg+xml;charset=utf-8"
CACHE_MAX_AGE_SECONDS = 86400
SERIES_ELEMENT_ID = "stargazers"

_ERROR_SVG_TEMPLATE = """<svg xmlns="http://www.w3.org/2000/svg" xmlns:xlink="http://www.w3.org/1999/xlink" width="1024" height="50">
	<text xmlns="http://www.w3.org/2000/svg" y="20" x="100" fill="red">{message}</text>
 </svg>"""

RGB = tuple[int, int, int]


def int_value_formatter(value: float, position: int | None = None) -> str:
    """@brief Format an axis tick as an integer with no decimal places.

    @param value Tick value, possibly fractional.
    @param position Tick index supplied by matplotlib. Unused.
    @return Nearest-integer text, e.g. `12.7` -> `"13"`.
    """
    text = f"{float(value):.0f}"
    return "0" if text == "-0" else text


def _hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


@dataclass(frozen=True)
class ChartSpec:
    """@brief Styling of the star history chart."""

    x_label: str = "Time"
    y_label: str = "Stargazers"
    series_color: RGB = (129, 199, 239)
    series_width: float = 2.0
    axis_color: RGB = (85, 85, 85)
    axis_width: float = 2.0
    width: int = 1024
    height: int = 400
    dpi: int = 100
    y_formatter: Callable[[float, int | None], str] = int_value_formatter


def build_figure(series: TimeSeries, spec: ChartSpec | None = None) -> Figure:
    """@brief Lay out the star series on a standalone matplotlib figure.

    @details Uses a standalone `Figure` instead of pyplot so concurrent
    requests never share plotting state. Y ticks are whole numbers only.

    @param series Points to draw, X as instants and Y as star ranks.
    @param spec Optional styling override. Defaults to `ChartSpec()`.
    @return Figure holding a single axes with the series line.
    """
    spec = spec or ChartSpec()
    figure = Figure(
        figsize=(spec.width / spec.dpi, spec.height / spec.dpi), dpi=spec.dpi
    )
    axes = figure.add_subplot()

    (line,) = axes.plot(
        list(series.x_values),
        list(series.y_values),
        color=_hex(spec.series_color),
        linewidth=spec.series_width,
        linestyle="-",
    )
    line.set_gid(SERIES_ELEMENT_ID)

    axes.set_xlabel(spec.x_label)
    axes.set_ylabel(spec.y_label)
    axes.set_ylim(bottom=0)
    axes.yaxis.set_major_locator(MaxNLocator(integer=True))
    axes.yaxis.set_major_formatter(FuncFormatter(spec.y_formatter))

    for side in ("bottom", "left"):
        axes.spines[side].set_color(_hex(spec.axis_color))
        axes.spines[side].set_linewidth(spec.axis_width)
    for side in ("top", "right"):
        axes.spines[side].set_visible(False)

    return figure


def render_chart(series: TimeSeries, spec: ChartSpec | None = None) -> bytes:
    """@brief Render a star series as an SVG line chart.

    @param series Points to draw, X as instants and Y as star ranks.
    @param spec Optional styling override. Defaults to `ChartSpec()`.
    @return SVG document bytes.
    """
    figure = build_figure(series, spec)
    buffer = io.BytesIO()
    figure.savefig(buffer, format="svg", metadata={"Date": None})
    return buffer.getvalue()


def error_svg(message: str) -> bytes:
    """@brief Render a one-line error graphic in place of a chart.

    @param message Error text shown in red. Only `&`, `<` and `>` are escaped.
    @return 1024x50 SVG document bytes.
    """
    return _ERROR_SVG_TEMPLATE.format(message=escape(message)).encode("utf-8")


def chart_headers(now: datetime | None = None) -> dict[str, str]:
    """@brief Build response headers sent with every rendered chart.

    @details `expires` is set to the same instant as `date` even though
    `max-age` allows a day of caching; clients relying on `expires` alone
    will revalidate immediately.

    @param now Response instant. Defaults to current UTC time.
    @return Header mapping for the SVG response.
    """
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    timestamp = format_datetime(now, usegmt=True)
    return {
        "content-type": SVG_CONTENT_TYPE,
        "cache-control": f"public, max-age={CACHE_MAX_AGE_SECONDS}",
        "date": timestamp,
        "expires": timestamp,
    }
