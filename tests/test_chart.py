import xml.etree.ElementTree as ET
from datetime import datetime, timedelta, timezone

import pytest

from app.core.chart import (
    CACHE_MAX_AGE_SECONDS,
    SERIES_ELEMENT_ID,
    SVG_CONTENT_TYPE,
    ChartSpec,
    build_figure,
    chart_headers,
    error_svg,
    int_value_formatter,
    render_chart,
)
from app.core.series import build_series
from app.github.client import TOO_MANY_STARS_MESSAGE
from app.schemas.star_event import StarEvent

_SVG_NS = "{http://www.w3.org/2000/svg}"
_START = datetime(2020, 5, 4, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0"), (15, "15"), (3.0, "3"), (12.7, "13"), (1999.4, "1999"), (-0.2, "0")],
)
def test_int_value_formatter_never_shows_fractions(value: float, expected: str):
    assert int_value_formatter(value) == expected


def test_chart_spec_defaults_match_chart_style():
    spec = ChartSpec()

    assert spec.x_label == "Time"
    assert spec.y_label == "Stargazers"
    assert spec.series_color == (129, 199, 239)
    assert spec.series_width == 2.0
    assert spec.y_formatter is int_value_formatter


def test_render_chart_produces_svg_with_single_series():
    events = [StarEvent(starred_at=_START + timedelta(hours=i)) for i in range(3)]

    content = render_chart(build_series(events))

    root = ET.fromstring(content)
    assert root.tag == f"{_SVG_NS}svg"
    series_groups = [
        element
        for element in root.iter()
        if element.get("id") == SERIES_ELEMENT_ID
    ]
    assert len(series_groups) == 1
    assert series_groups[0].find(f".//{_SVG_NS}path") is not None
    assert b"Stargazers" in content
    assert b"Time" in content


def test_render_chart_handles_padded_empty_series():
    content = render_chart(build_series([]))

    root = ET.fromstring(content)
    assert root.tag == f"{_SVG_NS}svg"


def test_error_svg_has_fixed_canvas_and_red_message():
    content = error_svg(TOO_MANY_STARS_MESSAGE)

    root = ET.fromstring(content)
    assert root.tag == f"{_SVG_NS}svg"
    assert root.get("width") == "1024"
    assert root.get("height") == "50"

    text = root.find(f"{_SVG_NS}text")
    assert text is not None
    assert text.text == TOO_MANY_STARS_MESSAGE
    assert text.get("fill") == "red"
    assert (text.get("x"), text.get("y")) == ("100", "20")
    assert TOO_MANY_STARS_MESSAGE.encode("utf-8") in content


def test_error_svg_escapes_markup_and_is_deterministic():
    message = "limit <40000> & beyond"

    first = error_svg(message)

    assert first == error_svg(message)
    assert ET.fromstring(first).find(f"{_SVG_NS}text").text == message


def test_chart_headers_advertise_svg_and_public_cache():
    now = datetime(2026, 10, 19, 8, 30, 5, tzinfo=timezone.utc)

    headers = chart_headers(now)

    assert headers["content-type"] == SVG_CONTENT_TYPE
    assert headers["cache-control"] == f"public, max-age={CACHE_MAX_AGE_SECONDS}"
    assert headers["date"] == "Mon, 19 Oct 2026 08:30:05 GMT"
    assert headers["expires"] == headers["date"]


def test_build_figure_uses_whole_number_y_ticks_for_small_series():
    figure = build_figure(build_series([]))
    axes = figure.axes[0]

    low, high = axes.get_ylim()
    ticks = [tick for tick in axes.get_yticks() if low <= tick <= high]
    labels = [int_value_formatter(tick) for tick in ticks]

    assert all(float(tick).is_integer() for tick in ticks)
    assert len(labels) == len(set(labels))
    assert {"0", "1"} <= set(labels)
