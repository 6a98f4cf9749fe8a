from datetime import datetime, timedelta, timezone

import pytest

from app.core.series import build_series
from app.schemas.star_event import StarEvent
from app.schemas.time_series import TimeSeries

_START = datetime(2021, 3, 1, 12, 0, tzinfo=timezone.utc)
_NOW = datetime(2026, 10, 19, 8, 30, tzinfo=timezone.utc)


def _events(count: int) -> list[StarEvent]:
    return [StarEvent(starred_at=_START + timedelta(days=i)) for i in range(count)]


@pytest.mark.parametrize("count", [2, 3, 17])
def test_build_series_maps_each_event_to_its_rank(count: int):
    events = _events(count)

    series = build_series(events, now=_NOW)

    assert len(series) == count
    assert series.y_values == tuple(float(i) for i in range(count))
    assert series.x_values == tuple(event.starred_at for event in events)


def test_build_series_pads_single_event_with_synthetic_point():
    events = _events(1)

    series = build_series(events, now=_NOW)

    assert series.points() == [(_START, 0.0), (_NOW, 1.0)]


def test_build_series_pads_empty_input_to_two_points():
    series = build_series([], now=_NOW)

    assert len(series) == 2
    assert series.y_values == (0.0, 1.0)
    assert series.x_values == (_NOW, _NOW)


def test_build_series_defaults_synthetic_point_to_current_time():
    before = datetime.now(timezone.utc)
    series = build_series([])
    after = datetime.now(timezone.utc)

    assert before <= series.x_values[-1] <= after
    assert series.x_values[-1].tzinfo is not None


def test_build_series_keeps_input_order():
    """@brief The builder trusts upstream order and never re-sorts."""
    late = StarEvent(starred_at=_START + timedelta(days=5))
    early = StarEvent(starred_at=_START)

    series = build_series([late, early], now=_NOW)

    assert series.x_values == (late.starred_at, early.starred_at)
    assert series.y_values == (0.0, 1.0)


def test_star_event_assumes_utc_for_naive_timestamps():
    event = StarEvent(starred_at=datetime(2022, 1, 1, 0, 0))
    assert event.starred_at.tzinfo == timezone.utc


def test_time_series_rejects_mismatched_lengths():
    with pytest.raises(ValueError):
        TimeSeries(x_values=(_START, _NOW), y_values=(0.0,))
