import logging
from datetime import datetime, timezone
from typing import Sequence

from app.schemas.star_event import StarEvent
from app.schemas.time_series import TimeSeries

_LOGGER = logging.getLogger(__name__)

MIN_SERIES_POINTS = 2


def build_series(
    events: Sequence[StarEvent], now: datetime | None = None
) -> TimeSeries:
    """@brief Convert ordered star events into a cumulative star series.

    @details The i-th event becomes the point `(starred_at, i)`. Series with
    fewer than two points are padded so that the renderer always has a line
    to draw: the last point becomes `(now, 1)`, preceded by `(now, 0)` when
    there were no events at all. Those synthetic points exist for rendering
    only and never leave this function as star events.

    @param events Star events in chronological order. Order is not checked.
    @param now Instant used for synthetic points. Defaults to current UTC time.
    @return TimeSeries with one point per event, or two padded points.
    """
    x_values = [event.starred_at for event in events]
    y_values = [float(rank) for rank in range(len(x_values))]

    if len(x_values) < MIN_SERIES_POINTS:
        _LOGGER.info("not enough results, adding some fake ones")
        now = now or datetime.now(timezone.utc)
        if not x_values:
            x_values.append(now)
            y_values.append(0.0)
        x_values.append(now)
        y_values.append(1.0)

    return TimeSeries(x_values=tuple(x_values), y_values=tuple(y_values))
