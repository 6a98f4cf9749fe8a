from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TimeSeries(BaseModel):
    """@brief Plot-ready star history: instants on X, cumulative rank on Y.

    @details Built per request by `build_series` (`app/core/series.py`) and
    consumed by the SVG renderer (`app/core/chart.py`) and the details page
    (`app/services/details.py`).

    @note Validation rules:
    both sequences must have the same length. Ordering is not re-checked;
    star sources are trusted to deliver events chronologically.
    """

    model_config = ConfigDict(frozen=True)

    x_values: tuple[datetime, ...] = Field(
        ..., description="Instants of the plotted points"
    )
    y_values: tuple[float, ...] = Field(
        ..., description="Cumulative star rank at each instant"
    )

    @model_validator(mode="after")
    def validate_lengths(self) -> "TimeSeries":
        """@brief Ensure X and Y describe the same number of points."""
        if len(self.x_values) != len(self.y_values):
            raise ValueError("TimeSeries x_values and y_values must have equal length.")
        return self

    def __len__(self) -> int:
        return len(self.x_values)

    def points(self) -> list[tuple[datetime, float]]:
        """@brief Return the series as `(x, y)` pairs."""
        return list(zip(self.x_values, self.y_values))
