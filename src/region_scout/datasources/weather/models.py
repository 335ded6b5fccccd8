"""Historical weather data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date


@dataclass(frozen=True)
class DateRange:
    """Closed calendar interval ``[start, end]``."""

    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(f"DateRange end {self.end} is before start {self.start}")

    @property
    def days(self) -> int:
        """``end - start`` in days (0 for a single-day range)."""
        return (self.end - self.start).days


@dataclass
class DailyWeather:
    """Daily temperature extremes in degrees Celsius."""

    date: date
    temperature_max: float
    temperature_min: float

    @property
    def temperature_average(self) -> float:
        return (self.temperature_max + self.temperature_min) / 2


@dataclass
class WeatherWindow:
    """One historical window and its daily weather."""

    date_range: DateRange
    days: list[DailyWeather] = field(default_factory=list)
