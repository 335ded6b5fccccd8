"""
Historical date windows.

Given a window of interest (e.g. "Jan 1-10") and a reference date, find the
same calendar window in past years, most recent first. The first window
always ends strictly before the reference date, so its weather is already
in the archive.

Leap days: a window starting on Feb 29 starts on Feb 28 in non-leap years.
Each window start is derived from the original month/day, so leap years get
Feb 29 back. Window length in days never changes, so a window that crosses
Feb 29 covers one calendar day less in leap years.
"""

from __future__ import annotations

from datetime import date, timedelta

from region_scout.datasources.weather.models import DateRange


def _in_year(day: date, year: int) -> date:
    """``day`` moved to ``year``; Feb 29 becomes Feb 28 in non-leap years."""
    try:
        return day.replace(year=year)
    except ValueError:
        return day.replace(year=year, day=28)


def roll_date_windows(date_range: DateRange, reference: date, count: int = 1) -> list[DateRange]:
    """
    Collect past windows with the same month/day and length as ``date_range``.

    Args:
        date_range: Window of interest; only its month/day and length matter.
        reference: Windows must end strictly before this date.
        count: Number of windows (at least one is always returned). Windows
            never reach back before year 1, which caps the count.

    Returns:
        ``max(1, count)`` windows (fewer only at year 1), each one calendar year before the previous.
    """
    duration = timedelta(days=date_range.days)

    year = reference.year
    while reference <= _in_year(date_range.start, year) + duration:
        year -= 1

    windows = []
    for offset in range(min(max(1, count), year)):
        start = _in_year(date_range.start, year - offset)
        windows.append(DateRange(start, start + duration))
    return windows
