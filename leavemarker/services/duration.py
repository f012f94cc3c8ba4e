from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

HALF_DAY = 0.5

_SATURDAY = 5


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every calendar date from start_date to end_date inclusive."""
    current = start_date
    one_day = timedelta(days=1)
    while current <= end_date:
        yield current
        current += one_day


def is_weekend(day: date) -> bool:
    return day.weekday() >= _SATURDAY


def calculate_leave_days(start_date: date, end_date: date, is_half_day: bool = False) -> float:
    """Number of leave days charged for a date range.

    Only Monday to Friday count. A half-day application is always 0.5
    regardless of the range; callers validate that it spans a single date.
    """
    if is_half_day:
        return HALF_DAY
    return float(sum(1 for day in iter_dates(start_date, end_date) if not is_weekend(day)))
