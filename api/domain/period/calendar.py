# api/domain/period/calendar.py
from __future__ import annotations

import calendar
from datetime import date


def add_months(start: date, months: int) -> date:
    """Calendar-month arithmetic. Day is clamped to the target month's length.

    2025-01-31 + 1 -> 2025-02-28, 2024-01-31 + 1 -> 2024-02-29,
    2025-11-15 + 3 -> 2026-02-15.
    """
    if months < 0:
        raise ValueError(f"months must be >= 0, got {months}")
    index = start.year * 12 + (start.month - 1) + months
    year, month0 = divmod(index, 12)
    month = month0 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
