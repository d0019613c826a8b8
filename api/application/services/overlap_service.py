# api/application/services/overlap_service.py
"""Overlap Checker. Pure function, zero IO.

Half-open intervals: [2025-01-15, 2025-04-15) and [2025-04-15, 2025-07-15)
touch but do not overlap. Membership only conflicts with membership, locker
only with locker.
"""
from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from api.domain.period.calendar import add_months
from api.domain.period.entities import ExistingPeriod, OverlapResult, PeriodKind


def check_overlap(existing: Iterable[ExistingPeriod], proposed: ExistingPeriod) -> OverlapResult:
    """First conflicting period in chronological start order, if any."""
    for period in sorted(existing, key=lambda p: (p.start_date, p.end_date)):
        if period.overlaps(proposed):
            return OverlapResult(has_overlap=True, conflicting_period=period)
    return OverlapResult(has_overlap=False)


def proposed_period(kind: PeriodKind, start: date, months: int) -> ExistingPeriod:
    """[start, start + N calendar months)."""
    return ExistingPeriod(kind=kind, start_date=start, end_date=add_months(start, months))


def check_purchase_overlap(
    existing: Iterable[ExistingPeriod],
    membership: ExistingPeriod,
    locker: ExistingPeriod | None = None,
) -> OverlapResult:
    """Membership first, then locker when the purchase includes one."""
    periods = list(existing)
    result = check_overlap(periods, membership)
    if result.has_overlap or locker is None:
        return result
    return check_overlap(periods, locker)
