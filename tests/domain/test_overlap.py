# tests/domain/test_overlap.py
from datetime import date

import pytest

from api.application.services.overlap_service import check_overlap, check_purchase_overlap, proposed_period
from api.domain.period.entities import ExistingPeriod, PeriodKind


def _membership(start: date, end: date) -> ExistingPeriod:
    return ExistingPeriod(PeriodKind.MEMBERSHIP, start, end)


def _locker(start: date, end: date) -> ExistingPeriod:
    return ExistingPeriod(PeriodKind.LOCKER, start, end)


def test_period_rejects_end_before_start():
    with pytest.raises(ValueError, match="before start"):
        _membership(date(2025, 4, 1), date(2025, 1, 1))


def test_back_to_back_periods_do_not_overlap():
    existing = [_membership(date(2025, 1, 15), date(2025, 4, 15))]
    result = check_overlap(existing, _membership(date(2025, 4, 15), date(2025, 7, 15)))
    assert not result.has_overlap
    assert result.conflicting_period is None


def test_shared_day_overlaps():
    existing = [_membership(date(2025, 1, 15), date(2025, 4, 15))]
    result = check_overlap(existing, _membership(date(2025, 4, 14), date(2025, 7, 14)))
    assert result.has_overlap
    assert result.conflicting_period == existing[0]


def test_overlap_is_symmetric():
    a = _membership(date(2025, 1, 1), date(2025, 4, 1))
    b = _membership(date(2025, 3, 1), date(2025, 6, 1))
    assert check_overlap([a], b).has_overlap
    assert check_overlap([b], a).has_overlap


def test_kinds_never_conflict():
    existing = [_locker(date(2025, 1, 1), date(2025, 4, 1))]
    assert not check_overlap(existing, _membership(date(2025, 1, 1), date(2025, 4, 1))).has_overlap


def test_first_conflict_in_start_order():
    later = _membership(date(2025, 3, 1), date(2025, 6, 1))
    earlier = _membership(date(2025, 1, 1), date(2025, 4, 1))
    result = check_overlap([later, earlier], _membership(date(2025, 2, 1), date(2025, 5, 1)))
    assert result.conflicting_period == earlier


def test_empty_history_never_overlaps():
    assert not check_overlap([], _membership(date(2025, 1, 1), date(2025, 4, 1))).has_overlap


def test_proposed_period_spans_calendar_months():
    period = proposed_period(PeriodKind.MEMBERSHIP, date(2025, 1, 31), 1)
    assert period.start_date == date(2025, 1, 31)
    assert period.end_date == date(2025, 2, 28)


def test_purchase_checks_locker_after_membership():
    existing = [_locker(date(2025, 1, 1), date(2025, 4, 1))]
    membership = _membership(date(2025, 4, 1), date(2025, 7, 1))
    locker = _locker(date(2025, 3, 1), date(2025, 6, 1))

    assert not check_purchase_overlap(existing, membership).has_overlap
    result = check_purchase_overlap(existing, membership, locker)
    assert result.has_overlap
    assert result.conflicting_period == existing[0]


def test_empty_period_overlaps_nothing():
    empty = _membership(date(2025, 2, 1), date(2025, 2, 1))
    held = _membership(date(2025, 1, 1), date(2025, 4, 1))
    assert empty.is_empty
    assert not empty.overlaps(held)
    assert not held.overlaps(empty)
    assert not check_overlap([held], empty).has_overlap
