# api/domain/period/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


class PeriodKind(StrEnum):
    MEMBERSHIP = "membership"
    LOCKER = "locker"


@dataclass(frozen=True)
class ExistingPeriod:
    """Half-open [start_date, end_date). end_date is the first day NOT covered."""

    kind: PeriodKind
    start_date: date
    end_date: date

    def __post_init__(self) -> None:
        if self.end_date < self.start_date:
            raise ValueError(
                f"Period end {self.end_date.isoformat()} is before start {self.start_date.isoformat()}"
            )

    @property
    def is_empty(self) -> bool:
        return self.start_date == self.end_date

    def overlaps(self, other: ExistingPeriod) -> bool:
        """Same kind only. s1 < e2 and s2 < e1. An empty period shares no day with anything."""
        if self.kind != other.kind or self.is_empty or other.is_empty:
            return False
        return self.start_date < other.end_date and other.start_date < self.end_date


@dataclass(frozen=True)
class OverlapResult:
    has_overlap: bool
    conflicting_period: ExistingPeriod | None = None
