# api/application/dtos/overlap_dto.py
from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from api.domain.period.entities import ExistingPeriod, OverlapResult, PeriodKind


class PeriodDTO(BaseModel):
    kind: PeriodKind
    start_date: date
    end_date: date

    def to_domain(self) -> ExistingPeriod:
        return ExistingPeriod(kind=self.kind, start_date=self.start_date, end_date=self.end_date)

    @classmethod
    def from_domain(cls, period: ExistingPeriod) -> PeriodDTO:
        return cls(kind=period.kind, start_date=period.start_date, end_date=period.end_date)


class OverlapRequestDTO(BaseModel):
    existing: list[PeriodDTO]
    proposed: PeriodDTO


class OverlapResultDTO(BaseModel):
    has_overlap: bool
    conflicting_period: PeriodDTO | None

    @classmethod
    def from_domain(cls, result: OverlapResult) -> OverlapResultDTO:
        return cls(
            has_overlap=result.has_overlap,
            conflicting_period=PeriodDTO.from_domain(result.conflicting_period)
            if result.conflicting_period
            else None,
        )
