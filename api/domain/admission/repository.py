# api/domain/admission/repository.py
from __future__ import annotations

from decimal import Decimal
from typing import Protocol

from api.domain.company.enums import AdmissionMode, ProductCategory
from api.domain.period.entities import ExistingPeriod
from api.domain.whitelist.value_objects import WhitelistIdentity

from .entities import Reservation, ReservationResult


class AdmissionRepository(Protocol):
    """Storage side of the admission act. Every write is an atomic conditional update."""

    def list_periods(self, user_id: str) -> list[ExistingPeriod]: ...

    def reserve(
        self,
        *,
        user_id: str,
        company_id: str,
        mode: AdmissionMode,
        product_id: str,
        category: ProductCategory,
        include_locker: bool,
        total_amount: Decimal,
        membership_period: ExistingPeriod,
        locker_period: ExistingPeriod | None,
        consume_whitelist: WhitelistIdentity | None = None,
    ) -> ReservationResult: ...

    def cancel(self, reservation_id: str) -> Reservation: ...

    def complete(self, reservation_id: str) -> Reservation: ...
