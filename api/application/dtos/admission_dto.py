# api/application/dtos/admission_dto.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from api.domain.admission.entities import AdmissionOutcome, PaymentRequest, Reservation
from api.domain.admission.enums import AgreementKind

from .eligibility_dto import SelectionDTO, UserDTO
from .overlap_dto import PeriodDTO


class AdmissionRequestDTO(BaseModel):
    user: UserDTO
    company_id: str = Field(min_length=1)
    selection: SelectionDTO
    accepted_agreements: list[AgreementKind] = Field(default_factory=list)
    whitelist_verified: bool = False


class PaymentRequestDTO(BaseModel):
    reservation_id: str
    order_id: str
    product_id: str
    include_locker: bool
    total_amount: str  # Decimal serialized as string
    allowed_categories: list[str]

    @classmethod
    def from_domain(cls, request: PaymentRequest) -> PaymentRequestDTO:
        return cls(
            reservation_id=request.reservation_id,
            order_id=request.order_id,
            product_id=request.selection.product_id,
            include_locker=request.selection.include_locker,
            total_amount=str(request.total_amount),
            allowed_categories=sorted(c.value for c in request.verdict.allowed_categories),
        )


class AdmissionOutcomeDTO(BaseModel):
    admitted: bool
    reason_code: str | None
    reason_message: str | None
    payment_request: PaymentRequestDTO | None
    conflicting_period: PeriodDTO | None

    @classmethod
    def from_domain(cls, outcome: AdmissionOutcome) -> AdmissionOutcomeDTO:
        return cls(
            admitted=outcome.admitted,
            reason_code=outcome.reason_code.value if outcome.reason_code else None,
            reason_message=outcome.reason_message,
            payment_request=PaymentRequestDTO.from_domain(outcome.payment_request)
            if outcome.payment_request
            else None,
            conflicting_period=PeriodDTO.from_domain(outcome.conflicting_period)
            if outcome.conflicting_period
            else None,
        )


class ReservationDTO(BaseModel):
    id: str
    user_id: str
    company_id: str
    product_id: str
    category: str
    include_locker: bool
    total_amount: str
    membership_period: PeriodDTO
    locker_period: PeriodDTO | None
    status: str
    created_at: datetime

    @classmethod
    def from_domain(cls, reservation: Reservation) -> ReservationDTO:
        return cls(
            id=reservation.id,
            user_id=reservation.user_id,
            company_id=reservation.company_id,
            product_id=reservation.product_id,
            category=reservation.category.value,
            include_locker=reservation.include_locker,
            total_amount=str(reservation.total_amount),
            membership_period=PeriodDTO.from_domain(reservation.membership_period),
            locker_period=PeriodDTO.from_domain(reservation.locker_period) if reservation.locker_period else None,
            status=reservation.status.value,
            created_at=reservation.created_at,
        )
