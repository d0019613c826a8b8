# api/domain/admission/entities.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal

from api.domain.company.entities import Company
from api.domain.company.enums import ProductCategory
from api.domain.member.entities import User
from api.domain.period.entities import ExistingPeriod

from .config import AdmissionConfig
from .enums import AgreementKind, ReasonCode, ReservationStatus
from .messages import message_for


@dataclass(frozen=True)
class Selection:
    """Candidate purchase. Carries the raw chosen ids; SelectionPresent enforces exactly one."""

    product_ids: tuple[str, ...] = ()
    include_locker: bool = False

    @property
    def is_single(self) -> bool:
        return len(self.product_ids) == 1

    @property
    def product_id(self) -> str:
        if not self.is_single:
            raise ValueError(f"Selection holds {len(self.product_ids)} products, expected exactly 1")
        return self.product_ids[0]


@dataclass(frozen=True)
class GuardResult:
    passed: bool
    reason_code: ReasonCode | None = None
    reason_message: str | None = None

    @classmethod
    def ok(cls) -> GuardResult:
        return cls(passed=True)

    @classmethod
    def fail(cls, code: ReasonCode, message: str | None = None) -> GuardResult:
        return cls(passed=False, reason_code=code, reason_message=message or message_for(code))


@dataclass(frozen=True)
class EligibilityVerdict:
    eligible: bool
    allowed_categories: frozenset[ProductCategory] = frozenset()
    reason_code: ReasonCode | None = None
    reason_message: str | None = None

    @classmethod
    def allow(cls, allowed: frozenset[ProductCategory]) -> EligibilityVerdict:
        return cls(eligible=True, allowed_categories=allowed)

    @classmethod
    def deny(
        cls,
        code: ReasonCode,
        allowed: frozenset[ProductCategory] = frozenset(),
    ) -> EligibilityVerdict:
        return cls(eligible=False, allowed_categories=allowed, reason_code=code, reason_message=message_for(code))


@dataclass(frozen=True)
class GuardContext:
    """Everything the guards read. Assembled by the caller, never mutated."""

    company: Company
    user: User
    selection: Selection
    config: AdmissionConfig
    now: datetime
    allowed_categories: frozenset[ProductCategory] = frozenset()
    whitelist_verified: bool = False
    accepted_agreements: frozenset[AgreementKind] = field(default_factory=frozenset)


@dataclass(frozen=True)
class Reservation:
    """A slot taken at the admission boundary, before payment is collected."""

    id: str
    user_id: str
    company_id: str
    product_id: str
    category: ProductCategory
    include_locker: bool
    total_amount: Decimal
    membership_period: ExistingPeriod
    locker_period: ExistingPeriod | None
    status: ReservationStatus
    created_at: datetime


@dataclass(frozen=True)
class PaymentRequest:
    """Hand-off to the Payment Orchestrator. The core never calls it directly."""

    verdict: EligibilityVerdict
    selection: Selection
    total_amount: Decimal
    reservation_id: str
    order_id: str


@dataclass(frozen=True)
class AdmissionOutcome:
    admitted: bool
    reason_code: ReasonCode | None = None
    reason_message: str | None = None
    payment_request: PaymentRequest | None = None
    conflicting_period: ExistingPeriod | None = None

    @classmethod
    def refused(
        cls,
        code: ReasonCode,
        message: str | None = None,
        conflicting_period: ExistingPeriod | None = None,
    ) -> AdmissionOutcome:
        return cls(
            admitted=False,
            reason_code=code,
            reason_message=message or message_for(code),
            conflicting_period=conflicting_period,
        )


@dataclass(frozen=True)
class ReservationResult:
    """Outcome of the storage-level conditional update. Either a reservation or a reason code."""

    reservation: Reservation | None = None
    reason_code: ReasonCode | None = None
    conflicting_period: ExistingPeriod | None = None
