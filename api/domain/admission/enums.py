# api/domain/admission/enums.py
from enum import StrEnum


class ReasonCode(StrEnum):
    """Closed set of business refusals. Never raised, always returned."""

    COMPANY_MISMATCH = "COMPANY_MISMATCH"
    COMPANY_INACTIVE = "COMPANY_INACTIVE"
    WINDOW_CLOSED = "WINDOW_CLOSED"
    NO_SELECTION = "NO_SELECTION"
    PRODUCT_DISABLED = "PRODUCT_DISABLED"
    SOLD_OUT = "SOLD_OUT"
    NOT_WHITELISTED_FOR_PRODUCT = "NOT_WHITELISTED_FOR_PRODUCT"
    NOT_ON_WHITELIST = "NOT_ON_WHITELIST"
    LOCKER_DISABLED = "LOCKER_DISABLED"
    PERIOD_OVERLAP = "PERIOD_OVERLAP"
    AGREEMENT_REQUIRED = "AGREEMENT_REQUIRED"


class AgreementKind(StrEnum):
    PERSONAL = "personal"
    SENSITIVE = "sensitive"
    UTILIZATION = "utilization"


class ReservationStatus(StrEnum):
    RESERVED = "reserved"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
