# api/domain/company/enums.py
from enum import StrEnum


class AdmissionMode(StrEnum):
    FCFS = "FCFS"  # first-come-first-served against a numeric quota
    WHL = "WHL"  # pre-vetted whitelist (lottery)


class CompanyStatus(StrEnum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class ProductCategory(StrEnum):
    """Closed set. Drives both pricing and whitelist matching."""

    FULL_DAY = "fullDay"
    MORNING = "morning"
    EVENING = "evening"


class RegistrationLevel(StrEnum):
    AVAILABLE = "available"
    IMMINENT = "imminent"
    FULL = "full"
