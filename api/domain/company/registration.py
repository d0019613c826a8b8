# api/domain/company/registration.py
from __future__ import annotations

from .entities import Company
from .enums import RegistrationLevel

# Status board bands: < 70% available, 70%..<100% imminent, >= 100% full.
_IMMINENT_RATE = 0.7
_FULL_RATE = 1.0


def registration_rate(registered: int, quota: int) -> float:
    """Occupancy in [0, 1]. A zero quota counts as full."""
    if quota == 0:
        return 1.0
    return min(registered / quota, 1.0)


def registration_level(company: Company) -> RegistrationLevel:
    rate = registration_rate(company.registered, company.quota)
    if rate >= _FULL_RATE:
        return RegistrationLevel.FULL
    if rate >= _IMMINENT_RATE:
        return RegistrationLevel.IMMINENT
    return RegistrationLevel.AVAILABLE
