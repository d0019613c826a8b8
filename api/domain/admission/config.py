# api/domain/admission/config.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from types import MappingProxyType

from api.domain.company.enums import ProductCategory

from .enums import AgreementKind


@dataclass(frozen=True)
class AgreementRule:
    enabled: bool = True
    required: bool = True


def _default_agreements() -> Mapping[AgreementKind, AgreementRule]:
    return MappingProxyType(
        {
            AgreementKind.PERSONAL: AgreementRule(enabled=True, required=True),
            AgreementKind.SENSITIVE: AgreementRule(enabled=True, required=True),
            AgreementKind.UTILIZATION: AgreementRule(enabled=False, required=False),
        }
    )


@dataclass(frozen=True)
class AdmissionConfig:
    """Immutable configuration passed into every evaluation. No global state.

    ADR: registration_window_enabled is an explicit switch. When False the
    RegistrationWindow guard always passes; that bypass is never a constant
    buried in the guard.
    """

    membership_prices: Mapping[ProductCategory, Decimal] = field(
        default_factory=lambda: MappingProxyType(
            {
                ProductCategory.FULL_DAY: Decimal("33000"),
                ProductCategory.MORNING: Decimal("22000"),
                ProductCategory.EVENING: Decimal("22000"),
            }
        )
    )
    enabled_categories: frozenset[ProductCategory] = frozenset(ProductCategory)
    locker_price: Decimal = Decimal("27500")
    locker_enabled: bool = True
    membership_period_months: int = 3
    locker_period_months: int = 3
    membership_start_date: date = date(2025, 1, 1)
    locker_start_date: date = date(2025, 1, 1)
    registration_window_enabled: bool = True
    require_whitelist_verification: bool = False
    whitelist_single_use: bool = True
    agreements: Mapping[AgreementKind, AgreementRule] = field(default_factory=_default_agreements)
    company_agreements: Mapping[str, Mapping[AgreementKind, AgreementRule]] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        missing = [c for c in ProductCategory if c not in self.membership_prices]
        if missing:
            raise ValueError(f"No price configured for {[c.value for c in missing]}")
        if any(p < Decimal("0") for p in self.membership_prices.values()) or self.locker_price < Decimal("0"):
            raise ValueError("Prices cannot be negative")
        if self.membership_period_months <= 0 or self.locker_period_months <= 0:
            raise ValueError("Period lengths must be positive month counts")

    def category_enabled(self, category: ProductCategory) -> bool:
        return category in self.enabled_categories

    def price_of(self, category: ProductCategory) -> Decimal:
        return self.membership_prices[category]

    def agreements_for(self, company_id: str) -> Mapping[AgreementKind, AgreementRule]:
        """Company override when present, global default otherwise."""
        return self.company_agreements.get(company_id, self.agreements)

    def required_agreements(self, company_id: str) -> frozenset[AgreementKind]:
        return frozenset(k for k, r in self.agreements_for(company_id).items() if r.enabled and r.required)
