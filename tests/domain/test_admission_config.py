# tests/domain/test_admission_config.py
from decimal import Decimal
from types import MappingProxyType

import pytest

from api.application.services.pricing_service import total_amount
from api.domain.admission.config import AdmissionConfig, AgreementRule
from api.domain.admission.enums import AgreementKind
from api.domain.company.enums import ProductCategory


def test_default_prices():
    config = AdmissionConfig()
    assert config.price_of(ProductCategory.FULL_DAY) == Decimal("33000")
    assert config.price_of(ProductCategory.MORNING) == Decimal("22000")
    assert config.price_of(ProductCategory.EVENING) == Decimal("22000")


def test_total_with_and_without_locker():
    config = AdmissionConfig()
    assert total_amount(config, ProductCategory.FULL_DAY, include_locker=False) == Decimal("33000")
    assert total_amount(config, ProductCategory.MORNING, include_locker=True) == Decimal("49500")


def test_missing_price_is_rejected():
    with pytest.raises(ValueError, match="No price"):
        AdmissionConfig(membership_prices=MappingProxyType({ProductCategory.FULL_DAY: Decimal("1")}))


def test_negative_price_is_rejected():
    with pytest.raises(ValueError, match="negative"):
        AdmissionConfig(locker_price=Decimal("-1"))


def test_period_length_must_be_positive():
    with pytest.raises(ValueError, match="positive"):
        AdmissionConfig(membership_period_months=0)


def test_default_required_agreements():
    assert AdmissionConfig().required_agreements("any") == frozenset(
        {AgreementKind.PERSONAL, AgreementKind.SENSITIVE}
    )


def test_disabled_agreement_is_never_required():
    config = AdmissionConfig(
        agreements=MappingProxyType(
            {
                AgreementKind.PERSONAL: AgreementRule(enabled=False, required=True),
                AgreementKind.UTILIZATION: AgreementRule(enabled=True, required=True),
            }
        )
    )
    assert config.required_agreements("c-1") == frozenset({AgreementKind.UTILIZATION})


def test_company_override_replaces_the_default():
    config = AdmissionConfig(
        company_agreements=MappingProxyType(
            {"c-2": MappingProxyType({AgreementKind.UTILIZATION: AgreementRule()})}
        )
    )
    assert config.required_agreements("c-2") == frozenset({AgreementKind.UTILIZATION})
    assert AgreementKind.PERSONAL in config.required_agreements("c-1")
