# api/application/services/pricing_service.py
from __future__ import annotations

from decimal import Decimal

from api.domain.admission.config import AdmissionConfig
from api.domain.company.enums import ProductCategory


def total_amount(config: AdmissionConfig, category: ProductCategory, include_locker: bool) -> Decimal:
    """Membership price of the category plus the locker price when included. Won, Decimal."""
    total = config.price_of(category)
    if include_locker:
        total += config.locker_price
    return total
