# api/domain/company/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .enums import AdmissionMode, CompanyStatus, ProductCategory


@dataclass(frozen=True)
class Product:
    """Sellable product of one company. remaining_units = quota - sold, never negative."""

    id: str
    name: str
    category: ProductCategory
    quota: int
    sold: int = 0

    def __post_init__(self) -> None:
        if self.quota < 0:
            raise ValueError(f"Product {self.id}: negative quota ({self.quota})")
        if self.sold < 0 or self.sold > self.quota:
            raise ValueError(f"Product {self.id}: sold={self.sold} outside [0, {self.quota}]")

    @property
    def remaining_units(self) -> int:
        return self.quota - self.sold


@dataclass(frozen=True)
class Company:
    """Read-only Company Directory snapshot, product catalog included.

    Invariant: remaining = quota - registered >= 0. A violation is a caller bug.
    """

    id: str
    code: str
    name: str
    mode: AdmissionMode
    quota: int
    registered: int
    status: CompanyStatus
    available_from: datetime
    available_until: datetime
    products: tuple[Product, ...] = ()

    def __post_init__(self) -> None:
        if self.quota < 0:
            raise ValueError(f"Company {self.id}: negative quota ({self.quota})")
        if self.registered < 0 or self.registered > self.quota:
            raise ValueError(f"Company {self.id}: registered={self.registered} outside [0, {self.quota}]")
        if self.available_until < self.available_from:
            raise ValueError(f"Company {self.id}: registration window ends before it starts")
        ids = [p.id for p in self.products]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Company {self.id}: duplicate product ids")

    @property
    def remaining(self) -> int:
        return self.quota - self.registered

    @property
    def is_active(self) -> bool:
        return self.status == CompanyStatus.ACTIVE

    def product(self, product_id: str) -> Product | None:
        for p in self.products:
            if p.id == product_id:
                return p
        return None
