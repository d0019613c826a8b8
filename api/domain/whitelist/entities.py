# api/domain/whitelist/entities.py
from __future__ import annotations

from dataclasses import dataclass, field

from api.domain.company.enums import ProductCategory

from .value_objects import WhitelistIdentity


@dataclass(frozen=True)
class WhitelistEntry:
    company_id: str
    category: ProductCategory
    employee_no: str
    name: str

    @property
    def identity(self) -> WhitelistIdentity:
        return WhitelistIdentity(self.employee_no, self.name)


@dataclass(frozen=True)
class WhitelistSnapshot:
    """Already-resolved whitelist rows for ONE company. Pure lookup, zero IO.

    The store may hand over every row of the company or only those of the
    user being evaluated; lookup() gives the same answer either way.
    """

    company_id: str
    entries: tuple[WhitelistEntry, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        foreign = [e for e in self.entries if e.company_id != self.company_id]
        if foreign:
            raise ValueError(
                f"Whitelist snapshot for {self.company_id} holds entries of {foreign[0].company_id}"
            )

    def lookup(self, company_id: str, employee_no: str, name: str) -> frozenset[ProductCategory]:
        if company_id != self.company_id:
            raise ValueError(f"Whitelist scoped to {self.company_id}, queried for {company_id}")
        target = WhitelistIdentity.parse(employee_no, name)
        if target is None:
            return frozenset()
        return frozenset(e.category for e in self.entries if e.identity == target)
