# api/domain/whitelist/repository.py
from __future__ import annotations

from typing import Protocol

from api.domain.company.enums import ProductCategory

from .entities import WhitelistSnapshot


class WhitelistLookup(Protocol):
    """What the evaluator needs from the Whitelist Store."""

    company_id: str

    def lookup(self, company_id: str, employee_no: str, name: str) -> frozenset[ProductCategory]: ...


class WhitelistRepository(Protocol):
    def snapshot_for(self, company_id: str, employee_no: str, name: str) -> WhitelistSnapshot: ...
