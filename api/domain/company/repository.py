# api/domain/company/repository.py
from __future__ import annotations

from typing import Protocol

from .entities import Company


class CompanyRepository(Protocol):
    def get_company(self, company_id: str) -> Company: ...
    def list_companies(self) -> list[Company]: ...
