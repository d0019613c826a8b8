# api/application/dtos/company_dto.py
from __future__ import annotations

from pydantic import BaseModel

from api.domain.company.entities import Company, Product
from api.domain.company.registration import registration_level, registration_rate


class ProductDTO(BaseModel):
    id: str
    name: str
    category: str
    quota: int
    sold: int
    remaining_units: int

    @classmethod
    def from_domain(cls, product: Product) -> ProductDTO:
        return cls(
            id=product.id,
            name=product.name,
            category=product.category.value,
            quota=product.quota,
            sold=product.sold,
            remaining_units=product.remaining_units,
        )


class CompanyStatusDTO(BaseModel):
    """One line of the registration status board."""

    id: str
    code: str
    name: str
    mode: str
    status: str
    quota: int
    registered: int
    remaining: int
    registration_rate: float
    level: str
    available_from: str
    available_until: str

    @classmethod
    def from_domain(cls, company: Company) -> CompanyStatusDTO:
        return cls(
            id=company.id,
            code=company.code,
            name=company.name,
            mode=company.mode.value,
            status=company.status.value,
            quota=company.quota,
            registered=company.registered,
            remaining=company.remaining,
            registration_rate=round(registration_rate(company.registered, company.quota), 4),
            level=registration_level(company).value,
            available_from=company.available_from.isoformat(),
            available_until=company.available_until.isoformat(),
        )


class CompanyDetailDTO(CompanyStatusDTO):
    products: list[ProductDTO]

    @classmethod
    def from_domain(cls, company: Company) -> CompanyDetailDTO:
        board = CompanyStatusDTO.from_domain(company)
        return cls(
            **board.model_dump(),
            products=[ProductDTO.from_domain(p) for p in company.products],
        )
