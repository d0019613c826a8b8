# api/application/dtos/eligibility_dto.py
from __future__ import annotations

from pydantic import BaseModel, Field

from api.domain.admission.entities import EligibilityVerdict, Selection
from api.domain.member.entities import User


class UserDTO(BaseModel):
    id: str = Field(min_length=1)
    company_id: str = Field(min_length=1)
    employee_no: str
    name: str = Field(min_length=1)
    email: str | None = None
    phone: str | None = None

    def to_domain(self) -> User:
        return User(
            id=self.id,
            company_id=self.company_id,
            employee_no=self.employee_no,
            name=self.name,
            email=self.email,
            phone=self.phone,
        )


class SelectionDTO(BaseModel):
    product_ids: list[str] = Field(default_factory=list)
    include_locker: bool = False

    def to_domain(self) -> Selection:
        return Selection(product_ids=tuple(self.product_ids), include_locker=self.include_locker)


class EligibilityRequestDTO(BaseModel):
    user: UserDTO
    company_id: str = Field(min_length=1)
    selection: SelectionDTO | None = None


class EligibilityVerdictDTO(BaseModel):
    eligible: bool
    allowed_categories: list[str]
    reason_code: str | None
    reason_message: str | None

    @classmethod
    def from_domain(cls, verdict: EligibilityVerdict) -> EligibilityVerdictDTO:
        return cls(
            eligible=verdict.eligible,
            allowed_categories=sorted(c.value for c in verdict.allowed_categories),
            reason_code=verdict.reason_code.value if verdict.reason_code else None,
            reason_message=verdict.reason_message,
        )
