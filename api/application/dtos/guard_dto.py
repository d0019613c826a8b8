# api/application/dtos/guard_dto.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from api.domain.admission.entities import GuardResult
from api.domain.admission.enums import AgreementKind

from .eligibility_dto import SelectionDTO, UserDTO


class GuardRequestDTO(BaseModel):
    user: UserDTO
    company_id: str = Field(min_length=1)
    selection: SelectionDTO
    accepted_agreements: list[AgreementKind] = Field(default_factory=list)
    whitelist_verified: bool = False
    now: datetime | None = None  # evaluation instant, server clock when absent


class GuardResultDTO(BaseModel):
    passed: bool
    reason_code: str | None
    reason_message: str | None

    @classmethod
    def from_domain(cls, result: GuardResult) -> GuardResultDTO:
        return cls(
            passed=result.passed,
            reason_code=result.reason_code.value if result.reason_code else None,
            reason_message=result.reason_message,
        )
