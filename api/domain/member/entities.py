# api/domain/member/entities.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Identity supplied by authentication. Immutable for one evaluation."""

    id: str
    company_id: str
    employee_no: str
    name: str
    email: str | None = None
    phone: str | None = None

    def __post_init__(self) -> None:
        if not self.id.strip():
            raise ValueError("User requires a non-empty id")
        if not self.name.strip():
            raise ValueError("User requires a non-empty name")
