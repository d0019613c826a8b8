# api/domain/whitelist/value_objects.py
from __future__ import annotations

import re
from dataclasses import dataclass

_WHITESPACE = re.compile(r"\s+")


def normalize_name(raw: str) -> str:
    """Drop every whitespace character and casefold. "이 영희 " == "이영희"."""
    return _WHITESPACE.sub("", raw).casefold()


def normalize_employee_no(raw: str) -> str:
    return raw.strip()


@dataclass(frozen=True)
class WhitelistIdentity:
    """(employee_no, name) pair, normalized. Equality is the whitelist match rule."""

    employee_no: str
    name: str

    def __init__(self, employee_no: str, name: str) -> None:
        emp = normalize_employee_no(employee_no)
        normalized = normalize_name(name)
        if not emp:
            raise ValueError("Whitelist identity requires an employee number")
        if not normalized:
            raise ValueError("Whitelist identity requires a name")
        object.__setattr__(self, "employee_no", emp)
        object.__setattr__(self, "name", normalized)

    @classmethod
    def parse(cls, employee_no: str, name: str) -> WhitelistIdentity | None:
        """None when either part is blank. A blank identity matches no entry."""
        if not normalize_employee_no(employee_no) or not normalize_name(name):
            return None
        return cls(employee_no, name)
