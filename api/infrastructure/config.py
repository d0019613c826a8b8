# api/infrastructure/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from functools import lru_cache
from types import MappingProxyType

from dotenv import load_dotenv

from api.domain.admission.config import AdmissionConfig
from api.domain.company.enums import ProductCategory

load_dotenv()


@dataclass(frozen=True)
class Settings:
    duckdb_path: str
    rate_limit_per_minute: int
    debug: bool
    log_level: str


def _flag(name: str, default: bool) -> bool:
    return os.environ.get(name, "true" if default else "false").lower() == "true"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        duckdb_path=os.environ.get("DUCKDB_PATH", ":memory:"),
        rate_limit_per_minute=int(os.environ.get("API_RATE_LIMIT_PER_MINUTE", "60")),
        debug=os.environ.get("API_DEBUG", "false").lower() == "true",
        log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    )


@lru_cache(maxsize=1)
def get_admission_config() -> AdmissionConfig:
    """Immutable AdmissionConfig from ADMISSION_* variables. Read once per process."""
    prices = MappingProxyType(
        {
            ProductCategory.FULL_DAY: Decimal(os.environ.get("ADMISSION_PRICE_FULL_DAY", "33000")),
            ProductCategory.MORNING: Decimal(os.environ.get("ADMISSION_PRICE_MORNING", "22000")),
            ProductCategory.EVENING: Decimal(os.environ.get("ADMISSION_PRICE_EVENING", "22000")),
        }
    )
    enabled = frozenset(
        c for c in ProductCategory if _flag(f"ADMISSION_ENABLED_{c.name}", default=True)
    )
    return AdmissionConfig(
        membership_prices=prices,
        enabled_categories=enabled,
        locker_price=Decimal(os.environ.get("ADMISSION_LOCKER_PRICE", "27500")),
        locker_enabled=_flag("ADMISSION_LOCKER_ENABLED", default=True),
        membership_period_months=int(os.environ.get("ADMISSION_MEMBERSHIP_MONTHS", "3")),
        locker_period_months=int(os.environ.get("ADMISSION_LOCKER_MONTHS", "3")),
        membership_start_date=date.fromisoformat(os.environ.get("ADMISSION_MEMBERSHIP_START", "2025-01-01")),
        locker_start_date=date.fromisoformat(os.environ.get("ADMISSION_LOCKER_START", "2025-01-01")),
        registration_window_enabled=_flag("ADMISSION_REGISTRATION_WINDOW_ENABLED", default=True),
        require_whitelist_verification=_flag("ADMISSION_REQUIRE_WHITELIST_VERIFICATION", default=False),
        whitelist_single_use=_flag("ADMISSION_WHITELIST_SINGLE_USE", default=True),
    )
