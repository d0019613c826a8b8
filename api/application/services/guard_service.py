# api/application/services/guard_service.py
"""Guard Composer. Pure predicates over a GuardContext, zero IO.

ADR: fixed order, first failure wins. RequiredAgreements
sits after the seven admission guards.
"""
from __future__ import annotations

from collections.abc import Callable

from api.domain.admission.entities import GuardContext, GuardResult
from api.domain.admission.enums import ReasonCode
from api.domain.admission.messages import WINDOW_ENDED_MESSAGE, WINDOW_NOT_OPEN_MESSAGE
from api.domain.company.entities import Product
from api.domain.company.enums import AdmissionMode

Guard = Callable[[GuardContext], GuardResult]


def run_all_guards(ctx: GuardContext) -> GuardResult:
    """Left fold over GUARDS, stopping at the first failure."""
    for _name, guard in GUARDS:
        result = guard(ctx)
        if not result.passed:
            return result
    return GuardResult.ok()


def company_match(ctx: GuardContext) -> GuardResult:
    if ctx.user.company_id != ctx.company.id:
        return GuardResult.fail(ReasonCode.COMPANY_MISMATCH)
    return GuardResult.ok()


def company_active(ctx: GuardContext) -> GuardResult:
    if not ctx.company.is_active:
        return GuardResult.fail(ReasonCode.COMPANY_INACTIVE)
    return GuardResult.ok()


def registration_window(ctx: GuardContext) -> GuardResult:
    """Inclusive [available_from, available_until]. Bypassed only by the config switch."""
    if not ctx.config.registration_window_enabled:
        return GuardResult.ok()
    if ctx.now < ctx.company.available_from:
        return GuardResult.fail(ReasonCode.WINDOW_CLOSED, WINDOW_NOT_OPEN_MESSAGE)
    if ctx.now > ctx.company.available_until:
        return GuardResult.fail(ReasonCode.WINDOW_CLOSED, WINDOW_ENDED_MESSAGE)
    return GuardResult.ok()


def selection_present(ctx: GuardContext) -> GuardResult:
    if not ctx.selection.is_single:
        return GuardResult.fail(ReasonCode.NO_SELECTION)
    return GuardResult.ok()


def product_enabled(ctx: GuardContext) -> GuardResult:
    product = _selected_product(ctx)
    if not ctx.config.category_enabled(product.category):
        return GuardResult.fail(ReasonCode.PRODUCT_DISABLED)
    return GuardResult.ok()


def capacity_or_whitelist(ctx: GuardContext) -> GuardResult:
    product = _selected_product(ctx)
    if ctx.company.mode == AdmissionMode.FCFS:
        if ctx.company.remaining <= 0 or product.remaining_units <= 0:
            return GuardResult.fail(ReasonCode.SOLD_OUT)
        return GuardResult.ok()

    if product.category not in ctx.allowed_categories:
        return GuardResult.fail(ReasonCode.NOT_WHITELISTED_FOR_PRODUCT)
    if ctx.config.require_whitelist_verification and not ctx.whitelist_verified:
        return GuardResult.fail(ReasonCode.NOT_WHITELISTED_FOR_PRODUCT)
    return GuardResult.ok()


def locker_consistency(ctx: GuardContext) -> GuardResult:
    if ctx.selection.include_locker and not ctx.config.locker_enabled:
        return GuardResult.fail(ReasonCode.LOCKER_DISABLED)
    return GuardResult.ok()


def required_agreements(ctx: GuardContext) -> GuardResult:
    missing = ctx.config.required_agreements(ctx.company.id) - ctx.accepted_agreements
    if missing:
        return GuardResult.fail(ReasonCode.AGREEMENT_REQUIRED)
    return GuardResult.ok()


def _selected_product(ctx: GuardContext) -> Product:
    product_id = ctx.selection.product_id
    product = ctx.company.product(product_id)
    if product is None:
        raise ValueError(f"Company {ctx.company.id} has no product {product_id}")
    return product


GUARDS: tuple[tuple[str, Guard], ...] = (
    ("CompanyMatch", company_match),
    ("CompanyActive", company_active),
    ("RegistrationWindow", registration_window),
    ("SelectionPresent", selection_present),
    ("ProductEnabled", product_enabled),
    ("CapacityOrWhitelist", capacity_or_whitelist),
    ("LockerConsistency", locker_consistency),
    ("RequiredAgreements", required_agreements),
)
