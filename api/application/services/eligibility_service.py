# api/application/services/eligibility_service.py
"""Eligibility Evaluator. Pure function, zero IO.

ADR: evaluation never decrements quota nor consumes whitelist entries. That
belongs to the admission act (admission_service + the storage layer).
"""
from __future__ import annotations

from api.domain.admission.config import AdmissionConfig
from api.domain.admission.entities import EligibilityVerdict, Selection
from api.domain.admission.enums import ReasonCode
from api.domain.company.entities import Company, Product
from api.domain.company.enums import AdmissionMode, ProductCategory
from api.domain.member.entities import User
from api.domain.whitelist.repository import WhitelistLookup


def evaluate_eligibility(
    user: User,
    company: Company,
    whitelist: WhitelistLookup,
    selection: Selection | None = None,
    *,
    config: AdmissionConfig,
) -> EligibilityVerdict:
    """One verdict per (user, company, selection). Same input = same output.

    Raises:
        ValueError: whitelist scoped to another company, or a selected product
            id the company does not sell. Both are caller bugs.
    """
    if whitelist.company_id != company.id:
        raise ValueError(f"Whitelist scoped to {whitelist.company_id}, company is {company.id}")

    if user.company_id != company.id:
        return EligibilityVerdict.deny(ReasonCode.COMPANY_MISMATCH)

    if company.mode == AdmissionMode.WHL:
        verdict = _evaluate_whitelist(user, company, whitelist)
    else:
        verdict = _evaluate_first_come(company, config)

    if not verdict.eligible or selection is None or not selection.is_single:
        return verdict
    return _narrow_to_selection(company, verdict, selection)


def allowed_categories_fcfs(company: Company, config: AdmissionConfig) -> frozenset[ProductCategory]:
    """Categories with units left AND administratively enabled."""
    return frozenset(
        p.category for p in company.products if p.remaining_units > 0 and config.category_enabled(p.category)
    )


def _evaluate_first_come(company: Company, config: AdmissionConfig) -> EligibilityVerdict:
    if not company.is_active:
        return EligibilityVerdict.deny(ReasonCode.COMPANY_INACTIVE, allowed_categories_fcfs(company, config))

    # Company-level gate sits above the per-product gate. Both must pass.
    if company.remaining <= 0:
        return EligibilityVerdict.deny(ReasonCode.SOLD_OUT)

    with_units = [p for p in company.products if p.remaining_units > 0]
    if not with_units:
        return EligibilityVerdict.deny(ReasonCode.SOLD_OUT)

    allowed = allowed_categories_fcfs(company, config)
    if not allowed:
        return EligibilityVerdict.deny(ReasonCode.PRODUCT_DISABLED)
    return EligibilityVerdict.allow(allowed)


def _evaluate_whitelist(user: User, company: Company, whitelist: WhitelistLookup) -> EligibilityVerdict:
    # Quota counters are informational here. Only whitelist membership gates.
    # The allowed set is the whitelist match even when the verdict is a refusal.
    allowed = whitelist.lookup(company.id, user.employee_no, user.name)
    if not company.is_active:
        return EligibilityVerdict.deny(ReasonCode.COMPANY_INACTIVE, allowed)
    if not allowed:
        return EligibilityVerdict.deny(ReasonCode.NOT_ON_WHITELIST)
    return EligibilityVerdict.allow(allowed)


def _narrow_to_selection(
    company: Company,
    verdict: EligibilityVerdict,
    selection: Selection,
) -> EligibilityVerdict:
    product = _resolve_product(company, selection.product_id)

    if company.mode == AdmissionMode.WHL:
        if product.category in verdict.allowed_categories:
            return verdict
        return EligibilityVerdict.deny(ReasonCode.NOT_WHITELISTED_FOR_PRODUCT, verdict.allowed_categories)

    # FCFS: judged per product, two products may share a category.
    if product.remaining_units <= 0:
        return EligibilityVerdict.deny(ReasonCode.SOLD_OUT, verdict.allowed_categories)
    if product.category not in verdict.allowed_categories:
        return EligibilityVerdict.deny(ReasonCode.PRODUCT_DISABLED, verdict.allowed_categories)
    return verdict


def _resolve_product(company: Company, product_id: str) -> Product:
    product = company.product(product_id)
    if product is None:
        raise ValueError(f"Company {company.id} has no product {product_id}")
    return product
