# api/application/services/admission_service.py
from __future__ import annotations

import logging
from datetime import datetime

from api.domain.admission.config import AdmissionConfig
from api.domain.admission.entities import (
    AdmissionOutcome,
    EligibilityVerdict,
    GuardContext,
    GuardResult,
    PaymentRequest,
    Reservation,
    Selection,
)
from api.domain.admission.enums import AgreementKind, ReasonCode
from api.domain.admission.repository import AdmissionRepository
from api.domain.company.entities import Company
from api.domain.company.enums import AdmissionMode
from api.domain.company.repository import CompanyRepository
from api.domain.member.entities import User
from api.domain.period.entities import ExistingPeriod, PeriodKind
from api.domain.whitelist.entities import WhitelistSnapshot
from api.domain.whitelist.repository import WhitelistRepository
from api.domain.whitelist.value_objects import WhitelistIdentity

from .eligibility_service import evaluate_eligibility
from .guard_service import run_all_guards
from .overlap_service import check_purchase_overlap, proposed_period
from .pricing_service import total_amount

logger = logging.getLogger(__name__)


class AdmissionService:
    """Imperative Shell: reads snapshots (repos), calls the Pure Core, then performs
    the admission act through the storage layer's conditional update.

    ADR: the verdict is never authorization to decrement. The repository's
    reserve() re-checks remaining > 0 inside one atomic statement, so two
    requests that both saw remaining == 1 cannot both succeed.
    """

    def __init__(
        self,
        company_repo: CompanyRepository,
        whitelist_repo: WhitelistRepository,
        admission_repo: AdmissionRepository,
        config: AdmissionConfig,
    ) -> None:
        self._company_repo = company_repo
        self._whitelist_repo = whitelist_repo
        self._admission_repo = admission_repo
        self._config = config

    def evaluate(self, user: User, company_id: str, selection: Selection | None = None) -> EligibilityVerdict:
        company = self._company_repo.get_company(company_id)
        return self._evaluate(user, company, selection)

    def check_guards(
        self,
        user: User,
        company_id: str,
        selection: Selection,
        *,
        accepted_agreements: frozenset[AgreementKind] = frozenset(),
        whitelist_verified: bool = False,
        now: datetime | None = None,
    ) -> GuardResult:
        company = self._company_repo.get_company(company_id)
        verdict = self._evaluate(user, company, None)
        ctx = self._context(company, user, selection, verdict, accepted_agreements, whitelist_verified, now)
        return run_all_guards(ctx)

    def admit(
        self,
        user: User,
        company_id: str,
        selection: Selection,
        *,
        accepted_agreements: frozenset[AgreementKind] = frozenset(),
        whitelist_verified: bool = False,
        now: datetime | None = None,
    ) -> AdmissionOutcome:
        company = self._company_repo.get_company(company_id)

        # Pure core: verdict feeds the guards, guards decide in their fixed order.
        verdict = self._evaluate(user, company, None)
        ctx = self._context(company, user, selection, verdict, accepted_agreements, whitelist_verified, now)
        guard = run_all_guards(ctx)
        if not guard.passed and guard.reason_code is not None:
            if (
                guard.reason_code == ReasonCode.NOT_WHITELISTED_FOR_PRODUCT
                and verdict.reason_code == ReasonCode.NOT_ON_WHITELIST
            ):
                return self._refuse(user, company, ReasonCode.NOT_ON_WHITELIST)
            return self._refuse(user, company, guard.reason_code, guard.reason_message)
        if not verdict.eligible and verdict.reason_code is not None:
            return self._refuse(user, company, verdict.reason_code)

        product = company.product(selection.product_id)
        if product is None:
            raise ValueError(f"Company {company.id} has no product {selection.product_id}")

        membership = proposed_period(
            PeriodKind.MEMBERSHIP, self._config.membership_start_date, self._config.membership_period_months
        )
        locker = (
            proposed_period(PeriodKind.LOCKER, self._config.locker_start_date, self._config.locker_period_months)
            if selection.include_locker
            else None
        )

        # Overlap runs only after every guard passed. reserve() repeats it under the lock.
        overlap = check_purchase_overlap(self._admission_repo.list_periods(user.id), membership, locker)
        if overlap.has_overlap:
            return self._refuse(
                user, company, ReasonCode.PERIOD_OVERLAP, conflicting_period=overlap.conflicting_period
            )

        amount = total_amount(self._config, product.category, selection.include_locker)
        consume = (
            WhitelistIdentity(user.employee_no, user.name)
            if company.mode == AdmissionMode.WHL and self._config.whitelist_single_use
            else None
        )

        result = self._admission_repo.reserve(
            user_id=user.id,
            company_id=company.id,
            mode=company.mode,
            product_id=product.id,
            category=product.category,
            include_locker=selection.include_locker,
            total_amount=amount,
            membership_period=membership,
            locker_period=locker,
            consume_whitelist=consume,
        )
        if result.reservation is None:
            return self._refuse(
                user,
                company,
                result.reason_code or ReasonCode.SOLD_OUT,
                conflicting_period=result.conflicting_period,
            )

        reservation = result.reservation
        logger.info(
            "admission reserved: reservation=%s company=%s product=%s amount=%s",
            reservation.id,
            company.id,
            product.id,
            amount,
        )
        return AdmissionOutcome(
            admitted=True,
            payment_request=PaymentRequest(
                verdict=verdict,
                selection=selection,
                total_amount=amount,
                reservation_id=reservation.id,
                order_id=f"{company.code}-{reservation.id}",
            ),
        )

    def cancel(self, reservation_id: str) -> Reservation:
        reservation = self._admission_repo.cancel(reservation_id)
        logger.info("admission cancelled: reservation=%s company=%s", reservation.id, reservation.company_id)
        return reservation

    def complete(self, reservation_id: str) -> Reservation:
        reservation = self._admission_repo.complete(reservation_id)
        logger.info("admission completed: reservation=%s company=%s", reservation.id, reservation.company_id)
        return reservation

    def _evaluate(self, user: User, company: Company, selection: Selection | None) -> EligibilityVerdict:
        # FCFS never reads the whitelist.
        if company.mode == AdmissionMode.WHL:
            whitelist = self._whitelist_repo.snapshot_for(company.id, user.employee_no, user.name)
        else:
            whitelist = WhitelistSnapshot(company_id=company.id)
        return evaluate_eligibility(user, company, whitelist, selection, config=self._config)

    def _context(
        self,
        company: Company,
        user: User,
        selection: Selection,
        verdict: EligibilityVerdict,
        accepted_agreements: frozenset[AgreementKind],
        whitelist_verified: bool,
        now: datetime | None,
    ) -> GuardContext:
        return GuardContext(
            company=company,
            user=user,
            selection=selection,
            config=self._config,
            now=_local_naive(now) if now is not None else datetime.now(),
            allowed_categories=verdict.allowed_categories,
            whitelist_verified=whitelist_verified,
            accepted_agreements=accepted_agreements,
        )

    def _refuse(
        self,
        user: User,
        company: Company,
        code: ReasonCode,
        message: str | None = None,
        conflicting_period: ExistingPeriod | None = None,
    ) -> AdmissionOutcome:
        logger.info("admission refused: user=%s company=%s reason=%s", user.id, company.id, code.value)
        return AdmissionOutcome.refused(code, message, conflicting_period)


def _local_naive(now: datetime) -> datetime:
    """Registration windows are stored as naive local time. Aware instants are converted to it."""
    if now.tzinfo is None:
        return now
    return now.astimezone().replace(tzinfo=None)
