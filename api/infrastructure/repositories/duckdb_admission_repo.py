# api/infrastructure/repositories/duckdb_admission_repo.py
from __future__ import annotations

import logging
import threading
import uuid
from datetime import date, datetime
from decimal import Decimal

import duckdb

from api.domain.admission.entities import Reservation, ReservationResult
from api.domain.admission.enums import ReasonCode, ReservationStatus
from api.domain.admission.exceptions import ReservationNotFoundError
from api.domain.company.enums import AdmissionMode, ProductCategory
from api.domain.period.entities import ExistingPeriod, PeriodKind
from api.domain.whitelist.value_objects import WhitelistIdentity

logger = logging.getLogger(__name__)

# ADR: DuckDB uses optimistic concurrency. Two cursors updating the same
# company row at once get a transaction conflict instead of waiting, so
# admissions are serialised per process. The conditional WHERE clauses stay
# the authority: the lock only removes the conflict, never the re-check.
_ADMISSION_LOCK = threading.Lock()

_RESERVATION_COLUMNS = (
    "id, user_id, company_id, product_id, category, include_locker, total_amount, "
    "membership_start_date, membership_end_date, locker_start_date, locker_end_date, "
    "status, created_at, whitelist_entry_id, company_counted, product_counted"
)


class DuckDBAdmissionRepo:
    """Admission boundary storage. Counters move only through conditional UPDATEs."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def list_periods(self, user_id: str) -> list[ExistingPeriod]:
        rows = self._conn.execute(
            """
            SELECT membership_start_date, membership_end_date, locker_start_date, locker_end_date
            FROM reservation
            WHERE user_id = ? AND status <> 'cancelled'
            ORDER BY membership_start_date
            """,
            [user_id],
        ).fetchall()
        periods: list[ExistingPeriod] = []
        for r in rows:
            periods.append(ExistingPeriod(PeriodKind.MEMBERSHIP, r[0], r[1]))
            if r[2] is not None and r[3] is not None:
                periods.append(ExistingPeriod(PeriodKind.LOCKER, r[2], r[3]))
        return periods

    def reserve(
        self,
        *,
        user_id: str,
        company_id: str,
        mode: AdmissionMode,
        product_id: str,
        category: ProductCategory,
        include_locker: bool,
        total_amount: Decimal,
        membership_period: ExistingPeriod,
        locker_period: ExistingPeriod | None,
        consume_whitelist: WhitelistIdentity | None = None,
    ) -> ReservationResult:
        """One transaction: overlap re-check, slot, whitelist entry, reservation row.

        Overlap is judged again under the lock against committed reservations;
        two concurrent purchases by one user never both hold the same period.
        FCFS: both counters must move (registered < quota, sold < quota) or
        nothing does, and the answer is SOLD_OUT. WHL: the whitelist entry is
        the gate; counters are informational and saturate at quota.
        """
        now = datetime.now()
        with _ADMISSION_LOCK:
            self._conn.execute("BEGIN TRANSACTION")
            try:
                conflict = self._conflicting_period(user_id, membership_period, locker_period)
                if conflict is not None:
                    self._conn.execute("ROLLBACK")
                    return ReservationResult(reason_code=ReasonCode.PERIOD_OVERLAP, conflicting_period=conflict)

                whitelist_entry_id: int | None = None
                if consume_whitelist is not None:
                    whitelist_entry_id = self._consume_whitelist(company_id, category, consume_whitelist, now)
                    if whitelist_entry_id is None:
                        self._conn.execute("ROLLBACK")
                        return ReservationResult(reason_code=ReasonCode.NOT_WHITELISTED_FOR_PRODUCT)

                company_counted = self._take_company_slot(company_id)
                product_counted = self._take_product_unit(company_id, product_id)

                if mode == AdmissionMode.FCFS and not (company_counted and product_counted):
                    self._conn.execute("ROLLBACK")
                    return ReservationResult(reason_code=ReasonCode.SOLD_OUT)
                if not (company_counted and product_counted):
                    logger.warning(
                        "informational counter saturated: company=%s product=%s", company_id, product_id
                    )

                reservation_id = uuid.uuid4().hex
                self._conn.execute(
                    f"""
                    INSERT INTO reservation ({_RESERVATION_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,  # noqa: S608
                    [
                        reservation_id,
                        user_id,
                        company_id,
                        product_id,
                        category.value,
                        include_locker,
                        total_amount,
                        membership_period.start_date,
                        membership_period.end_date,
                        locker_period.start_date if locker_period else None,
                        locker_period.end_date if locker_period else None,
                        ReservationStatus.RESERVED.value,
                        now,
                        whitelist_entry_id,
                        company_counted,
                        product_counted,
                    ],
                )
                self._conn.execute("COMMIT")
            except Exception:
                self._conn.execute("ROLLBACK")
                raise

        return ReservationResult(
            reservation=Reservation(
                id=reservation_id,
                user_id=user_id,
                company_id=company_id,
                product_id=product_id,
                category=category,
                include_locker=include_locker,
                total_amount=total_amount,
                membership_period=membership_period,
                locker_period=locker_period,
                status=ReservationStatus.RESERVED,
                created_at=now,
            )
        )

    def complete(self, reservation_id: str) -> Reservation:
        """Payment collected. Only a RESERVED row can move to COMPLETED."""
        with _ADMISSION_LOCK:
            row = self._conn.execute(
                f"""
                UPDATE reservation SET status = 'completed'
                WHERE id = ? AND status = 'reserved'
                RETURNING {_RESERVATION_COLUMNS}
                """,  # noqa: S608
                [reservation_id],
            ).fetchone()
        if row is None:
            raise ReservationNotFoundError(reservation_id)
        return self._hydrate(row)

    def cancel(self, reservation_id: str) -> Reservation:
        """Release the slot: counters and whitelist entry come back in the same transaction."""
        with _ADMISSION_LOCK:
            self._conn.execute("BEGIN TRANSACTION")
            try:
                row = self._conn.execute(
                    f"""
                    UPDATE reservation SET status = 'cancelled'
                    WHERE id = ? AND status <> 'cancelled'
                    RETURNING {_RESERVATION_COLUMNS}
                    """,  # noqa: S608
                    [reservation_id],
                ).fetchone()
                if row is None:
                    self._conn.execute("ROLLBACK")
                    raise ReservationNotFoundError(reservation_id)

                company_id, product_id = str(row[2]), str(row[3])
                whitelist_entry_id, company_counted, product_counted = row[13], bool(row[14]), bool(row[15])
                if company_counted:
                    self._conn.execute(
                        "UPDATE company SET registered = registered - 1 WHERE id = ? AND registered > 0",
                        [company_id],
                    )
                if product_counted:
                    self._conn.execute(
                        """
                        UPDATE company_product SET sold = sold - 1
                        WHERE company_id = ? AND product_id = ? AND sold > 0
                        """,
                        [company_id, product_id],
                    )
                if whitelist_entry_id is not None:
                    self._conn.execute(
                        "UPDATE whitelist_entry SET consumed_at = NULL WHERE id = ?",
                        [whitelist_entry_id],
                    )
                self._conn.execute("COMMIT")
            except ReservationNotFoundError:
                raise
            except Exception:
                self._conn.execute("ROLLBACK")
                raise
        return self._hydrate(row)

    def _conflicting_period(
        self,
        user_id: str,
        membership: ExistingPeriod,
        locker: ExistingPeriod | None,
    ) -> ExistingPeriod | None:
        """Earliest live same-kind period sharing a day with the proposal. Membership first.

        Empty periods on either side never conflict, as in ExistingPeriod.overlaps()."""
        row = self._conn.execute(
            """
            SELECT membership_start_date, membership_end_date
            FROM reservation
            WHERE user_id = ? AND status <> 'cancelled'
              AND membership_start_date < membership_end_date
              AND membership_start_date < ? AND ? < membership_end_date
            ORDER BY membership_start_date, membership_end_date
            LIMIT 1
            """,
            [user_id, membership.end_date, membership.start_date],
        ).fetchone()
        if row is not None and not membership.is_empty:
            return ExistingPeriod(PeriodKind.MEMBERSHIP, _as_date(row[0]), _as_date(row[1]))
        if locker is None or locker.is_empty:
            return None
        row = self._conn.execute(
            """
            SELECT locker_start_date, locker_end_date
            FROM reservation
            WHERE user_id = ? AND status <> 'cancelled'
              AND locker_start_date IS NOT NULL AND locker_end_date IS NOT NULL
              AND locker_start_date < locker_end_date
              AND locker_start_date < ? AND ? < locker_end_date
            ORDER BY locker_start_date, locker_end_date
            LIMIT 1
            """,
            [user_id, locker.end_date, locker.start_date],
        ).fetchone()
        if row is not None:
            return ExistingPeriod(PeriodKind.LOCKER, _as_date(row[0]), _as_date(row[1]))
        return None

    def _take_company_slot(self, company_id: str) -> bool:
        row = self._conn.execute(
            """
            UPDATE company SET registered = registered + 1
            WHERE id = ? AND registered < quota
            RETURNING registered
            """,
            [company_id],
        ).fetchone()
        return row is not None

    def _take_product_unit(self, company_id: str, product_id: str) -> bool:
        row = self._conn.execute(
            """
            UPDATE company_product SET sold = sold + 1
            WHERE company_id = ? AND product_id = ? AND sold < quota
            RETURNING sold
            """,
            [company_id, product_id],
        ).fetchone()
        return row is not None

    def _consume_whitelist(
        self,
        company_id: str,
        category: ProductCategory,
        identity: WhitelistIdentity,
        now: datetime,
    ) -> int | None:
        row = self._conn.execute(
            """
            UPDATE whitelist_entry SET consumed_at = ?
            WHERE id = (
                SELECT min(id) FROM whitelist_entry
                WHERE company_id = ? AND category = ? AND employee_no = ? AND name_key = ?
                  AND consumed_at IS NULL
            )
            AND consumed_at IS NULL
            RETURNING id
            """,
            [now, company_id, category.value, identity.employee_no, identity.name],
        ).fetchone()
        return int(row[0]) if row is not None else None

    def _hydrate(self, row: tuple) -> Reservation:  # type: ignore[type-arg]
        """Columns follow _RESERVATION_COLUMNS."""
        locker = (
            ExistingPeriod(PeriodKind.LOCKER, _as_date(row[9]), _as_date(row[10]))
            if row[9] is not None and row[10] is not None
            else None
        )
        return Reservation(
            id=str(row[0]),
            user_id=str(row[1]),
            company_id=str(row[2]),
            product_id=str(row[3]),
            category=ProductCategory(str(row[4])),
            include_locker=bool(row[5]),
            total_amount=Decimal(str(row[6])),
            membership_period=ExistingPeriod(PeriodKind.MEMBERSHIP, _as_date(row[7]), _as_date(row[8])),
            locker_period=locker,
            status=ReservationStatus(str(row[11])),
            created_at=row[12],
        )


def _as_date(value: object) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))
