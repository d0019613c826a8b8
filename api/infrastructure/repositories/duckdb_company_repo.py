# api/infrastructure/repositories/duckdb_company_repo.py
from __future__ import annotations

import duckdb

from api.domain.admission.exceptions import CompanyNotFoundError
from api.domain.company.entities import Company, Product
from api.domain.company.enums import AdmissionMode, CompanyStatus, ProductCategory

_COMPANY_COLUMNS = "id, code, name, mode, quota, registered, status, available_from, available_until"


class DuckDBCompanyRepo:
    """Company Directory. Every read reflects the latest committed counters."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def get_company(self, company_id: str) -> Company:
        row = self._conn.execute(
            f"SELECT {_COMPANY_COLUMNS} FROM company WHERE id = ?",  # noqa: S608
            [company_id],
        ).fetchone()
        if row is None:
            raise CompanyNotFoundError(company_id)
        return self._hydrate(row, self._products_of(company_id))

    def list_companies(self) -> list[Company]:
        rows = self._conn.execute(
            f"SELECT {_COMPANY_COLUMNS} FROM company ORDER BY code",  # noqa: S608
        ).fetchall()
        return [self._hydrate(r, self._products_of(str(r[0]))) for r in rows]

    def _products_of(self, company_id: str) -> tuple[Product, ...]:
        rows = self._conn.execute(
            """
            SELECT product_id, name, category, quota, sold
            FROM company_product
            WHERE company_id = ?
            ORDER BY product_id
            """,
            [company_id],
        ).fetchall()
        return tuple(
            Product(
                id=str(r[0]),
                name=str(r[1]),
                category=ProductCategory(str(r[2])),
                quota=int(r[3]),
                sold=int(r[4]),
            )
            for r in rows
        )

    def _hydrate(self, row: tuple, products: tuple[Product, ...]) -> Company:  # type: ignore[type-arg]
        """Columns: id(0), code(1), name(2), mode(3), quota(4), registered(5),
        status(6), available_from(7), available_until(8)"""
        return Company(
            id=str(row[0]),
            code=str(row[1]),
            name=str(row[2]),
            mode=AdmissionMode(str(row[3])),
            quota=int(row[4]),
            registered=int(row[5]),
            status=CompanyStatus(str(row[6])),
            available_from=row[7],
            available_until=row[8],
            products=products,
        )
