# api/infrastructure/repositories/duckdb_whitelist_repo.py
from __future__ import annotations

import duckdb

from api.domain.company.enums import ProductCategory
from api.domain.whitelist.entities import WhitelistEntry, WhitelistSnapshot
from api.domain.whitelist.value_objects import WhitelistIdentity, normalize_name


class DuckDBWhitelistRepo:
    """Whitelist Store. Consumed entries (single-use mode) are no longer visible."""

    def __init__(self, conn: duckdb.DuckDBPyConnection) -> None:
        self._conn = conn

    def snapshot_for(self, company_id: str, employee_no: str, name: str) -> WhitelistSnapshot:
        identity = WhitelistIdentity.parse(employee_no, name)
        if identity is None:
            return WhitelistSnapshot(company_id=company_id)
        rows = self._conn.execute(
            """
            SELECT category, employee_no, name
            FROM whitelist_entry
            WHERE company_id = ?
              AND employee_no = ?
              AND name_key = ?
              AND consumed_at IS NULL
            ORDER BY id
            """,
            [company_id, identity.employee_no, identity.name],
        ).fetchall()
        entries = tuple(
            WhitelistEntry(
                company_id=company_id,
                category=ProductCategory(str(r[0])),
                employee_no=str(r[1]),
                name=str(r[2]),
            )
            for r in rows
        )
        return WhitelistSnapshot(company_id=company_id, entries=entries)

    def add(self, entry: WhitelistEntry) -> None:
        """Insert one approved (employee_no, name, category) row for a company."""
        identity = entry.identity
        self._conn.execute(
            """
            INSERT INTO whitelist_entry (company_id, category, employee_no, name, name_key)
            VALUES (?, ?, ?, ?, ?)
            """,
            [entry.company_id, entry.category.value, identity.employee_no, entry.name.strip(), normalize_name(entry.name)],
        )
