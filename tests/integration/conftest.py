# tests/integration/conftest.py
from __future__ import annotations

import os
from collections.abc import Generator

import duckdb
import pytest
from fastapi.testclient import TestClient

from api.domain.company.enums import ProductCategory
from api.domain.whitelist.entities import WhitelistEntry
from api.infrastructure.duckdb_connection import ensure_schema
from api.infrastructure.repositories.duckdb_whitelist_repo import DuckDBWhitelistRepo

# Rate limit off in tests
os.environ["API_RATE_LIMIT_PER_MINUTE"] = "0"


@pytest.fixture()
def test_db() -> Generator[duckdb.DuckDBPyConnection, None, None]:
    """Fresh in-memory DuckDB per test: admissions mutate counters."""
    conn = duckdb.connect(":memory:")
    ensure_schema(conn)

    # --- Companies ---
    # ACME: FCFS with room. LAST: FCFS with exactly one slot. FULL: FCFS at 20/20.
    # BETA: WHL lottery. SHUT: inactive.
    conn.execute("""
        INSERT INTO company VALUES
        ('c-acme', 'ACME', 'Acme', 'FCFS', 20, 0, 'active', '2025-01-01 00:00:00', '2099-12-31 23:59:59'),
        ('c-last', 'LAST', 'Last Slot', 'FCFS', 1, 0, 'active', '2025-01-01 00:00:00', '2099-12-31 23:59:59'),
        ('c-full', 'FULL', 'Full House', 'FCFS', 20, 20, 'active', '2025-01-01 00:00:00', '2099-12-31 23:59:59'),
        ('c-beta', 'BETA', 'Beta', 'WHL', 5, 0, 'active', '2025-01-01 00:00:00', '2099-12-31 23:59:59'),
        ('c-shut', 'SHUT', 'Shut', 'FCFS', 10, 0, 'inactive', '2025-01-01 00:00:00', '2099-12-31 23:59:59')
    """)

    # --- Products ---
    conn.execute("""
        INSERT INTO company_product VALUES
        ('c-acme', 'p-acme-full', '종일권', 'fullDay', 10, 0),
        ('c-acme', 'p-acme-morning', '오전권', 'morning', 10, 0),
        ('c-last', 'p-last-full', '종일권', 'fullDay', 1, 0),
        ('c-full', 'p-full-full', '종일권', 'fullDay', 20, 20),
        ('c-beta', 'p-beta-full', '종일권', 'fullDay', 5, 0),
        ('c-beta', 'p-beta-morning', '오전권', 'morning', 5, 0),
        ('c-beta', 'p-beta-evening', '오후권', 'evening', 5, 0),
        ('c-shut', 'p-shut-full', '종일권', 'fullDay', 10, 0)
    """)

    # --- Whitelist (BETA) ---
    whitelist = DuckDBWhitelistRepo(conn)
    whitelist.add(WhitelistEntry("c-beta", ProductCategory.FULL_DAY, "E-001", "김철수"))
    whitelist.add(WhitelistEntry("c-beta", ProductCategory.MORNING, "E-001", "김철수"))
    whitelist.add(WhitelistEntry("c-beta", ProductCategory.EVENING, "E-002", "이영희"))

    yield conn
    conn.close()


@pytest.fixture()
def client(test_db: duckdb.DuckDBPyConnection) -> Generator[TestClient, None, None]:
    """FastAPI TestClient with the in-memory DuckDB injected."""
    from api.infrastructure import duckdb_connection
    duckdb_connection.set_connection(test_db)

    # Clear cached settings so API_RATE_LIMIT_PER_MINUTE=0 and ADMISSION_* are re-read
    from api.infrastructure.config import get_admission_config, get_settings
    get_settings.cache_clear()
    get_admission_config.cache_clear()

    from api.interfaces.api.main import app
    with TestClient(app) as c:
        yield c

