# tests/integration/test_rate_limit.py
from __future__ import annotations

import os
from collections.abc import Generator

import duckdb
import pytest
from fastapi.testclient import TestClient


@pytest.fixture()
def rate_limited_client(test_db: duckdb.DuckDBPyConnection) -> Generator[TestClient, None, None]:
    """Client with the limit on (3 req/min keeps the test fast)."""
    from api.infrastructure import duckdb_connection
    duckdb_connection.set_connection(test_db)

    from api.infrastructure.config import get_settings

    old_val = os.environ.get("API_RATE_LIMIT_PER_MINUTE", "0")
    os.environ["API_RATE_LIMIT_PER_MINUTE"] = "3"
    get_settings.cache_clear()

    # Fresh app so the middleware starts with an empty window.
    from fastapi import FastAPI

    from api.interfaces.api.main import app as base_app
    from api.interfaces.api.middleware.rate_limit import RateLimitMiddleware

    app = FastAPI()
    app.add_middleware(RateLimitMiddleware)
    app.router.routes.extend(base_app.router.routes)
    with TestClient(app) as c:
        yield c

    os.environ["API_RATE_LIMIT_PER_MINUTE"] = old_val
    get_settings.cache_clear()


def test_rate_limit_allows_within_limit(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        response = rate_limited_client.get("/api/companies")
        assert response.status_code == 200


def test_rate_limit_blocks_after_limit(rate_limited_client: TestClient) -> None:
    for _ in range(3):
        rate_limited_client.get("/api/companies")
    response = rate_limited_client.get("/api/companies")
    assert response.status_code == 429
    assert "Too many requests" in response.json()["detail"]
    assert int(response.headers["Retry-After"]) >= 1
