# tests/integration/test_api_companies.py
from fastapi.testclient import TestClient


def test_status_board_lists_every_company(client: TestClient) -> None:
    response = client.get("/api/companies")
    assert response.status_code == 200
    codes = [c["code"] for c in response.json()]
    assert codes == ["ACME", "BETA", "FULL", "LAST", "SHUT"]


def test_status_board_shows_level(client: TestClient) -> None:
    board = {c["code"]: c for c in client.get("/api/companies").json()}
    assert board["ACME"]["level"] == "available"
    assert board["ACME"]["remaining"] == 20
    assert board["FULL"]["level"] == "full"
    assert board["FULL"]["remaining"] == 0
    assert board["FULL"]["registration_rate"] == 1.0


def test_company_detail_has_products(client: TestClient) -> None:
    response = client.get("/api/companies/c-beta")
    assert response.status_code == 200
    data = response.json()
    assert data["mode"] == "WHL"
    assert {p["category"] for p in data["products"]} == {"fullDay", "morning", "evening"}
    assert all(p["remaining_units"] == 5 for p in data["products"])


def test_unknown_company_is_404(client: TestClient) -> None:
    response = client.get("/api/companies/c-nope")
    assert response.status_code == 404


def test_security_headers(client: TestClient) -> None:
    response = client.get("/api/companies")
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
