# tests/integration/test_api_guards.py
from fastapi.testclient import TestClient


def _body(**overrides: object) -> dict[str, object]:
    body: dict[str, object] = {
        "user": {"id": "u-1", "company_id": "c-acme", "employee_no": "E-100", "name": "홍길동"},
        "company_id": "c-acme",
        "selection": {"product_ids": ["p-acme-full"], "include_locker": True},
        "accepted_agreements": ["personal", "sensitive"],
        "now": "2025-06-01T12:00:00",
    }
    body.update(overrides)
    return body


def test_all_guards_pass(client: TestClient) -> None:
    response = client.post("/api/guards", json=_body())
    assert response.status_code == 200
    assert response.json() == {"passed": True, "reason_code": None, "reason_message": None}


def test_before_window(client: TestClient) -> None:
    data = client.post("/api/guards", json=_body(now="2024-12-31T23:59:59")).json()
    assert data["reason_code"] == "WINDOW_CLOSED"
    assert data["reason_message"] == "등록 기간 전입니다."


def test_no_selection(client: TestClient) -> None:
    data = client.post("/api/guards", json=_body(selection={"product_ids": []})).json()
    assert data["reason_code"] == "NO_SELECTION"


def test_missing_agreement(client: TestClient) -> None:
    data = client.post("/api/guards", json=_body(accepted_agreements=["personal"])).json()
    assert data["reason_code"] == "AGREEMENT_REQUIRED"


def test_inactive_company(client: TestClient) -> None:
    user = {"id": "u-1", "company_id": "c-shut", "employee_no": "E-100", "name": "홍길동"}
    body = _body(user=user, company_id="c-shut", selection={"product_ids": ["p-shut-full"]})
    assert client.post("/api/guards", json=body).json()["reason_code"] == "COMPANY_INACTIVE"


def test_unknown_agreement_kind_is_422(client: TestClient) -> None:
    assert client.post("/api/guards", json=_body(accepted_agreements=["marketing"])).status_code == 422


def test_utc_instant_is_accepted(client: TestClient) -> None:
    response = client.post("/api/guards", json=_body(now="2025-06-01T12:00:00Z"))
    assert response.status_code == 200
    assert response.json()["passed"] is True
