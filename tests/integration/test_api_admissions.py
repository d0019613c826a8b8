# tests/integration/test_api_admissions.py
import duckdb
from fastapi.testclient import TestClient

AGREED = ["personal", "sensitive"]


def _body(
    company_id: str = "c-acme",
    product_id: str = "p-acme-full",
    user_id: str = "u-1",
    employee_no: str = "E-100",
    name: str = "홍길동",
    include_locker: bool = False,
) -> dict[str, object]:
    return {
        "user": {"id": user_id, "company_id": company_id, "employee_no": employee_no, "name": name},
        "company_id": company_id,
        "selection": {"product_ids": [product_id], "include_locker": include_locker},
        "accepted_agreements": AGREED,
    }


def _counters(db: duckdb.DuckDBPyConnection, company_id: str, product_id: str) -> tuple[int, int]:
    registered = db.execute("SELECT registered FROM company WHERE id = ?", [company_id]).fetchone()
    sold = db.execute(
        "SELECT sold FROM company_product WHERE company_id = ? AND product_id = ?", [company_id, product_id]
    ).fetchone()
    assert registered is not None and sold is not None
    return int(registered[0]), int(sold[0])


def test_fcfs_admission_returns_payment_request(client: TestClient, test_db: duckdb.DuckDBPyConnection) -> None:
    response = client.post("/api/admissions", json=_body(include_locker=True))
    assert response.status_code == 201
    data = response.json()
    assert data["admitted"] is True
    payment = data["payment_request"]
    assert payment["total_amount"] == "60500"
    assert payment["order_id"] == f"ACME-{payment['reservation_id']}"
    assert _counters(test_db, "c-acme", "p-acme-full") == (1, 1)


def test_sold_out_company_is_409(client: TestClient, test_db: duckdb.DuckDBPyConnection) -> None:
    response = client.post("/api/admissions", json=_body("c-full", "p-full-full"))
    assert response.status_code == 409
    data = response.json()
    assert data["admitted"] is False
    assert data["reason_code"] == "SOLD_OUT"
    assert data["payment_request"] is None
    assert _counters(test_db, "c-full", "p-full-full") == (20, 20)


def test_second_purchase_for_same_period_overlaps(client: TestClient) -> None:
    assert client.post("/api/admissions", json=_body()).status_code == 201
    response = client.post("/api/admissions", json=_body(product_id="p-acme-morning"))
    assert response.status_code == 409
    data = response.json()
    assert data["reason_code"] == "PERIOD_OVERLAP"
    assert data["conflicting_period"]["kind"] == "membership"


def test_missing_agreements_is_409(client: TestClient) -> None:
    body = _body()
    body["accepted_agreements"] = []
    response = client.post("/api/admissions", json=body)
    assert response.status_code == 409
    assert response.json()["reason_code"] == "AGREEMENT_REQUIRED"


def test_whl_entry_is_single_use(client: TestClient, test_db: duckdb.DuckDBPyConnection) -> None:
    first = client.post("/api/admissions", json=_body("c-beta", "p-beta-evening", "u-1", "E-002", "이영희"))
    assert first.status_code == 201

    # Another account presenting the same identity finds the entry consumed.
    second = client.post("/api/admissions", json=_body("c-beta", "p-beta-evening", "u-2", "E-002", "이영희"))
    assert second.status_code == 409
    assert second.json()["reason_code"] == "NOT_ON_WHITELIST"
    assert _counters(test_db, "c-beta", "p-beta-evening") == (1, 1)


def test_whl_category_outside_the_whitelist(client: TestClient) -> None:
    response = client.post("/api/admissions", json=_body("c-beta", "p-beta-morning", "u-1", "E-002", "이영희"))
    assert response.status_code == 409
    assert response.json()["reason_code"] == "NOT_WHITELISTED_FOR_PRODUCT"


def test_cancel_restores_counters_and_whitelist(client: TestClient, test_db: duckdb.DuckDBPyConnection) -> None:
    body = _body("c-beta", "p-beta-evening", "u-1", "E-002", "이영희")
    reservation_id = client.post("/api/admissions", json=body).json()["payment_request"]["reservation_id"]

    response = client.delete(f"/api/admissions/{reservation_id}")
    assert response.status_code == 200
    assert response.json()["status"] == "cancelled"
    assert _counters(test_db, "c-beta", "p-beta-evening") == (0, 0)

    # Period freed and entry back: the same purchase goes through again.
    assert client.post("/api/admissions", json=body).status_code == 201


def test_cancel_twice_is_404(client: TestClient) -> None:
    reservation_id = client.post("/api/admissions", json=_body()).json()["payment_request"]["reservation_id"]
    assert client.delete(f"/api/admissions/{reservation_id}").status_code == 200
    assert client.delete(f"/api/admissions/{reservation_id}").status_code == 404


def test_complete_marks_the_reservation_paid(client: TestClient) -> None:
    reservation_id = client.post("/api/admissions", json=_body()).json()["payment_request"]["reservation_id"]
    response = client.post(f"/api/admissions/{reservation_id}/complete")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "completed"
    assert data["membership_period"] == {"kind": "membership", "start_date": "2025-01-01", "end_date": "2025-04-01"}
    assert client.post(f"/api/admissions/{reservation_id}/complete").status_code == 404


def test_unknown_reservation_is_404(client: TestClient) -> None:
    assert client.delete("/api/admissions/nope").status_code == 404


def test_unknown_company_is_404(client: TestClient) -> None:
    assert client.post("/api/admissions", json=_body("c-nope", "p-x")).status_code == 404


def test_malformed_payload_is_422(client: TestClient) -> None:
    assert client.post("/api/admissions", json={"company_id": "c-acme"}).status_code == 422
