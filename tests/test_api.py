import pytest
from fastapi.testclient import TestClient
from app.main import app
from app.api.deps import get_session_registry
from app.core.alerts import alert_repo
from app.db.memory import SessionRegistry
from app.schemas.payment import PaymentAccount

client = TestClient(app)

HEADERS = {"Account-Id": "123", "Authorization": "Bearer token-abc"}
FEE = {"filingType": "ANNUAL_REPORT", "filingTypeCode": "BCANN", "total": 20, "filingFees": 20}


@pytest.fixture
def registry(pay_api, bar_api):
    alert_repo.clear()
    registry = SessionRegistry(pay_api, bar_api, alert_repo)
    app.dependency_overrides[get_session_registry] = lambda: registry
    yield registry
    app.dependency_overrides.clear()
    alert_repo.clear()


def test_health_is_public():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_missing_account_identifier_is_rejected(registry):
    response = client.get("/fees")
    assert response.status_code == 400
    assert response.json()["detail"] == "Missing account identifier"


def test_add_and_remove_fee(registry):
    client.post("/fees", json=FEE, headers=HEADERS)
    response = client.post("/fees", json=FEE, headers=HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert len(data["fees"]) == 1
    assert data["fees"][0]["quantity"] == 2
    assert data["fees"][0]["uiUuid"]
    assert data["total"] == 40.0

    client.post("/fees/remove", json=FEE, headers=HEADERS)
    response = client.post("/fees/remove", json=FEE, headers=HEADERS)
    assert response.json()["fees"] == []


def test_invalid_fee_leaves_ledger_unchanged(registry):
    response = client.post("/fees", json={"filingTypeCode": "BCANN", "total": None, "filingFees": 20}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["fees"] == []


def test_sessions_are_isolated_per_account(registry):
    client.post("/fees", json=FEE, headers=HEADERS)
    response = client.get("/fees", headers={"Account-Id": "456"})
    assert response.json()["fees"] == []
    assert sorted(registry.account_ids()) == ["123", "456"]


def test_account_cookie_is_accepted(registry):
    client.cookies.set("bar_account_id", "789")
    try:
        response = client.get("/fees")
    finally:
        client.cookies.clear()
    assert response.status_code == 200
    assert "789" in registry.account_ids()


def test_load_and_lookup_fee_info(registry, pay_api):
    body = {"folioNumber": "FOLIO-1", "filingData": [{"entityType": "BC", "filingTypeCode": "BCANN"}]}
    response = client.post("/fees/load", json=body, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["folioNumber"] == "FOLIO-1"
    assert len(response.json()["feeInfo"]) == 1

    response = client.post("/fees/info", json={"entityType": "BC", "filingTypeCode": "BCANN"}, headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["total"] == 20
    assert pay_api.calls == [("BC", "BCANN")]


def test_fee_info_not_found(registry):
    response = client.post("/fees/info?load=false", json={"entityType": "BC", "filingTypeCode": "BCANN"}, headers=HEADERS)
    assert response.status_code == 404


def test_add_pay_fees_by_code(registry):
    response = client.post("/fees/codes/BCANN", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["fees"][0]["filingTypeCode"] == "BCANN"


def test_unknown_fee_code_raises_alert(registry):
    response = client.post("/fees/codes/UNKNOWN", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["fees"] == []

    alerts = client.get("/alerts", headers=HEADERS).json()
    assert [a["category"] for a in alerts] == ["FEE_INFO"]

    assert client.delete("/alerts", headers=HEADERS).status_code == 204
    assert client.get("/alerts", headers=HEADERS).json() == []


def test_reset_fees(registry):
    client.post("/fees/codes/BCANN", headers=HEADERS)
    response = client.post("/fees/reset", headers=HEADERS)
    data = response.json()
    assert data["fees"] == []
    assert data["feeInfo"] == []
    assert data["folioNumber"] == ""


def test_init_payment_method_passes_token(registry, bar_api):
    response = client.post("/payment/init", headers=HEADERS)
    assert response.status_code == 200
    data = response.json()
    assert data["state"] == "READY"
    assert data["userSelectedPaymentMethod"] == "PAD"
    assert data["allowAlternatePaymentMethod"] is True
    assert bar_api.calls == [("123", "token-abc")]


def test_pending_pad_selection_is_reverted(registry, bar_api):
    bar_api.account = PaymentAccount.model_validate({
        "paymentMethod": "PAD",
        "cfsAccount": {"status": "PENDING_PAD_ACTIVATION"},
    })
    client.post("/payment/init", headers=HEADERS)

    response = client.put("/payment/method", json={"paymentMethod": "PAD"}, headers=HEADERS)
    assert response.json()["userSelectedPaymentMethod"] == "DIRECT_PAY"

    alerts = client.get("/alerts", headers=HEADERS).json()
    assert [a["category"] for a in alerts] == ["PAYMENT_METHOD"]


def test_init_payment_failure(registry, bar_api, network_error):
    bar_api.error = network_error
    response = client.post("/payment/init", headers=HEADERS)
    assert response.status_code == 200
    assert response.json()["state"] == "FAILED"
    assert response.json()["allowAlternatePaymentMethod"] is False

    alerts = client.get("/alerts", headers=HEADERS).json()
    assert [a["category"] for a in alerts] == ["PAYMENT_METHOD"]


def test_invalid_payment_method_is_rejected(registry):
    response = client.put("/payment/method", json={"paymentMethod": "CHEQUE"}, headers=HEADERS)
    assert response.status_code == 422


def test_end_session_drops_store_and_alerts(registry):
    client.post("/fees", json=FEE, headers=HEADERS)
    client.post("/fees/codes/UNKNOWN", headers=HEADERS)
    client.post("/fees/codes/UNKNOWN", headers={"Account-Id": "456"})

    response = client.delete("/session", headers=HEADERS)
    assert response.status_code == 204
    assert "123" not in registry.account_ids()
    assert alert_repo.get_all("123") == []
    assert len(alert_repo.get_all("456")) == 1

    # A fresh store is opened on the next request
    assert client.get("/fees", headers=HEADERS).json()["fees"] == []
