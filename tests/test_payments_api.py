import inspect

import pytest
from fastapi.testclient import TestClient

from backend.app.api.payments import create_payment_intent
from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app
from backend.app.services.payment_gateway import FakeGateway, get_payment_gateway


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def gateway():
    fake = FakeGateway()
    app.dependency_overrides[get_payment_gateway] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_payment_gateway, None)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/api/auth/register", json={"email": email, "password": password})
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_invoice(client: TestClient, token: str) -> dict:
    client_id = client.post("/api/clients", json={"name": "Acme Corp"}, headers=auth(token)).json()["id"]
    resp = client.post(
        "/api/invoices",
        json={
            "clientId": client_id,
            "issueDate": "2026-10-01",
            "taxRate": 8.25,
            "lineItems": [{"description": "Design", "quantity": 10, "rate": 120}],
        },
        headers=auth(token),
    )
    assert resp.status_code == 201
    return resp.json()["invoice"]


def test_create_payment_intent_returns_client_secret(gateway):
    client = TestClient(app)
    token = register_and_login(client, "pay1@example.com", "secret")
    invoice = create_invoice(client, token)

    resp = client.post("/api/create-payment-intent", json={"invoiceId": invoice["id"]}, headers=auth(token))
    assert resp.status_code == 200
    assert resp.json()["clientSecret"].startswith("pi_fake_")
    assert gateway.calls == [
        {
            "amount": 129900,
            "currency": "usd",
            "metadata": {"invoiceId": str(invoice["id"]), "invoiceNumber": invoice["invoiceNumber"]},
        }
    ]


def test_missing_invoice_id_is_rejected(gateway):
    client = TestClient(app)
    token = register_and_login(client, "pay2@example.com", "secret")
    resp = client.post("/api/create-payment-intent", json={}, headers=auth(token))
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invoice ID is required"
    assert gateway.calls == []


def test_payment_intent_not_found_and_forbidden(gateway):
    client = TestClient(app)
    token_a = register_and_login(client, "pay3a@example.com", "secret")
    token_b = register_and_login(client, "pay3b@example.com", "secret")
    invoice = create_invoice(client, token_a)

    assert client.post("/api/create-payment-intent", json={"invoiceId": 9999}, headers=auth(token_a)).status_code == 404
    assert client.post("/api/create-payment-intent", json={"invoiceId": invoice["id"]}, headers=auth(token_b)).status_code == 403
    assert gateway.calls == []


def test_gateway_failure_returns_500(gateway):
    client = TestClient(app)
    token = register_and_login(client, "pay4@example.com", "secret")
    invoice = create_invoice(client, token)
    gateway.configure(should_succeed=False)

    resp = client.post("/api/create-payment-intent", json={"invoiceId": invoice["id"]}, headers=auth(token))
    assert resp.status_code == 500
    assert "clientSecret" not in resp.json()


def test_webhook_acknowledges():
    client = TestClient(app)
    resp = client.post("/api/stripe-webhook", json={"type": "payment_intent.succeeded"})
    assert resp.status_code == 200
    assert resp.json() == {"received": True}


def test_payment_intent_route_runs_in_threadpool():
    # The Stripe SDK call blocks on network I/O
    assert not inspect.iscoroutinefunction(create_payment_intent)
