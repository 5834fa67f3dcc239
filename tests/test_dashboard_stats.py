from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/api/auth/register", json={"email": email, "password": password})
    resp = client.post("/api/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def create_invoice(client: TestClient, token: str, client_id: int, quantity: float, rate: float, tax_rate: float = 0) -> dict:
    resp = client.post(
        "/api/invoices",
        json={
            "clientId": client_id,
            "issueDate": "2026-10-01",
            "paymentTerms": "net_30",
            "taxRate": tax_rate,
            "lineItems": [{"description": "Work", "quantity": quantity, "rate": rate}],
        },
        headers=auth(token),
    )
    assert resp.status_code == 201
    return resp.json()["invoice"]


def test_empty_dashboard():
    client = TestClient(app)
    token = register_and_login(client, "dash1@example.com", "secret")
    resp = client.get("/api/dashboard/stats", headers=auth(token))
    assert resp.status_code == 200
    assert resp.json() == {"invoicesIssued": 0, "pendingPayment": 0, "paid": 0, "totalRevenue": "0.00"}


def test_marking_invoice_paid_moves_counts_and_revenue():
    client = TestClient(app)
    token = register_and_login(client, "dash2@example.com", "secret")
    client_id = client.post("/api/clients", json={"name": "Acme Corp"}, headers=auth(token)).json()["id"]
    invoice = create_invoice(client, token, client_id, 10, 120, tax_rate=8.25)
    create_invoice(client, token, client_id, 1, 50)

    before = client.get("/api/dashboard/stats", headers=auth(token)).json()
    assert before == {"invoicesIssued": 2, "pendingPayment": 2, "paid": 0, "totalRevenue": "0.00"}

    client.patch(f"/api/invoices/{invoice['id']}/status", json={"status": "paid"}, headers=auth(token))

    after = client.get("/api/dashboard/stats", headers=auth(token)).json()
    assert after["paid"] == before["paid"] + 1
    assert after["pendingPayment"] == before["pendingPayment"] - 1
    assert after["invoicesIssued"] == 2
    assert Decimal(after["totalRevenue"]) == Decimal(before["totalRevenue"]) + Decimal(invoice["total"])
    assert after["totalRevenue"] == "1299.00"


def test_other_statuses_count_only_as_issued():
    client = TestClient(app)
    token = register_and_login(client, "dash3@example.com", "secret")
    client_id = client.post("/api/clients", json={"name": "Acme Corp"}, headers=auth(token)).json()["id"]
    for status in ("draft", "overdue", "cancelled"):
        invoice = create_invoice(client, token, client_id, 1, 10)
        client.patch(f"/api/invoices/{invoice['id']}/status", json={"status": status}, headers=auth(token))

    stats = client.get("/api/dashboard/stats", headers=auth(token)).json()
    assert stats == {"invoicesIssued": 3, "pendingPayment": 0, "paid": 0, "totalRevenue": "0.00"}


def test_dashboard_is_owner_scoped():
    client = TestClient(app)
    token_a = register_and_login(client, "dash4a@example.com", "secret")
    token_b = register_and_login(client, "dash4b@example.com", "secret")
    client_id = client.post("/api/clients", json={"name": "Acme Corp"}, headers=auth(token_a)).json()["id"]
    create_invoice(client, token_a, client_id, 1, 10)

    assert client.get("/api/dashboard/stats", headers=auth(token_b)).json()["invoicesIssued"] == 0
    assert client.get("/api/dashboard/stats").status_code == 401
