import pytest
from fastapi.testclient import TestClient

from backend.app.core.security import create_access_token
from backend.app.db.base import Base
from backend.app.db.session import SessionLocal, engine
from backend.app.main import app
from backend.app.models.user import User


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def register(client: TestClient, email: str, password: str = "secret", full_name: str | None = None):
    payload = {"email": email, "password": password}
    if full_name:
        payload["full_name"] = full_name
    return client.post("/api/auth/register", json=payload)


def login(client: TestClient, email: str, password: str = "secret"):
    return client.post("/api/auth/login", json={"email": email, "password": password})


def test_register_freelancer_account():
    client = TestClient(app)
    response = register(client, "ada@studio.example.com", full_name="Ada Lovelace")
    assert response.status_code == 200
    data = response.json()
    assert data["email"] == "ada@studio.example.com"
    assert data["full_name"] == "Ada Lovelace"
    assert "hashed_password" not in data

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "ada@studio.example.com").one()
        assert user.is_active
        assert user.hashed_password != "secret"


def test_register_rejects_duplicate_email_and_bad_email():
    client = TestClient(app)
    assert register(client, "dup@studio.example.com").status_code == 200
    assert register(client, "dup@studio.example.com").status_code == 400
    assert register(client, "not-an-email").status_code == 400


def test_login_issues_bearer_token_for_profile():
    client = TestClient(app)
    register(client, "grace@studio.example.com", full_name="Grace Hopper")
    response = login(client, "grace@studio.example.com")
    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {data['access_token']}"})
    assert me.status_code == 200
    assert me.json()["full_name"] == "Grace Hopper"


@pytest.mark.parametrize(
    "email,password",
    [("grace@studio.example.com", "wrong"), ("nobody@studio.example.com", "secret")],
)
def test_login_with_bad_credentials_returns_400(email, password):
    client = TestClient(app)
    register(client, "grace@studio.example.com")
    response = login(client, email, password)
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid credentials"


def test_inactive_user_cannot_log_in_or_use_old_token():
    client = TestClient(app)
    register(client, "paused@studio.example.com")
    token = login(client, "paused@studio.example.com").json()["access_token"]

    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "paused@studio.example.com").one()
        user.is_active = False
        db.commit()

    assert login(client, "paused@studio.example.com").status_code == 400
    assert client.get("/api/clients", headers={"Authorization": f"Bearer {token}"}).status_code == 401


@pytest.mark.parametrize(
    "header",
    [None, "Token abc", "Bearer not-a-token", f"Bearer {create_access_token(user_id=999)}"],
)
def test_protected_routes_reject_missing_or_unknown_principal(header):
    client = TestClient(app)
    headers = {"Authorization": header} if header else {}
    response = client.get("/api/invoices", headers=headers)
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authenticated"
