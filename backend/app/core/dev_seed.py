import os

from sqlalchemy.orm import Session

from backend.app.core.logging import get_logger
from backend.app.core.security import get_password_hash
from backend.app.models.client import Client
from backend.app.models.user import User

logger = get_logger(__name__)

DEFAULT_DEV_PASSWORD = "Secret123!"
DEFAULT_DEV_EMAIL = "freelancer@example.com"
DEFAULT_DEV_CLIENTS = [
    {"name": "Acme Corp", "email": "contact@acmecorp.com", "company_name": "Acme Corporation", "contact_person": "John Doe"},
    {"name": "Stark Industries", "email": "info@stark.com", "company_name": "Stark Industries", "contact_person": "Tony Stark"},
]


def ensure_default_dev_owner(db: Session) -> None:
    """
    Create a default freelancer account with a couple of clients for local development.
    Skips execution when running under pytest to avoid altering test expectations.
    """
    if os.getenv("PYTEST_CURRENT_TEST"):
        return

    existing = db.query(User).filter(User.email == DEFAULT_DEV_EMAIL).first()
    if existing:
        return

    user = User(
        email=DEFAULT_DEV_EMAIL,
        full_name="Sam Wilson",
        hashed_password=get_password_hash(DEFAULT_DEV_PASSWORD),
        is_active=True,
    )
    db.add(user)
    db.flush()
    for data in DEFAULT_DEV_CLIENTS:
        db.add(Client(owner_id=user.id, **data))
    db.commit()
    logger.info("Created default development user", email=DEFAULT_DEV_EMAIL)
