"""Client ownership helpers."""

from sqlalchemy.orm import Session

from backend.app.core.errors import AuthorizationError, NotFoundError
from backend.app.crud.crud_client import client_crud
from backend.app.models.client import Client


def get_owned_client(db: Session, client_id: int, owner_id: int) -> Client:
    """Return the client, raising 404 when missing and 403 when owned by someone else."""
    client = client_crud.get(db, client_id=client_id)
    if client is None:
        raise NotFoundError("Client not found")
    if client.owner_id != owner_id:
        raise AuthorizationError("Unauthorized access to this client")
    return client


def ensure_client_owned(db: Session, client_id: int, owner_id: int) -> Client:
    """Invoice writes treat a missing client the same as a foreign one."""
    client = client_crud.get(db, client_id=client_id)
    if client is None or client.owner_id != owner_id:
        raise AuthorizationError("Unauthorized access to this client")
    return client
