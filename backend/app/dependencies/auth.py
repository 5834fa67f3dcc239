"""Resolve the freelancer behind a request from its bearer token."""

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from backend.app.core.security import decode_access_token
from backend.app.db.session import get_db
from backend.app.models.user import User


def _not_authenticated() -> HTTPException:
    return HTTPException(status_code=401, detail="Not authenticated", headers={"WWW-Authenticate": "Bearer"})


def get_current_user(db: Session = Depends(get_db), authorization: str | None = Header(default=None)) -> User:
    scheme, _, token = (authorization or "").partition(" ")
    if scheme != "Bearer" or not token:
        raise _not_authenticated()
    try:
        subject = decode_access_token(token).get("sub")
        user_id = int(subject)
    except (TypeError, ValueError):
        raise _not_authenticated()

    user = db.query(User).filter(User.id == user_id).first()
    if user is None or not user.is_active:
        raise _not_authenticated()
    return user
