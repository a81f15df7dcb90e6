from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentials
from app.core.security import verify_password
from app.models.user import User


def authenticate(db: Session, username: str, password: str) -> User:
    """Confere usuário (case-sensitive) e senha contra o hash gravado."""
    user = db.execute(
        select(User).where(User.username == username)
    ).scalar_one_or_none()
    if user is None or not verify_password(password, user.password_hash):
        raise InvalidCredentials(username)
    return user
