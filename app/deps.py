from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.exceptions import Unauthenticated
from app.core.logging import bind_username
from app.core.security import SESSION_EPOCH
from app.db import get_db
from app.models.user import User

SESSION_USER_KEY = "user"


def login_session(request: Request, user: User) -> None:
    request.session.clear()
    request.session[SESSION_USER_KEY] = {
        "id": user.id,
        "username": user.username,
        "epoch": SESSION_EPOCH,
    }


def logout_session(request: Request) -> str | None:
    data = request.session.get(SESSION_USER_KEY) or {}
    request.session.clear()
    return data.get("username")


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:  # noqa: B008
    data = request.session.get(SESSION_USER_KEY)
    if not data or not data.get("id"):
        raise Unauthenticated()
    # sessão emitida por outro processo (restart)
    if data.get("epoch") != SESSION_EPOCH:
        request.session.clear()
        raise Unauthenticated()

    user: User | None = db.get(User, data["id"])
    if user is None:
        request.session.clear()
        raise Unauthenticated()

    bind_username(user.username)
    return user
