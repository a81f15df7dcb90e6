from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.core.security import hash_password
from app.core.settings import settings
from app.models.user import User


def ensure_admin(
    db: Session,
    *,
    username: str | None = None,
    password: str | None = None,
) -> User | None:
    """Cria a conta inicial somente se ainda não existe nenhuma conta.

    Retorna o usuário criado, ou None quando já havia contas.
    """
    log = get_logger()
    existing = db.execute(select(func.count()).select_from(User)).scalar_one()
    if existing:
        log.info("bootstrap.admin_exists", accounts=existing)
        return None

    user = User(
        username=username or settings.ADMIN_USERNAME,
        password_hash=hash_password(password or settings.ADMIN_PASSWORD),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    log.info("bootstrap.admin_created", username=user.username)
    return user
