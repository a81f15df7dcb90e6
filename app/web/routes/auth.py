from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidCredentials
from app.core.logging import get_logger
from app.db import get_db
from app.deps import login_session, logout_session
from app.services.auth import authenticate
from app.web.flash import pop_flash, set_flash
from app.web.templating import render

router = APIRouter()

INVALID_LOGIN_MESSAGE = "Username atau password salah!"


@router.get("/login", response_class=HTMLResponse, name="auth_login_get")
def login_get(request: Request):
    ctx = {
        "title": "Login Admin",
        "flash": pop_flash(request),
    }
    return render(request, "pages/auth/login.html", ctx)


@router.post("/login", name="auth_login_post")
def login_post(
    request: Request,
    username: str = Form(""),
    password: str = Form(""),
    db: Session = Depends(get_db),
):
    log = get_logger()
    try:
        user = authenticate(db, username, password)
    except InvalidCredentials:
        log.info("auth.login.failed", username=username)
        set_flash(request, INVALID_LOGIN_MESSAGE, "danger")
        return RedirectResponse("/login", status_code=303)

    login_session(request, user)
    log.info("auth.login.success", username=user.username)
    return RedirectResponse("/", status_code=303)


@router.get("/logout", name="auth_logout")
def logout(request: Request):
    username = logout_session(request)
    get_logger().info("auth.logout", username=username)
    return RedirectResponse("/login", status_code=303)
