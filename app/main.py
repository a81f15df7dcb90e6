from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import OperationalError
from starlette.middleware.sessions import SessionMiddleware

import app.db.base  # noqa: F401
from app.core.exceptions import StoreUnavailable, StudentNotFound, Unauthenticated
from app.core.logging import configure_logging, get_logger
from app.core.security import SecurityHeadersMiddleware
from app.core.settings import settings
from app.db import SessionLocal
from app.db.session import check_database
from app.middlewares.method_override import MethodOverrideMiddleware
from app.middlewares.telemetry import RequestContextMiddleware
from app.services.bootstrap import ensure_admin
from app.version import APP_VERSION, GIT_SHA
from app.web.routes import auth, pages, students
from app.web.templating import STATIC_DIR, render

configure_logging(json=settings.LOG_JSON, level=settings.LOG_LEVEL)


@asynccontextmanager
async def lifespan(_: FastAPI):
    log = get_logger()
    try:
        check_database()
    except StoreUnavailable as exc:
        # sem banco não há o que servir
        log.error("db.unavailable", phase="startup", error=str(exc))
        raise
    with SessionLocal() as db:
        ensure_admin(db)
    log.info("app.started", env=settings.APP_ENV.value, version=APP_VERSION)
    yield


app = FastAPI(debug=settings.DEBUG, lifespan=lifespan)
app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

# --- Middlewares (o último adicionado é o mais externo)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SECRET_KEY,
    session_cookie=settings.SESSION_COOKIE,
    max_age=settings.SESSION_MAX_AGE,
    same_site="strict",
    https_only=settings.SECURE_COOKIES,
)
app.add_middleware(MethodOverrideMiddleware)

app.include_router(auth.router)
app.include_router(pages.router)
app.include_router(students.router)


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, _: Unauthenticated):
    return RedirectResponse("/login", status_code=303)


@app.exception_handler(StudentNotFound)
async def student_not_found_handler(request: Request, exc: StudentNotFound):
    get_logger().info("student.not_found", nisn=exc.nisn)
    ctx = {"title": "Tidak Ditemukan", "message": "Data siswa tidak ditemukan!"}
    return render(request, "pages/error.html", ctx, status_code=404)


@app.exception_handler(OperationalError)
async def store_unavailable_handler(request: Request, exc: OperationalError):
    get_logger().error("db.unavailable", phase="request", error=str(exc.orig or exc))
    ctx = {
        "title": "Layanan Tidak Tersedia",
        "message": "Basis data sedang tidak dapat diakses. Coba lagi nanti.",
    }
    return render(request, "pages/error.html", ctx, status_code=503)


@app.get("/healthz", tags=["ops"])
def healthz():
    get_logger().info("health.check")
    return {
        "status": "ok",
        "env": settings.APP_ENV,
        "version": APP_VERSION,
        "git_sha": GIT_SHA,
    }


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
