import os
import sys
import tempfile
from datetime import date
from pathlib import Path

# Banco SQLite em arquivo, configurado ANTES de importar o app
_TMP_DIR = Path(tempfile.mkdtemp(prefix="dapodik-tests-"))
os.environ["DATABASE_URL"] = f"sqlite:///{_TMP_DIR / 'test.db'}"
os.environ.setdefault("SECRET_KEY", "test-secret")
os.environ.setdefault("LOG_JSON", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import pytest

import app.db.base  # noqa: F401
from app.core.security import hash_password
from app.db.base_class import Base
from app.db.session import SessionLocal, engine
from app.models.student import Student
from app.models.user import User

VALID_FORM = {
    "nama": "Ardan Aras",
    "jk": "Laki-laki",
    "nisn": "12345678",
    "nik": "1234567890123456",
    "nokk": "1234567890123456",
    "tingkat": "7",
    "rombel": "7A",
    "terdaftar": "Siswa Baru",
    "ttl": "Makassar, 12-03-2012",
    "tgl_masuk": "2024-07-15",
}


@pytest.fixture(autouse=True)
def tables():
    """Cria o schema do zero para cada teste."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    """TestClient com lifespan (check do banco + bootstrap do admin)."""
    from fastapi.testclient import TestClient

    from app.main import app

    with TestClient(app) as client:
        yield client


@pytest.fixture
def auth_client(client):
    response = client.post(
        "/login",
        data={"username": "admin", "password": "admin"},
        follow_redirects=False,
    )
    assert response.status_code == 303
    return client


@pytest.fixture
def valid_form():
    return dict(VALID_FORM)


@pytest.fixture
def make_student(db_session):
    def _make(**overrides) -> Student:
        values = {**VALID_FORM, "tgl_masuk": date(2024, 7, 15), **overrides}
        student = Student(**values)
        db_session.add(student)
        db_session.commit()
        db_session.refresh(student)
        return student

    return _make


@pytest.fixture
def test_user(db_session):
    user = User(username="operator", password_hash=hash_password("Operator123!"))
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
