"""Erros da aplicação.

Os handlers registrados em ``app.main`` traduzem cada um deles para a
resposta HTTP adequada (redirect, página 404, página 503).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.schemas.students import StudentSubmission


class DapodikError(Exception):
    """Base para todos os erros da aplicação."""


class Unauthenticated(DapodikError):
    """Request sem sessão válida."""


class InvalidCredentials(DapodikError):
    """Usuário ou senha não conferem."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Invalid credentials for '{username}'")


class ValidationFailure(DapodikError):
    """Uma ou mais regras de campo falharam para a submissão."""

    def __init__(self, submission: StudentSubmission):
        self.submission = submission
        super().__init__("; ".join(e.message for e in submission.errors))


class StudentNotFound(DapodikError):
    def __init__(self, nisn: str):
        self.nisn = nisn
        super().__init__(f"Student '{nisn}' not found")


class DuplicateIdentifier(DapodikError):
    """A constraint UNIQUE do banco rejeitou a escrita (nisn ou nik)."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate value for '{field}'")


class StoreUnavailable(DapodikError):
    """Banco de dados inacessível."""
