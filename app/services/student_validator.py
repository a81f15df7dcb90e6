from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.models.student import Student
from app.schemas.students import FieldError, StudentForm, StudentSubmission


@dataclass(frozen=True)
class ValidationContext:
    db: Session
    # nisn do registro em edição (None na criação)
    previous_nisn: str | None = None


@dataclass(frozen=True)
class Rule(ABC):
    field: str
    message: str

    @abstractmethod
    def passes(self, value: str, ctx: ValidationContext) -> bool: ...


@dataclass(frozen=True)
class Required(Rule):
    def passes(self, value: str, ctx: ValidationContext) -> bool:
        return bool(value.strip())


@dataclass(frozen=True)
class ExactLength(Rule):
    length: int

    def passes(self, value: str, ctx: ValidationContext) -> bool:
        return len(value) == self.length


@dataclass(frozen=True)
class MaxLength(Rule):
    length: int

    def passes(self, value: str, ctx: ValidationContext) -> bool:
        return len(value) <= self.length


@dataclass(frozen=True)
class Numeric(Rule):
    def passes(self, value: str, ctx: ValidationContext) -> bool:
        return value.isascii() and value.isdigit()


@dataclass(frozen=True)
class IsoDate(Rule):
    def passes(self, value: str, ctx: ValidationContext) -> bool:
        if not value:
            # vazio já é coberto por Required
            return True
        try:
            date.fromisoformat(value)
        except ValueError:
            return False
        return True


@dataclass(frozen=True)
class Unique(Rule):
    """Nenhum registro no banco tem este valor na coluna ``field``.

    Com ``allow_previous``, o valor igual ao nisn anterior do registro em edição
    não conta como colisão.
    """

    allow_previous: bool = False

    def passes(self, value: str, ctx: ValidationContext) -> bool:
        if self.allow_previous and value == ctx.previous_nisn:
            return True
        column = getattr(Student, self.field)
        found = ctx.db.execute(
            select(Student.id).where(column == value).limit(1)
        ).first()
        return found is None


_FIELD_LABELS = {
    "nama": "Nama",
    "jk": "Jenis kelamin",
    "nisn": "NISN",
    "nik": "NIK",
    "nokk": "No. KK",
    "tingkat": "Tingkat",
    "rombel": "Rombel",
    "terdaftar": "Status terdaftar",
    "ttl": "Tempat, tanggal lahir",
    "tgl_masuk": "Tanggal masuk",
}


def _required(*fields: str) -> list[Rule]:
    return [Required(f, f"{_FIELD_LABELS[f]} wajib diisi!") for f in fields]


def _max_lengths() -> list[Rule]:
    """Limites derivados das colunas String(n) da tabela siswa."""
    rules: list[Rule] = []
    for field, label in _FIELD_LABELS.items():
        length = getattr(Student.__table__.c[field].type, "length", None)
        if length:
            rules.append(MaxLength(field, f"{label} terlalu panjang!", length))
    return rules


_COMMON_RULES: list[Rule] = [
    *_required("nama", "jk", "tingkat", "rombel", "terdaftar", "ttl", "tgl_masuk"),
    IsoDate("tgl_masuk", "Tanggal masuk tidak valid!"),
    *_max_lengths(),
]

# Na criação nisn/nik só têm o comprimento verificado, sem checagem numérica.
CREATE_RULES: list[Rule] = [
    ExactLength("nisn", "NISN wajib 8 digit angka!", 8),
    Unique("nisn", "NISN sudah terdaftar!"),
    ExactLength("nik", "NIK wajib 16 digit angka!", 16),
    Unique("nik", "NIK sudah terdaftar!"),
    ExactLength("nokk", "No. KK harus 16 digit angka!", 16),
    *_COMMON_RULES,
]

UPDATE_RULES: list[Rule] = [
    *_required("nisn", "nik"),
    Unique("nisn", "NISN sudah digunakan!", allow_previous=True),
    ExactLength("nokk", "No. KK harus 16 digit angka!", 16),
    Numeric("nokk", "No. KK harus angka!"),
    *_COMMON_RULES,
]


def run_rules(
    rules: list[Rule], form: StudentForm, ctx: ValidationContext
) -> StudentSubmission:
    """Avalia todas as regras (sem parar na primeira falha)."""
    errors = [
        FieldError(field=rule.field, message=rule.message)
        for rule in rules
        if not rule.passes(getattr(form, rule.field), ctx)
    ]
    return StudentSubmission(form=form, errors=errors)


def validate_create(db: Session, form: StudentForm) -> StudentSubmission:
    return run_rules(CREATE_RULES, form, ValidationContext(db=db))


def validate_update(
    db: Session, form: StudentForm, previous_nisn: str
) -> StudentSubmission:
    return run_rules(
        UPDATE_RULES, form, ValidationContext(db=db, previous_nisn=previous_nisn)
    )
