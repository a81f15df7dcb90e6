from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import BaseModel

STUDENT_FIELDS = (
    "nama",
    "jk",
    "nisn",
    "nik",
    "nokk",
    "tingkat",
    "rombel",
    "terdaftar",
    "ttl",
    "tgl_masuk",
)


class StudentForm(BaseModel):
    """Valores crus do formulário, exatamente como o usuário enviou."""

    nama: str = ""
    jk: str = ""
    nisn: str = ""
    nik: str = ""
    nokk: str = ""
    tingkat: str = ""
    rombel: str = ""
    terdaftar: str = ""
    ttl: str = ""
    tgl_masuk: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> StudentForm:
        return cls(
            **{k: str(data[k]) for k in STUDENT_FIELDS if data.get(k) is not None}
        )

    @classmethod
    def from_record(cls, record: Any) -> StudentForm:
        values = {k: getattr(record, k) for k in STUDENT_FIELDS}
        tgl = values.get("tgl_masuk")
        values["tgl_masuk"] = tgl.isoformat() if isinstance(tgl, date) else ""
        return cls(**values)


class FieldError(BaseModel):
    field: str
    message: str


class StudentSubmission(BaseModel):
    """Formulário ecoado + anotações de erro por campo."""

    form: StudentForm
    errors: list[FieldError] = []

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def messages(self) -> list[str]:
        return [e.message for e in self.errors]

    def messages_for(self, field: str) -> list[str]:
        return [e.message for e in self.errors if e.field == field]


class StudentIn(BaseModel):
    """Registro já validado, pronto para ser gravado."""

    nama: str
    jk: str
    nisn: str
    nik: str
    nokk: str
    tingkat: str
    rombel: str
    terdaftar: str
    ttl: str
    tgl_masuk: date

    @classmethod
    def from_form(cls, form: StudentForm) -> StudentIn:
        return cls(
            **form.model_dump(exclude={"tgl_masuk"}),
            tgl_masuk=date.fromisoformat(form.tgl_masuk),
        )
