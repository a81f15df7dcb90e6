from __future__ import annotations

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateIdentifier, StudentNotFound
from app.models.student import Student
from app.schemas.students import StudentIn

_UNIQUE_FIELDS = ("nisn", "nik")


def list_students(db: Session) -> list[Student]:
    # ordem de inserção
    return list(db.execute(select(Student).order_by(Student.id.asc())).scalars())


def get_student(db: Session, nisn: str) -> Student | None:
    return db.execute(select(Student).where(Student.nisn == nisn)).scalar_one_or_none()


def get_student_or_raise(db: Session, nisn: str) -> Student:
    student = get_student(db, nisn)
    if student is None:
        raise StudentNotFound(nisn)
    return student


def _conflicting_field(db: Session, data: StudentIn, exclude_id: int | None) -> str:
    """Descobre qual identificador colidiu depois de um IntegrityError."""
    for field in _UNIQUE_FIELDS:
        stmt = select(Student.id).where(getattr(Student, field) == getattr(data, field))
        if exclude_id is not None:
            stmt = stmt.where(Student.id != exclude_id)
        if db.execute(stmt.limit(1)).first() is not None:
            return field
    return _UNIQUE_FIELDS[0]


def insert_student(db: Session, data: StudentIn) -> Student:
    student = Student(**data.model_dump())
    db.add(student)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateIdentifier(_conflicting_field(db, data, None)) from exc
    db.refresh(student)
    return student


def replace_student(db: Session, previous_nisn: str, data: StudentIn) -> Student:
    """Sobrescreve todos os campos do registro identificado por ``previous_nisn``."""
    student = get_student_or_raise(db, previous_nisn)
    student_id = student.id
    for field, value in data.model_dump().items():
        setattr(student, field, value)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateIdentifier(_conflicting_field(db, data, student_id)) from exc
    db.refresh(student)
    return student


def delete_student(db: Session, nisn: str) -> bool:
    """Remove pelo nisn. Idempotente: retorna False se nada foi removido."""
    result = db.execute(delete(Student).where(Student.nisn == nisn))
    db.commit()
    return bool(result.rowcount)
