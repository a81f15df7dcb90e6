from __future__ import annotations

from sqlalchemy.orm import Session

from app.core.exceptions import DuplicateIdentifier, ValidationFailure
from app.core.logging import get_logger
from app.models.student import Student
from app.schemas.students import FieldError, StudentForm, StudentIn, StudentSubmission
from app.services import student_store
from app.services.student_validator import validate_create, validate_update

_CREATE_CONFLICT_MESSAGES = {
    "nisn": "NISN sudah terdaftar!",
    "nik": "NIK sudah terdaftar!",
}
_UPDATE_CONFLICT_MESSAGES = {
    "nisn": "NISN sudah digunakan!",
    "nik": "NIK sudah digunakan!",
}


def _reject(submission: StudentSubmission, event: str) -> ValidationFailure:
    get_logger().info(
        event,
        nisn=submission.form.nisn,
        fields=sorted({e.field for e in submission.errors}),
    )
    return ValidationFailure(submission)


def _conflict(form: StudentForm, field: str, messages: dict[str, str]) -> ValidationFailure:
    submission = StudentSubmission(
        form=form, errors=[FieldError(field=field, message=messages[field])]
    )
    return _reject(submission, "student.conflict")


def create_student(db: Session, form: StudentForm) -> Student:
    submission = validate_create(db, form)
    if not submission.is_valid:
        raise _reject(submission, "student.validation_failed")

    try:
        student = student_store.insert_student(db, StudentIn.from_form(form))
    except DuplicateIdentifier as exc:
        raise _conflict(form, exc.field, _CREATE_CONFLICT_MESSAGES) from exc

    get_logger().info("student.created", student_id=student.id, nisn=student.nisn)
    return student


def update_student(db: Session, form: StudentForm, previous_nisn: str) -> Student:
    # registro inexistente é erro explícito, antes de validar
    student_store.get_student_or_raise(db, previous_nisn)

    submission = validate_update(db, form, previous_nisn)
    if not submission.is_valid:
        raise _reject(submission, "student.validation_failed")

    try:
        student = student_store.replace_student(
            db, previous_nisn, StudentIn.from_form(form)
        )
    except DuplicateIdentifier as exc:
        raise _conflict(form, exc.field, _UPDATE_CONFLICT_MESSAGES) from exc

    get_logger().info(
        "student.updated",
        student_id=student.id,
        nisn=student.nisn,
        previous_nisn=previous_nisn,
    )
    return student


def remove_student(db: Session, nisn: str) -> bool:
    removed = student_store.delete_student(db, nisn)
    get_logger().info("student.deleted", nisn=nisn, removed=removed)
    return removed
