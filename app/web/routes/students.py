from __future__ import annotations

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from sqlalchemy.orm import Session

from app.core.exceptions import ValidationFailure
from app.db import get_db
from app.deps import get_current_user
from app.models.user import User
from app.schemas.students import StudentForm, StudentSubmission
from app.services import student_store, students
from app.web.flash import pop_flash, set_flash
from app.web.templating import render

router = APIRouter(prefix="/siswa")

ADD_TITLE = "Form Tambah Data Siswa"
EDIT_TITLE = "Form Ubah Data Siswa"


async def student_form(request: Request) -> StudentForm:
    return StudentForm.from_mapping(await request.form())


async def previous_nisn(request: Request) -> str:
    return str((await request.form()).get("oldNisn") or "")


def _render_form(
    request: Request,
    template: str,
    title: str,
    submission: StudentSubmission,
    current_user: User,
    **extra,
) -> HTMLResponse:
    ctx = {
        "title": title,
        "current_user": current_user,
        "submission": submission,
        "siswa": submission.form,
        **extra,
    }
    return render(request, template, ctx)


@router.get("", response_class=HTMLResponse, name="student_list")
def student_list(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    ctx = {
        "title": "Halaman Data Siswa",
        "current_user": current_user,
        "siswa": student_store.list_students(db),
        "flash": pop_flash(request),
    }
    return render(request, "pages/siswa/list.html", ctx)


@router.get("/add", response_class=HTMLResponse, name="student_add_form")
def student_add_form(
    request: Request,
    current_user: User = Depends(get_current_user),
):
    submission = StudentSubmission(form=StudentForm())
    return _render_form(request, "pages/siswa/add.html", ADD_TITLE, submission, current_user)


@router.post("", name="student_create")
def student_create(
    request: Request,
    form: StudentForm = Depends(student_form),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        students.create_student(db, form)
    except ValidationFailure as exc:
        return _render_form(
            request, "pages/siswa/add.html", ADD_TITLE, exc.submission, current_user
        )

    set_flash(request, "Data siswa berhasil ditambahkan!")
    return RedirectResponse("/siswa", status_code=303)


@router.get("/edit/{nisn:path}", response_class=HTMLResponse, name="student_edit_form")
def student_edit_form(
    request: Request,
    nisn: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    record = student_store.get_student_or_raise(db, nisn)
    submission = StudentSubmission(form=StudentForm.from_record(record))
    return _render_form(
        request,
        "pages/siswa/edit.html",
        EDIT_TITLE,
        submission,
        current_user,
        old_nisn=record.nisn,
    )


@router.put("", name="student_update")
def student_update(
    request: Request,
    form: StudentForm = Depends(student_form),
    old_nisn: str = Depends(previous_nisn),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        students.update_student(db, form, old_nisn)
    except ValidationFailure as exc:
        # re-renderiza com os valores enviados, não com os do banco
        return _render_form(
            request,
            "pages/siswa/edit.html",
            EDIT_TITLE,
            exc.submission,
            current_user,
            old_nisn=old_nisn,
        )

    set_flash(request, "Data siswa berhasil diubah!")
    return RedirectResponse("/siswa", status_code=303)


@router.delete("", name="student_delete")
def student_delete(
    request: Request,
    nisn: str = Form(""),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    students.remove_student(db, nisn)
    set_flash(request, "Data siswa berhasil dihapus!")
    return RedirectResponse("/siswa", status_code=303)
