# scripts/seed.py
from __future__ import annotations

import os
from datetime import date

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.logging import configure_logging
from app.db import get_db
from app.models.student import Student
from app.services.bootstrap import ensure_admin

SEED_STUDENTS = int(os.getenv("SEED_STUDENTS", "5"))

# ---------------- Dados de Exemplo ----------------
STUDENTS_DATA = [
    ("Ardan Aras", "Laki-laki", "Makassar, 12-03-2012"),
    ("Siti Rahma", "Perempuan", "Bandung, 04-07-2012"),
    ("Budi Santoso", "Laki-laki", "Surabaya, 21-11-2011"),
    ("Dewi Lestari", "Perempuan", "Medan, 30-01-2012"),
    ("Rizky Pratama", "Laki-laki", "Jakarta, 15-09-2011"),
]


def get_session() -> Session:
    gen = get_db()
    session: Session = next(gen)
    return session


def ensure_student(db: Session, idx: int, nama: str, jk: str, ttl: str) -> Student:
    nisn = f"{10000000 + idx:08d}"
    student = db.execute(
        select(Student).where(Student.nisn == nisn)
    ).scalar_one_or_none()
    if student:
        return student

    student = Student(
        nama=nama,
        jk=jk,
        nisn=nisn,
        nik=f"{3200000000000000 + idx:016d}",
        nokk=f"{3200000000009000 + idx:016d}",
        tingkat="7",
        rombel=f"7{'ABC'[idx % 3]}",
        terdaftar="Siswa Baru",
        ttl=ttl,
        tgl_masuk=date(2024, 7, 15),
    )
    db.add(student)
    db.commit()
    db.refresh(student)
    print(f"[Seed] Siswa criado: {student.nama} ({student.nisn})")
    return student


def main() -> None:
    configure_logging(json=False)
    db = get_session()
    try:
        ensure_admin(db)
        for idx, (nama, jk, ttl) in enumerate(STUDENTS_DATA[:SEED_STUDENTS], start=1):
            ensure_student(db, idx, nama, jk, ttl)
    finally:
        db.close()
    print("[Seed] Concluído.")


if __name__ == "__main__":
    main()
