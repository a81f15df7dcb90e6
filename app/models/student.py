from __future__ import annotations

import datetime as dt

from sqlalchemy import Date, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base_class import Base


class Student(Base):
    __tablename__ = "siswa"
    __table_args__ = (
        UniqueConstraint("nisn", name="uq_siswa_nisn"),
        UniqueConstraint("nik", name="uq_siswa_nik"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    nama: Mapped[str] = mapped_column(String(120), nullable=False)
    jk: Mapped[str] = mapped_column(String(20), nullable=False)
    nisn: Mapped[str] = mapped_column(String(32), nullable=False)
    nik: Mapped[str] = mapped_column(String(32), nullable=False)
    nokk: Mapped[str] = mapped_column(String(32), nullable=False)
    tingkat: Mapped[str] = mapped_column(String(20), nullable=False)
    rombel: Mapped[str] = mapped_column(String(40), nullable=False)
    terdaftar: Mapped[str] = mapped_column(String(40), nullable=False)
    ttl: Mapped[str] = mapped_column(String(120), nullable=False)
    tgl_masuk: Mapped[dt.date] = mapped_column(Date, nullable=False)

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(tz=dt.UTC),
        nullable=False,
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: dt.datetime.now(tz=dt.UTC),
        onupdate=lambda: dt.datetime.now(tz=dt.UTC),
        nullable=False,
    )
