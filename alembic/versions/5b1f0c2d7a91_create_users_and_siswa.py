"""create users and siswa

Revision ID: 5b1f0c2d7a91
Revises:
Create Date: 2026-10-19 10:12:44.503118

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b1f0c2d7a91"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=64), nullable=False),
        sa.Column("password_hash", sa.String(length=512), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "siswa",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("nama", sa.String(length=120), nullable=False),
        sa.Column("jk", sa.String(length=20), nullable=False),
        sa.Column("nisn", sa.String(length=32), nullable=False),
        sa.Column("nik", sa.String(length=32), nullable=False),
        sa.Column("nokk", sa.String(length=32), nullable=False),
        sa.Column("tingkat", sa.String(length=20), nullable=False),
        sa.Column("rombel", sa.String(length=40), nullable=False),
        sa.Column("terdaftar", sa.String(length=40), nullable=False),
        sa.Column("ttl", sa.String(length=120), nullable=False),
        sa.Column("tgl_masuk", sa.Date(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        # unicidade garantida pelo banco, não só pela validação do form
        sa.UniqueConstraint("nisn", name="uq_siswa_nisn"),
        sa.UniqueConstraint("nik", name="uq_siswa_nik"),
    )


def downgrade():
    op.drop_table("siswa")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
