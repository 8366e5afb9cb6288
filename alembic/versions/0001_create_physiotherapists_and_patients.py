"""create physiotherapists and patients tables

Revision ID: 0001_create_patients
Revises:
Create Date: 2026-10-18

"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_create_patients"
down_revision = None
branch_labels = None
depends_on = None

_OPTIONAL_TEXT_COLUMNS = (
    "address_street",
    "address_postcode",
    "address_city",
    "email",
    "phone",
    "contact_person_first_name",
    "contact_person_last_name",
    "contact_person_address_street",
    "contact_person_address_postcode",
    "contact_person_address_city",
    "contact_person_email",
    "contact_person_phone",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "physiotherapists",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("is_active", sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_physiotherapists")),
        sa.UniqueConstraint("email", name=op.f("uq_physiotherapists_email")),
    )

    op.create_table(
        "patients",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("physiotherapist_id", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("pesel", sa.String(length=11), nullable=True),
        sa.Column("born_date", sa.Date(), nullable=True),
        sa.Column("gender", sa.String(length=6), nullable=True),
        *[sa.Column(name, sa.String(length=100), nullable=True) for name in _OPTIONAL_TEXT_COLUMNS],
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_patients")),
        sa.ForeignKeyConstraint(
            ["physiotherapist_id"],
            ["physiotherapists.id"],
            name=op.f("fk_patients_physiotherapist_id_physiotherapists"),
            ondelete="CASCADE",
        ),
    )
    op.create_index(
        op.f("ix_patients_physiotherapist_id"), "patients", ["physiotherapist_id"], unique=False
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_patients_physiotherapist_id"), table_name="patients")
    op.drop_table("patients")
    op.drop_table("physiotherapists")
