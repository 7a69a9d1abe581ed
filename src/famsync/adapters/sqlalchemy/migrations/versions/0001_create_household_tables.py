"""create household tables

Revision ID: 0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""

from __future__ import annotations

from typing import TYPE_CHECKING

import sqlalchemy as sa
from alembic import op

from famsync.adapters.sqlalchemy.mappings import UTCDateTime

if TYPE_CHECKING:
    from collections.abc import Sequence

revision: str = "0001"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "household",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("site_id", sa.Integer(), nullable=False),
        sa.Column("legacy_id", sa.Integer(), nullable=True),
        sa.Column("name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("address1", sa.String(), nullable=True),
        sa.Column("address2", sa.String(), nullable=True),
        sa.Column("city", sa.String(), nullable=True),
        sa.Column("state", sa.String(), nullable=True),
        sa.Column("zip", sa.String(), nullable=True),
        sa.Column("home_phone", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("share_address", sa.Boolean(), nullable=False),
        sa.Column("share_home_phone", sa.Boolean(), nullable=False),
        sa.Column("share_mobile_phone", sa.Boolean(), nullable=False),
        sa.Column("share_work_phone", sa.Boolean(), nullable=False),
        sa.Column("share_fax", sa.Boolean(), nullable=False),
        sa.Column("share_email", sa.Boolean(), nullable=False),
        sa.Column("share_birthday", sa.Boolean(), nullable=False),
        sa.Column("share_anniversary", sa.Boolean(), nullable=False),
        sa.Column("share_activity", sa.Boolean(), nullable=False),
        sa.Column("wall_enabled", sa.Boolean(), nullable=False),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("barcode_id", sa.String(length=50), nullable=True),
        sa.Column("alternate_barcode_id", sa.String(length=50), nullable=True),
        sa.Column("barcode_assigned_at", UTCDateTime(), nullable=True),
        sa.Column("barcode_id_changed", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_household")),
    )
    with op.batch_alter_table("household", schema=None) as batch_op:
        batch_op.create_index("ix_household_site_legacy_id", ["site_id", "legacy_id"])
        batch_op.create_index("ix_household_site_barcode_id", ["site_id", "barcode_id"])
        batch_op.create_index(
            "ix_household_site_alternate_barcode_id", ["site_id", "alternate_barcode_id"]
        )

    op.create_table(
        "person",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("household_id", sa.Uuid(), nullable=False),
        sa.Column("sequence", sa.Integer(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column(
            "gender",
            sa.Enum("MALE", "FEMALE", name="gender", native_enum=False),
            nullable=True,
        ),
        sa.Column("adult", sa.Boolean(), nullable=True),
        sa.Column("visible", sa.Boolean(), nullable=False),
        sa.Column("deleted", sa.Boolean(), nullable=False),
        sa.Column("synced_externally", sa.Boolean(), nullable=False),
        sa.ForeignKeyConstraint(
            ["household_id"],
            ["household.id"],
            name=op.f("fk_person_household_id_household"),
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_person")),
        sa.UniqueConstraint("household_id", "sequence", name="uq_person_household_sequence"),
    )


def downgrade() -> None:
    op.drop_table("person")
    with op.batch_alter_table("household", schema=None) as batch_op:
        batch_op.drop_index("ix_household_site_alternate_barcode_id")
        batch_op.drop_index("ix_household_site_barcode_id")
        batch_op.drop_index("ix_household_site_legacy_id")
    op.drop_table("household")
