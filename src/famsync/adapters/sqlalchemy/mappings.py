"""SQLAlchemy mapping metadata for the household domain model."""

from __future__ import annotations

import logging
import uuid
from datetime import UTC, datetime
from functools import cache
from typing import TYPE_CHECKING

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Dialect,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
    orm,
)
from sqlalchemy.orm import configure_mappers, relationship

from famsync.domain.model import Gender, Household, Person

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)

UUIDColumnType = Uuid[uuid.UUID]


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Barcode uniqueness is enforced by BarcodeConflictPolicy, not by the schema:
# soft-deleted households keep their values and must not block reuse.
household_table = Table(
    "household",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("site_id", Integer, nullable=False),
    Column("legacy_id", Integer, nullable=True),
    Column("name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("address1", String, nullable=True),
    Column("address2", String, nullable=True),
    Column("city", String, nullable=True),
    Column("state", String, nullable=True),
    Column("zip", String, nullable=True),
    Column("home_phone", String, nullable=True),
    Column("email", String, nullable=True),
    Column("share_address", Boolean, nullable=False, default=True),
    Column("share_home_phone", Boolean, nullable=False, default=True),
    Column("share_mobile_phone", Boolean, nullable=False, default=False),
    Column("share_work_phone", Boolean, nullable=False, default=False),
    Column("share_fax", Boolean, nullable=False, default=False),
    Column("share_email", Boolean, nullable=False, default=False),
    Column("share_birthday", Boolean, nullable=False, default=True),
    Column("share_anniversary", Boolean, nullable=False, default=True),
    Column("share_activity", Boolean, nullable=False, default=True),
    Column("wall_enabled", Boolean, nullable=False, default=True),
    Column("visible", Boolean, nullable=False, default=True),
    Column("deleted", Boolean, nullable=False, default=False),
    Column("barcode_id", String(50), key="_barcode_id", nullable=True),
    Column("alternate_barcode_id", String(50), key="_alternate_barcode_id", nullable=True),
    Column("barcode_assigned_at", UTCDateTime(), nullable=True),
    Column("barcode_id_changed", Boolean, nullable=False, default=False),
    Index("ix_household_site_legacy_id", "site_id", "legacy_id"),
    Index("ix_household_site_barcode_id", "site_id", "_barcode_id"),
    Index("ix_household_site_alternate_barcode_id", "site_id", "_alternate_barcode_id"),
)

person_table = Table(
    "person",
    mapper_registry.metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column(
        "household_id",
        UUIDColumnType,
        ForeignKey("household.id", ondelete="CASCADE"),
        key="_household_id",
        nullable=False,
    ),
    Column("sequence", Integer, nullable=False),
    Column("first_name", String, nullable=True),
    Column("last_name", String, nullable=True),
    Column("gender", Enum(Gender, native_enum=False), nullable=True),
    Column("adult", Boolean, nullable=True),
    Column("visible", Boolean, nullable=False, default=True),
    Column("deleted", Boolean, nullable=False, default=False),
    Column("synced_externally", Boolean, nullable=False, default=False),
    UniqueConstraint("_household_id", "sequence", name="uq_person_household_sequence"),
)


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the domain model."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(Person, person_table)

    mapper_registry.map_imperatively(
        Household,
        household_table,
        properties={
            "_members": relationship(
                Person,
                cascade="all, delete-orphan",
                order_by=person_table.c.sequence,
            ),
        },
    )

    configure_mappers()
    return mapper_registry


@cache
def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
