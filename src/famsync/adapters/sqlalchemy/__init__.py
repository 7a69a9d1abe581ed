"""SQLAlchemy adapter package for famsync."""

from __future__ import annotations

from .mappings import (
    create_all_tables,
    household_table,
    mapper_registry,
    person_table,
    start_mappers,
)
from .repositories import SqlAlchemyHouseholdRepository
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyHouseholdRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "create_all_tables",
    "household_table",
    "mapper_registry",
    "person_table",
    "shutdown",
    "start_mappers",
    "startup",
]
