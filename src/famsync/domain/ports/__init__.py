"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import HouseholdRepository, Repository
from .unit_of_work import (
    HouseholdRepositories,
    HouseholdUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "HouseholdRepositories",
    "HouseholdRepository",
    "HouseholdUnitOfWork",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
