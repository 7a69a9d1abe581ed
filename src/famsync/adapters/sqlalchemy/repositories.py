"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from collections import Counter
from contextlib import contextmanager
from datetime import UTC, datetime, time, timedelta
from typing import TYPE_CHECKING

from sqlalchemy import or_, select
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from famsync.adapters.sqlalchemy.mappings import household_table
from famsync.domain.errors import PersistenceError
from famsync.domain.model import Household

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from datetime import date
    from uuid import UUID

    from sqlalchemy import Select
    from sqlalchemy.orm import Session

    from famsync.domain.model import Barcode, LegacyId, SiteId


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise SQLAlchemy failures as the domain's ``PersistenceError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        reason = exc.orig if isinstance(exc, DBAPIError) else exc
        raise PersistenceError(f"Could not {action}: {reason}") from exc


class SqlAlchemyHouseholdRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def add(self, entity: Household) -> None:
        self.session.add(entity)

    def get(self, household_id: UUID) -> Household | None:
        with translate_errors("load household"):
            return self.session.get(Household, household_id)

    def get_by_legacy_id(self, site_id: SiteId, legacy_id: LegacyId) -> Household | None:
        stmt = (
            self._active(site_id)
            .where(household_table.c.legacy_id == legacy_id)
            .order_by(household_table.c.id)
            .limit(1)
        )
        with translate_errors("look up household"):
            return self.session.execute(stmt).scalar_one_or_none()

    def find_claimable_by_barcode(self, site_id: SiteId, barcode: Barcode) -> Household | None:
        stmt = (
            self._active(site_id)
            .where(household_table.c.legacy_id.is_(None))
            .where(household_table.c._barcode_id == barcode)  # noqa: SLF001
            .order_by(household_table.c.id)
            .limit(1)
        )
        with translate_errors("look up household"):
            return self.session.execute(stmt).scalar_one_or_none()

    def find_conflicting_by_barcode(
        self,
        site_id: SiteId,
        barcode: Barcode,
        *,
        exclude_id: UUID,
    ) -> Sequence[Household]:
        stmt = (
            self._active(site_id)
            .where(household_table.c.legacy_id.is_(None))
            .where(household_table.c._barcode_id == barcode)  # noqa: SLF001
            .where(household_table.c.id != exclude_id)
        )
        with translate_errors("list households"):
            return self.session.execute(stmt).scalars().all()

    def barcode_peers(self, site_id: SiteId, *, exclude_id: UUID) -> Sequence[Household]:
        stmt = (
            self._active(site_id)
            .where(household_table.c.id != exclude_id)
            .where(
                or_(
                    household_table.c._barcode_id.is_not(None),  # noqa: SLF001
                    household_table.c._alternate_barcode_id.is_not(None),  # noqa: SLF001
                )
            )
        )
        with translate_errors("list households"):
            return self.session.execute(stmt).scalars().all()

    def barcode_assignments_by_day(
        self,
        site_id: SiteId,
        *,
        since: date,
        until: date,
    ) -> dict[date, int]:
        start = datetime.combine(since, time.min, tzinfo=UTC)
        end = datetime.combine(until + timedelta(days=1), time.min, tzinfo=UTC)
        column = household_table.c.barcode_assigned_at
        stmt = (
            select(column)
            .where(household_table.c.site_id == site_id)
            .where(column.is_not(None))
            .where(column >= start)
            .where(column < end)
        )
        with translate_errors("count barcode assignments"):
            assigned = self.session.execute(stmt).scalars().all()
        return dict(Counter(moment.astimezone(UTC).date() for moment in assigned))

    @staticmethod
    def _active(site_id: SiteId) -> Select[tuple[Household]]:
        return (
            select(Household)
            .where(household_table.c.site_id == site_id)
            .where(household_table.c.deleted.is_(False))
        )
