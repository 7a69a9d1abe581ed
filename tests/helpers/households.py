"""Reusable fakes and builders for household related tests."""

from __future__ import annotations

from collections import Counter
from dataclasses import fields
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from famsync.domain.model import Gender, Household
from famsync.domain.ports.unit_of_work import HouseholdRepositories

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence
    from datetime import date
    from uuid import UUID

    from famsync.domain.model import Barcode, LegacyId, Person, SiteId

SITE_ID = 1
BARCODE_A = "1000000001"
BARCODE_B = "1000000002"
BARCODE_C = "1000000003"

MALE = Gender.MALE
FEMALE = Gender.FEMALE


def make_household(
    name: str = "Smith",
    *,
    site_id: SiteId = SITE_ID,
    legacy_id: LegacyId | None = None,
    barcode_id: Barcode | None = None,
    alternate_barcode_id: Barcode | None = None,
    barcode_id_changed: bool = False,
    deleted: bool = False,
) -> Household:
    """Build a household without going through the barcode write path."""

    return Household(
        site_id=site_id,
        legacy_id=legacy_id,
        name=name,
        last_name=name,
        _barcode_id=barcode_id,
        _alternate_barcode_id=alternate_barcode_id,
        barcode_id_changed=barcode_id_changed,
        deleted=deleted,
    )


def add_family(
    household: Household,
    *members: tuple[str, Gender | None, bool | None],
) -> list[Person]:
    """Append ``(first_name, gender, adult)`` members in sequence order."""

    return [
        household.add_member(first_name=first_name, gender=gender, adult=adult)
        for first_name, gender, adult in members
    ]


def fixed_clock(moment: datetime | None = None) -> Callable[[], datetime]:
    stamp = moment or datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

    def clock() -> datetime:
        return stamp

    return clock


class FakeHouseholdRepository:
    """Simple in-memory household repository, scoped like the real one."""

    def __init__(self, initial: Iterable[Household] | None = None) -> None:
        self.items: dict[UUID, Household] = {
            household.id: household for household in initial or []
        }

    def add(self, entity: Household) -> None:
        self.items[entity.id] = entity

    def get(self, household_id: UUID) -> Household | None:
        return self.items.get(household_id)

    def get_by_legacy_id(self, site_id: SiteId, legacy_id: LegacyId) -> Household | None:
        for household in self._active(site_id):
            if household.legacy_id == legacy_id:
                return household
        return None

    def find_claimable_by_barcode(self, site_id: SiteId, barcode: Barcode) -> Household | None:
        for household in self._active(site_id):
            if household.legacy_id is None and household.barcode_id == barcode:
                return household
        return None

    def find_conflicting_by_barcode(
        self,
        site_id: SiteId,
        barcode: Barcode,
        *,
        exclude_id: UUID,
    ) -> Sequence[Household]:
        return [
            household
            for household in self._active(site_id)
            if household.legacy_id is None
            and household.barcode_id == barcode
            and household.id != exclude_id
        ]

    def barcode_peers(self, site_id: SiteId, *, exclude_id: UUID) -> Sequence[Household]:
        return [
            household
            for household in self._active(site_id)
            if household.id != exclude_id
            and (household.barcode_id is not None or household.alternate_barcode_id is not None)
        ]

    def barcode_assignments_by_day(
        self,
        site_id: SiteId,
        *,
        since: date,
        until: date,
    ) -> dict[date, int]:
        days = [
            household.barcode_assigned_at.astimezone(UTC).date()
            for household in self.items.values()
            if household.site_id == site_id and household.barcode_assigned_at is not None
        ]
        return dict(Counter(day for day in days if since <= day <= until))

    def _active(self, site_id: SiteId) -> list[Household]:
        return [
            household
            for household in self.items.values()
            if household.site_id == site_id and not household.deleted
        ]


if TYPE_CHECKING:
    from famsync.domain.ports.persistence import HouseholdRepository

    _check_repo: HouseholdRepository = FakeHouseholdRepository()


type _PersonState = tuple[Person, dict[str, object]]
type _HouseholdState = tuple[dict[str, object], list[_PersonState]]


def _capture(household: Household) -> _HouseholdState:
    values = {
        field.name: getattr(household, field.name)
        for field in fields(household)
        if field.name != "_members"
    }
    members = [
        (member, {field.name: getattr(member, field.name) for field in fields(member)})
        for member in household._members  # noqa: SLF001
    ]
    return values, members


def _restore(household: Household, state: _HouseholdState) -> None:
    values, members = state
    for name, value in values.items():
        setattr(household, name, value)
    household._members[:] = [member for member, _ in members]  # noqa: SLF001
    for member, member_values in members:
        for name, value in member_values.items():
            setattr(member, name, value)


class FakeHouseholdUnitOfWork:
    """Unit of work with session-like commit/rollback over in-memory households.

    ``rollback`` restores every household (and member) to its state at the last
    commit and forgets households added since, keeping object identity intact.
    Exceptions queued in ``failing_commits`` are raised by the next commits.
    """

    def __init__(self, households: Iterable[Household] = ()) -> None:
        self.repository = FakeHouseholdRepository(households)
        self.repositories = HouseholdRepositories(households=self.repository)
        self.commits = 0
        self.rollbacks = 0
        self.entered = 0
        self.failing_commits: list[Exception] = []
        self._committed = self._snapshot()

    def __call__(self) -> FakeHouseholdUnitOfWork:
        return self

    def __enter__(self) -> FakeHouseholdUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: object | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        if self.failing_commits:
            raise self.failing_commits.pop(0)
        self.commits += 1
        self._committed = self._snapshot()

    def rollback(self) -> None:
        self.rollbacks += 1
        self.repository.items = {
            household_id: household
            for household_id, (household, _) in self._committed.items()
        }
        for household, state in self._committed.values():
            _restore(household, state)

    def stored(self) -> list[Household]:
        return list(self.repository.items.values())

    def _snapshot(self) -> dict[UUID, tuple[Household, _HouseholdState]]:
        return {
            household_id: (household, _capture(household))
            for household_id, household in self.repository.items.items()
        }
