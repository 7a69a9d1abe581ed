"""Household aggregate and its members.

A household is scoped to one site, carries two barcode identifiers and is never
hard-deleted during normal operation: ``soft_delete`` flags it (and its members)
instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from famsync.domain.model.entity import Entity
from famsync.domain.model.enums import BarcodeField, WriteSource
from famsync.domain.model.primitives import utcnow

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from famsync.domain.model.enums import Gender
    from famsync.domain.model.primitives import Barcode, Clock, LegacyId, SiteId


# Changing any of these means the external donor system holds stale contact data.
EXTERNALLY_SYNCED_FIELDS: Final[frozenset[str]] = frozenset(
    {"address1", "address2", "city", "state", "zip", "home_phone"}
)

SHARE_FIELDS: Final[tuple[str, ...]] = (
    "share_address",
    "share_home_phone",
    "share_mobile_phone",
    "share_work_phone",
    "share_fax",
    "share_email",
    "share_birthday",
    "share_anniversary",
)


def normalize_barcode(value: object) -> Barcode | None:
    """Blank (or whitespace-only) input means "no barcode"."""

    if value is None:
        return None
    text = str(value)
    return text if text.strip() else None


@dataclass(eq=False, kw_only=True)
class Person(Entity):
    """Household member as seen by this package: ordering plus classification."""

    sequence: int
    first_name: str | None = None
    last_name: str | None = None
    gender: Gender | None = None
    adult: bool | None = None
    visible: bool = True
    deleted: bool = False
    synced_externally: bool = False

    @property
    def is_adult(self) -> bool:
        return bool(self.adult)

    @property
    def display_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    def soft_delete(self) -> None:
        self.deleted = True


@dataclass(eq=False, kw_only=True)
class Household(Entity):
    """The "family" record that batch updates are reconciled into."""

    site_id: SiteId
    legacy_id: LegacyId | None = None

    name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None
    home_phone: str | None = None
    email: str | None = None

    share_address: bool = True
    share_home_phone: bool = True
    share_mobile_phone: bool = False
    share_work_phone: bool = False
    share_fax: bool = False
    share_email: bool = False
    share_birthday: bool = True
    share_anniversary: bool = True
    share_activity: bool = True
    wall_enabled: bool = True
    visible: bool = True

    deleted: bool = False

    _barcode_id: Barcode | None = field(default=None, repr=False)
    _alternate_barcode_id: Barcode | None = field(default=None, repr=False)
    barcode_assigned_at: datetime | None = None
    barcode_id_changed: bool = False

    _members: list[Person] = field(default_factory=list["Person"], repr=False)

    @classmethod
    def with_default_sharing(
        cls,
        share_defaults: Mapping[str, bool],
        **attrs: object,
    ) -> Household:
        """Build a household whose share flags come from site privacy defaults."""

        values: dict[str, object] = dict(attrs)
        for name in SHARE_FIELDS:
            if name in share_defaults:
                values[name] = share_defaults[name]
        return cls(**values)  # pyright: ignore[reportArgumentType]

    # Barcodes ----------------------------------------------------------------

    @property
    def barcode_id(self) -> Barcode | None:
        return self._barcode_id

    @barcode_id.setter
    def barcode_id(self, value: Barcode | None) -> None:
        self.write_barcode(BarcodeField.PRIMARY, value)

    @property
    def alternate_barcode_id(self) -> Barcode | None:
        return self._alternate_barcode_id

    @alternate_barcode_id.setter
    def alternate_barcode_id(self, value: Barcode | None) -> None:
        self.write_barcode(BarcodeField.ALTERNATE, value)

    def barcode_for(self, barcode_field: BarcodeField) -> Barcode | None:
        if barcode_field is BarcodeField.PRIMARY:
            return self._barcode_id
        return self._alternate_barcode_id

    def write_barcode(
        self,
        barcode_field: BarcodeField,
        value: object,
        *,
        source: WriteSource = WriteSource.LOCAL,
        clock: Clock = utcnow,
    ) -> bool:
        """Store a barcode value, returning whether the stored value changed.

        Every effective write stamps ``barcode_assigned_at``. A local write of a
        new primary barcode raises ``barcode_id_changed``; writes made by the
        reconciler never do.
        """

        normalized = normalize_barcode(value)
        previous = self.barcode_for(barcode_field)
        if normalized == previous:
            return False
        if barcode_field is BarcodeField.PRIMARY:
            self._barcode_id = normalized
            if source is WriteSource.LOCAL:
                self.barcode_id_changed = True
        else:
            self._alternate_barcode_id = normalized
        self.barcode_assigned_at = clock()
        return True

    # Plain attributes --------------------------------------------------------

    def assign(self, name: str, value: object) -> bool:
        """Set a plain attribute and keep member re-sync markers current."""

        if getattr(self, name) == value:
            return False
        setattr(self, name, value)
        if name in EXTERNALLY_SYNCED_FIELDS:
            for member in self._members:
                member.synced_externally = False
        return True

    # Members -----------------------------------------------------------------

    @property
    def members(self) -> tuple[Person, ...]:
        return tuple(sorted(self._members, key=lambda member: member.sequence))

    @property
    def active_members(self) -> tuple[Person, ...]:
        return tuple(member for member in self.members if not member.deleted)

    def visible_members(self, *, can_view_hidden: bool = False) -> tuple[Person, ...]:
        if can_view_hidden:
            return self.active_members
        return tuple(member for member in self.active_members if member.visible)

    def add_member(
        self,
        *,
        first_name: str | None = None,
        last_name: str | None = None,
        gender: Gender | None = None,
        adult: bool | None = None,
        sequence: int | None = None,
    ) -> Person:
        taken = {member.sequence for member in self._members}
        if sequence is None:
            sequence = max(taken, default=0) + 1
        elif sequence in taken:
            raise ValueError(f"sequence {sequence} already used in this household")
        person = Person(
            sequence=sequence,
            first_name=first_name,
            last_name=last_name if last_name is not None else self.last_name,
            gender=gender,
            adult=adult,
        )
        self._members.append(person)
        return person

    def soft_delete(self) -> None:
        self.deleted = True
        for member in self._members:
            member.soft_delete()

    # Address -----------------------------------------------------------------

    @property
    def address(self) -> str:
        line1 = self.address1 or ""
        return f"{line1}\n{self.address2}" if self.address2 else line1

    @property
    def is_mappable(self) -> bool:
        return all((self.address1, self.city, self.state, self.zip))

    @property
    def short_zip(self) -> str:
        return (self.zip or "").split("-")[0]
