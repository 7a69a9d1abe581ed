"""Barcode uniqueness, format and provenance rules for households.

Two identifier fields exist per household (``barcode_id`` and
``alternate_barcode_id``). Within one site, a value may appear only once across
*both* fields of all active households. Deleted households never take part in
the scan.

Provenance: a local write of a new primary barcode raises
``barcode_id_changed`` so that an older batch export cannot silently revert it.
Writes performed by the reconciler go through ``record_sync_write`` and leave
the flag alone.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Final

from famsync.domain.errors import DuplicateIdentifier, InvalidFormat, SelfCollision
from famsync.domain.model import BarcodeField, WriteSource, utcnow

if TYPE_CHECKING:
    from collections.abc import Iterable

    from famsync.domain.errors import BarcodeValidationError
    from famsync.domain.model import Barcode, Clock, Household

_DIGITS: Final[re.Pattern[str]] = re.compile(r"[0-9]+")

_FIELD_LABELS: Final[dict[BarcodeField, str]] = {
    BarcodeField.PRIMARY: "Barcode id",
    BarcodeField.ALTERNATE: "Alternate barcode id",
}


@dataclass(frozen=True, slots=True)
class BarcodeConflictPolicy:
    """Decide whether a household's barcode values may be persisted."""

    min_length: int = 10
    max_length: int = 50
    clock: Clock = field(default=utcnow)

    def violations(
        self,
        household: Household,
        peers: Iterable[Household],
    ) -> list[BarcodeValidationError]:
        """Return every rule ``household`` breaks against ``peers``.

        ``peers`` may contain anything the caller loaded for the site; other
        sites, deleted households and ``household`` itself are ignored here.
        A deleted household is only checked against itself.
        """

        taken = set() if household.deleted else self._taken_values(household, peers)
        errors: list[BarcodeValidationError] = []
        for barcode_field in BarcodeField:
            value = household.barcode_for(barcode_field)
            if value is None:
                continue
            label = _FIELD_LABELS[barcode_field]
            if not self.is_well_formed(value):
                errors.append(
                    InvalidFormat(
                        barcode_field,
                        f"{label} must be {self.min_length} to {self.max_length} digits",
                    )
                )
            if (
                barcode_field is BarcodeField.PRIMARY
                and value == household.alternate_barcode_id
            ):
                errors.append(
                    SelfCollision(barcode_field, f"{label} must differ from alternate barcode id")
                )
            if value in taken:
                errors.append(
                    DuplicateIdentifier(barcode_field, f"{label} {value} has already been taken")
                )
        return errors

    def validate(self, household: Household, peers: Iterable[Household]) -> None:
        """Raise the first violation, if any."""

        errors = self.violations(household, peers)
        if errors:
            raise errors[0]

    def is_well_formed(self, value: Barcode) -> bool:
        return (
            self.min_length <= len(value) <= self.max_length
            and _DIGITS.fullmatch(value) is not None
        )

    def record_local_write(
        self,
        household: Household,
        barcode_field: BarcodeField,
        value: Barcode | None,
    ) -> bool:
        return household.write_barcode(
            barcode_field, value, source=WriteSource.LOCAL, clock=self.clock
        )

    def record_sync_write(
        self,
        household: Household,
        barcode_field: BarcodeField,
        value: Barcode | None,
    ) -> bool:
        return household.write_barcode(
            barcode_field, value, source=WriteSource.SYNC, clock=self.clock
        )

    @staticmethod
    def is_protected(household: Household) -> bool:
        return household.barcode_id_changed

    @staticmethod
    def _taken_values(household: Household, peers: Iterable[Household]) -> set[Barcode]:
        taken: set[Barcode] = set()
        for peer in peers:
            if peer is household or peer.id == household.id:
                continue
            if peer.deleted or peer.site_id != household.site_id:
                continue
            if peer.barcode_id is not None:
                taken.add(peer.barcode_id)
            if peer.alternate_barcode_id is not None:
                taken.add(peer.alternate_barcode_id)
        return taken
