"""Shared reconciliation contract components.

This module intentionally holds only:
- the incoming record / options shapes
- per-record outcome types
- small enums passed between stages
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping
    from uuid import UUID

    from famsync.domain.model import Household

MAX_BATCH_SIZE: Final[int] = 50

type SyncRecord = Mapping[str, object]

_CLAIM_OPTION_NAMES: Final[tuple[str, ...]] = (
    "claimByBarcodeIfNoLegacyId",
    "claim_families_by_barcode_if_no_legacy_id",
    "claim_by_barcode_if_no_legacy_id",
)
_DELETE_OPTION_NAMES: Final[tuple[str, ...]] = (
    "deleteConflictingFamiliesIfNoLegacyId",
    "delete_families_with_conflicting_barcodes_if_no_legacy_id",
    "delete_conflicting_if_no_legacy_id",
)


@dataclass(frozen=True, slots=True, kw_only=True)
class SyncOptions:
    """Switches recognised by the batch reconciler."""

    claim_by_barcode_if_no_legacy_id: bool = False
    delete_conflicting_if_no_legacy_id: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, object] | None) -> SyncOptions:
        """Accept both the camelCase API names and the historic snake_case ones."""

        if not options:
            return cls()
        return cls(
            claim_by_barcode_if_no_legacy_id=_first_flag(options, _CLAIM_OPTION_NAMES),
            delete_conflicting_if_no_legacy_id=_first_flag(options, _DELETE_OPTION_NAMES),
        )


def _first_flag(options: Mapping[str, object], names: tuple[str, ...]) -> bool:
    for name in names:
        if name in options:
            return bool(options[name])
    return False


class SyncStatus(StrEnum):
    SAVED = "saved"
    SAVED_WITH_ERROR = "saved with error"
    NOT_SAVED = "not saved"


@dataclass(slots=True, kw_only=True)
class SyncOutcome:
    """Result for one input record, reported in input order."""

    status: SyncStatus
    legacy_id: object | None
    id: UUID | None
    name: str | None
    error: str | None = None

    @property
    def saved(self) -> bool:
        return self.status is not SyncStatus.NOT_SAVED

    def as_dict(self) -> dict[str, object]:
        payload: dict[str, object] = {
            "status": self.status.value,
            "legacyId": self.legacy_id,
            "id": str(self.id) if self.id is not None else None,
            "name": self.name,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


class MatchKind(StrEnum):
    """How the target household for a record was found."""

    LEGACY_ID = "legacy_id"
    BARCODE = "barcode"
    NEW = "new"


@dataclass(slots=True, kw_only=True)
class TargetResolution:
    household: Household
    match_kind: MatchKind

    @property
    def created(self) -> bool:
        return self.match_kind is MatchKind.NEW


class BarcodeDecision(StrEnum):
    """What to do with an incoming primary barcode."""

    WRITE = "write"
    CATCH_UP = "catch_up"
    KEEP_LOCAL = "keep_local"
