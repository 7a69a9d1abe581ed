"""Target household resolution for one incoming record.

Order of precedence:
1) an active household with the record's ``legacy_id``
2) if enabled, an active household *without* a legacy id whose primary barcode
   equals the record's barcode (a household that already has a legacy id is
   never claimed this way, so two externally tracked households cannot merge
   on an accidental barcode collision)
3) a brand new household

Out of scope for this stage:
- field mutation
- commit/flush
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from famsync.domain.model import normalize_barcode

from .contracts import MatchKind, TargetResolution
from .normalize import clean_value, coerce_legacy_id

if TYPE_CHECKING:
    from collections.abc import Callable

    from famsync.domain.model import Household, SiteId
    from famsync.domain.ports.persistence import HouseholdRepository

    from .contracts import SyncOptions, SyncRecord


def resolve_target(
    record: SyncRecord,
    options: SyncOptions,
    *,
    site_id: SiteId,
    households: HouseholdRepository,
    create: Callable[[], Household],
) -> TargetResolution:
    legacy_id = coerce_legacy_id(record.get("legacy_id"))
    if legacy_id is not None:
        household = households.get_by_legacy_id(site_id, legacy_id)
        if household is not None:
            return TargetResolution(household=household, match_kind=MatchKind.LEGACY_ID)

    barcode = record_barcode(record)
    if options.claim_by_barcode_if_no_legacy_id and barcode is not None:
        household = households.find_claimable_by_barcode(site_id, barcode)
        if household is not None:
            return TargetResolution(household=household, match_kind=MatchKind.BARCODE)

    return TargetResolution(household=create(), match_kind=MatchKind.NEW)


def record_barcode(record: SyncRecord) -> str | None:
    return normalize_barcode(clean_value(record.get("barcode_id")))
