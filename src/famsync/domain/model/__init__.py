"""Public domain model surface."""

from __future__ import annotations

from famsync.domain.model.entity import Entity, new_id
from famsync.domain.model.enums import (
    BarcodeField,
    FamilyRole,
    Gender,
    RelationshipLabel,
    WriteSource,
)
from famsync.domain.model.household import (
    EXTERNALLY_SYNCED_FIELDS,
    SHARE_FIELDS,
    Household,
    Person,
    normalize_barcode,
)
from famsync.domain.model.primitives import Barcode, Clock, LegacyId, SiteId, utcnow

__all__ = [  # noqa: RUF022
    # base
    "Entity",
    "new_id",
    # household
    "Household",
    "Person",
    "EXTERNALLY_SYNCED_FIELDS",
    "SHARE_FIELDS",
    "normalize_barcode",
    # enums
    "BarcodeField",
    "FamilyRole",
    "Gender",
    "RelationshipLabel",
    "WriteSource",
    # primitives
    "Barcode",
    "Clock",
    "LegacyId",
    "SiteId",
    "utcnow",
]
