"""Apply one incoming record to its target household.

Responsibilities of this stage:
- coerce and write every accepted field through the reconciler's own write path
- consult the barcode merge policy before touching ``barcode_id``
- report what changed, what was ignored and whether an override was suppressed

Persistence and validation belong to the engine.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from famsync.domain.model import BarcodeField, normalize_barcode

from .contracts import BarcodeDecision
from .normalize import BARCODE_FIELDS, SKIPPED_FIELDS, clean_value, coerce_field
from .policy import decide_barcode_merge

if TYPE_CHECKING:
    from famsync.domain.barcodes import BarcodeConflictPolicy
    from famsync.domain.model import Barcode, Household

    from .contracts import SyncRecord

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ApplyResult:
    """Summary of in-memory mutations performed for one record."""

    changed: list[str] = field(default_factory=list[str])
    ignored: list[str] = field(default_factory=list[str])
    override_suppressed: bool = False
    kept_barcode: Barcode | None = None
    caught_up: bool = False


def apply_record(
    household: Household,
    record: SyncRecord,
    *,
    policy: BarcodeConflictPolicy,
) -> ApplyResult:
    """Write ``record`` onto ``household``; raises ``FieldCoercionError`` on bad values."""

    result = ApplyResult()
    for key, raw_value in record.items():
        if key in SKIPPED_FIELDS:
            continue
        value = clean_value(raw_value)
        if key in BARCODE_FIELDS:
            _apply_barcode(household, BarcodeField(key), value, policy=policy, result=result)
            continue
        try:
            coerced = coerce_field(key, value)
        except KeyError:
            result.ignored.append(key)
            continue
        if household.assign(key, coerced):
            result.changed.append(key)

    if result.ignored:
        log.warning("Ignoring unknown record fields: %s", ", ".join(sorted(result.ignored)))
    return result


def _apply_barcode(
    household: Household,
    barcode_field: BarcodeField,
    value: object,
    *,
    policy: BarcodeConflictPolicy,
    result: ApplyResult,
) -> None:
    if barcode_field is BarcodeField.PRIMARY:
        decision = decide_barcode_merge(
            protected=policy.is_protected(household),
            current=household.barcode_id,
            incoming=normalize_barcode(value),
        )
        if decision is BarcodeDecision.CATCH_UP:
            household.barcode_id_changed = False
            result.caught_up = True
            return
        if decision is BarcodeDecision.KEEP_LOCAL:
            result.override_suppressed = True
            result.kept_barcode = household.barcode_id
            log.info(
                "Keeping locally assigned barcode %r on household %s (incoming %r)",
                household.barcode_id,
                household.id,
                value,
            )
            return
    if policy.record_sync_write(household, barcode_field, normalize_barcode(value)):
        result.changed.append(barcode_field.value)
