"""Reconciliation of externally sourced household records into local storage.

Layered flow per record:
1) resolve the target household (legacy id, barcode claim or new)
2) optionally soft-delete households holding a conflicting barcode
3) apply coerced fields, consulting the barcode merge policy
4) validate barcodes against the site's active households
5) commit, or roll back and report the record as not saved
"""

from __future__ import annotations

from .apply import ApplyResult, apply_record
from .contracts import (
    MAX_BATCH_SIZE,
    BarcodeDecision,
    MatchKind,
    SyncOptions,
    SyncOutcome,
    SyncRecord,
    SyncStatus,
    TargetResolution,
)
from .engine import BatchSyncReconciler
from .policy import decide_barcode_merge
from .resolve import resolve_target

__all__ = [
    "MAX_BATCH_SIZE",
    "ApplyResult",
    "BarcodeDecision",
    "BatchSyncReconciler",
    "MatchKind",
    "SyncOptions",
    "SyncOutcome",
    "SyncRecord",
    "SyncStatus",
    "TargetResolution",
    "apply_record",
    "decide_barcode_merge",
    "resolve_target",
]
