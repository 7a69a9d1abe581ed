"""Synchronization defaults for household batch updates."""

from __future__ import annotations

from dataclasses import dataclass

from famsync.domain.reconciliation.contracts import MAX_BATCH_SIZE

from .env import env_flag


@dataclass(frozen=True, slots=True)
class SyncConfig:
    max_batch_size: int = MAX_BATCH_SIZE
    claim_by_barcode_if_no_legacy_id: bool = False
    delete_conflicting_if_no_legacy_id: bool = False


def get_sync_config() -> SyncConfig:
    return SyncConfig(
        claim_by_barcode_if_no_legacy_id=env_flag("FAMSYNC_CLAIM_BY_BARCODE", default=False),
        delete_conflicting_if_no_legacy_id=env_flag(
            "FAMSYNC_DELETE_CONFLICTING", default=False
        ),
    )
