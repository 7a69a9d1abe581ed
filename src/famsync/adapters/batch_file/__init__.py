"""Public interface for the JSON batch file adapter."""

from __future__ import annotations

from .schema import BatchOptionsPayload, BatchPayload, RecordPayload, load_batch_file

__all__ = [
    "BatchOptionsPayload",
    "BatchPayload",
    "RecordPayload",
    "load_batch_file",
]
