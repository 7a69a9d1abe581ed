"""Pydantic models describing JSON batch payload files.

Accepted shapes::

    {"records": [{...}, ...], "options": {"claimByBarcodeIfNoLegacyId": true}}
    [{...}, ...]

Record values reach the reconciler as strings or null; JSON numbers and
booleans are stringified here.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from famsync.domain.reconciliation import SyncOptions

if TYPE_CHECKING:
    from pathlib import Path

type RecordPayload = dict[str, str | None]


def _stringify(value: object) -> object:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int | float):
        return str(value)
    return value


class BatchFileBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class BatchOptionsPayload(BatchFileBaseModel):
    claim_by_barcode_if_no_legacy_id: bool = Field(
        default=False, alias="claimByBarcodeIfNoLegacyId"
    )
    delete_conflicting_if_no_legacy_id: bool = Field(
        default=False, alias="deleteConflictingFamiliesIfNoLegacyId"
    )

    def to_options(self) -> SyncOptions:
        return SyncOptions(
            claim_by_barcode_if_no_legacy_id=self.claim_by_barcode_if_no_legacy_id,
            delete_conflicting_if_no_legacy_id=self.delete_conflicting_if_no_legacy_id,
        )


class BatchPayload(BatchFileBaseModel):
    records: list[RecordPayload]
    options: BatchOptionsPayload = Field(default_factory=BatchOptionsPayload)

    @model_validator(mode="before")
    @classmethod
    def _wrap_bare_record_list(cls, value: object) -> object:
        if isinstance(value, Sequence) and not isinstance(value, str | bytes):
            return {"records": value}
        return value

    @field_validator("records", mode="before")
    @classmethod
    def _stringify_scalars(cls, value: object) -> object:
        if not isinstance(value, Sequence) or isinstance(value, str | bytes):
            return value
        records: list[object] = []
        for item in cast(Sequence[object], value):
            if isinstance(item, Mapping):
                mapping_item = cast(Mapping[str, object], item)
                records.append({key: _stringify(raw) for key, raw in mapping_item.items()})
            else:
                records.append(item)
        return records


def load_batch_file(path: Path) -> BatchPayload:
    with path.open(encoding="utf-8") as handle:
        document = json.load(handle)
    return BatchPayload.model_validate(document)
