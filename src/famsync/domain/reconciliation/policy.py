"""Merge policy for the protected primary barcode.

Deterministic given three inputs, with no storage access, so it can be tested
without a backend:
- protected: the household's barcode was changed locally since the last sync
- current: the locally stored primary barcode
- incoming: the (already normalised) barcode carried by the batch record
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .contracts import BarcodeDecision

if TYPE_CHECKING:
    from famsync.domain.model import Barcode


def decide_barcode_merge(
    *,
    protected: bool,
    current: Barcode | None,
    incoming: Barcode | None,
) -> BarcodeDecision:
    if not protected:
        return BarcodeDecision.WRITE
    if incoming == current:
        # the external system has caught up with the local assignment
        return BarcodeDecision.CATCH_UP
    return BarcodeDecision.KEEP_LOCAL
