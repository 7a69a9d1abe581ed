from __future__ import annotations

import pytest

from famsync.domain.reconciliation import BarcodeDecision, decide_barcode_merge
from tests.helpers.households import BARCODE_A, BARCODE_B


@pytest.mark.parametrize(
    ("current", "incoming"),
    [(None, BARCODE_A), (BARCODE_A, BARCODE_B), (BARCODE_A, None), (BARCODE_A, BARCODE_A)],
)
def test_unprotected_barcode_is_always_written(current: str | None, incoming: str | None) -> None:
    decision = decide_barcode_merge(protected=False, current=current, incoming=incoming)

    assert decision is BarcodeDecision.WRITE


def test_protected_barcode_catches_up_when_values_match() -> None:
    decision = decide_barcode_merge(protected=True, current=BARCODE_A, incoming=BARCODE_A)

    assert decision is BarcodeDecision.CATCH_UP


@pytest.mark.parametrize(
    ("current", "incoming"),
    [(BARCODE_A, BARCODE_B), (BARCODE_A, None), (None, BARCODE_B)],
)
def test_protected_barcode_keeps_local_value(current: str | None, incoming: str | None) -> None:
    decision = decide_barcode_merge(protected=True, current=current, incoming=incoming)

    assert decision is BarcodeDecision.KEEP_LOCAL
