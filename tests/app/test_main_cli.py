from __future__ import annotations

import json
from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from famsync.domain.errors import BatchTooLarge
from famsync.domain.model import Household, RelationshipLabel
from famsync.domain.reconciliation import SyncOptions, SyncOutcome, SyncStatus
from famsync.ui import cli as cli_module
from tests.helpers.households import FEMALE, MALE, SITE_ID, add_family

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture
def payload_file(tmp_path: Path) -> Path:
    path = tmp_path / "batch.json"
    path.write_text(
        json.dumps(
            {
                "records": [{"legacy_id": 7, "name": "Nakamura"}],
                "options": {"claimByBarcodeIfNoLegacyId": True},
            }
        ),
        encoding="utf-8",
    )
    return path


def test_sync_prints_outcomes(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    payload_file: Path,
) -> None:
    captured: dict[str, object] = {}
    household_id = uuid4()

    def fake_update(records: object, options: SyncOptions, **kwargs: object) -> list[SyncOutcome]:
        captured.update(kwargs, records=records, options=options)
        return [
            SyncOutcome(
                status=SyncStatus.SAVED, legacy_id=7, id=household_id, name="Nakamura"
            )
        ]

    monkeypatch.setattr(cli_module, "update_household_batch", fake_update)

    cli_module.main(["sync", str(payload_file), "--site-id", "3", "--delete-conflicting"])

    assert captured["site_id"] == 3
    assert captured["records"] == [{"legacy_id": "7", "name": "Nakamura"}]
    assert captured["options"] == SyncOptions(
        claim_by_barcode_if_no_legacy_id=True,
        delete_conflicting_if_no_legacy_id=True,
    )
    assert json.loads(capsys.readouterr().out) == [
        {"status": "saved", "legacyId": 7, "id": str(household_id), "name": "Nakamura"}
    ]


def test_sync_missing_payload_exits_with_validation_error(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync", str(tmp_path / "missing.json"), "--site-id", "1"])

    assert excinfo.value.code == 2


def test_sync_oversized_batch_is_fatal(
    monkeypatch: pytest.MonkeyPatch,
    payload_file: Path,
) -> None:
    def fake_update(*_: object, **__: object) -> list[SyncOutcome]:
        raise BatchTooLarge(51, 50)

    monkeypatch.setattr(cli_module, "update_household_batch", fake_update)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["sync", str(payload_file), "--site-id", "1"])

    assert excinfo.value.code == 1


def test_relationships_invalid_uuid_exits_with_validation_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["relationships", "not-a-uuid"])

    assert excinfo.value.code == 2


def test_relationships_prints_labels(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    household = Household(site_id=SITE_ID, last_name="Diaz")
    add_family(household, ("Marco", MALE, True), ("Lucia", FEMALE, True))
    marco, lucia = household.members

    def fake_suggest(household_id: object) -> dict[object, list[object]]:
        assert household_id == household.id
        return {marco: [(lucia, RelationshipLabel.WIFE)], lucia: []}

    monkeypatch.setattr(cli_module, "suggest_household_relationships", fake_suggest)

    cli_module.main(["relationships", str(household.id)])

    output = json.loads(capsys.readouterr().out)
    assert output[0]["id"] == str(marco.id)
    assert output[0]["relationships"] == [
        {"id": str(lucia.id), "name": lucia.display_name, "label": RelationshipLabel.WIFE.value}
    ]
    assert output[1]["relationships"] == []


def test_relationships_unknown_household_is_fatal(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(cli_module, "suggest_household_relationships", lambda _: None)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["relationships", str(uuid4())])

    assert excinfo.value.code == 1


def test_barcode_report_prints_tab_separated_counts(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    captured: dict[str, object] = {}

    def fake_report(site_id: int, **kwargs: object) -> list[tuple[str, int]]:
        captured.update(kwargs, site_id=site_id)
        return [("2024-03-09", 0), ("2024-03-10", 2)]

    monkeypatch.setattr(cli_module, "barcode_assignment_report", fake_report)

    cli_module.main(["barcode-report", "--site-id", "4", "--days", "2", "--offset", "1"])

    assert captured == {"site_id": 4, "limit": 2, "offset": 1}
    assert capsys.readouterr().out.splitlines() == ["2024-03-09\t0", "2024-03-10\t2"]


def test_missing_subcommand_exits_with_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2
