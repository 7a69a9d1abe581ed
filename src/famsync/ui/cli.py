# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING
from uuid import UUID

from dotenv import load_dotenv

from famsync.adapters.batch_file import load_batch_file
from famsync.app import (
    barcode_assignment_report,
    suggest_household_relationships,
    update_household_batch,
)
from famsync.config import configure_logging
from famsync.domain.reconciliation import SyncOptions

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from famsync.adapters.batch_file import BatchPayload
    from famsync.domain.relationships import SuggestedRelationships

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile and inspect household records")
    subparsers = parser.add_subparsers(dest="command", required=True)

    sync = subparsers.add_parser("sync", help="Reconcile a JSON batch of household records")
    sync.add_argument("payload", type=Path, help="Path to the JSON batch file")
    sync.add_argument("--site-id", type=int, required=True, help="Site the batch belongs to")
    sync.add_argument(
        "--claim-by-barcode",
        action="store_true",
        help="Match legacy-id-less households by barcode when no legacy id matches",
    )
    sync.add_argument(
        "--delete-conflicting",
        action="store_true",
        help="Soft-delete legacy-id-less households holding the record's barcode",
    )

    relationships = subparsers.add_parser(
        "relationships",
        help="Suggest kinship labels between household members",
    )
    relationships.add_argument("household_id", type=str, help="Household UUID")

    report = subparsers.add_parser("barcode-report", help="Daily barcode assignment counts")
    report.add_argument("--site-id", type=int, required=True, help="Site to report on")
    report.add_argument(
        "--days",
        type=int,
        default=14,
        help="Number of days in the window (default: %(default)s)",
    )
    report.add_argument(
        "--offset",
        type=int,
        default=0,
        help="Days between today and the last day of the window (default: %(default)s)",
    )

    return parser.parse_args(list(argv))


def _parse_uuid(value: str) -> UUID:
    try:
        return UUID(value)
    except ValueError as exc:
        raise ValueError(f"Invalid UUID: {value}") from exc


def _effective_options(payload: BatchPayload, args: argparse.Namespace) -> SyncOptions:
    options = payload.options.to_options()
    return SyncOptions(
        claim_by_barcode_if_no_legacy_id=(
            options.claim_by_barcode_if_no_legacy_id or args.claim_by_barcode
        ),
        delete_conflicting_if_no_legacy_id=(
            options.delete_conflicting_if_no_legacy_id or args.delete_conflicting
        ),
    )


def _relationships_as_json(relationships: SuggestedRelationships) -> list[dict[str, object]]:
    return [
        {
            "id": str(person.id),
            "name": person.display_name,
            "relationships": [
                {"id": str(related.id), "name": related.display_name, "label": label.value}
                for related, label in pairs
            ],
        }
        for person, pairs in relationships.items()
    ]


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    payload: BatchPayload | None = None
    household_id: UUID | None = None
    try:
        parsed_args = _parse_args(args_list)
        if parsed_args.command == "sync":
            payload = load_batch_file(parsed_args.payload)
        elif parsed_args.command == "relationships":
            household_id = _parse_uuid(parsed_args.household_id)
    except (OSError, ValueError):
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "sync" and payload is not None:
            outcomes = update_household_batch(
                payload.records,
                _effective_options(payload, parsed_args),
                site_id=parsed_args.site_id,
            )
            print(json.dumps([outcome.as_dict() for outcome in outcomes], indent=2))
        elif parsed_args.command == "relationships" and household_id is not None:
            relationships = suggest_household_relationships(household_id)
            if relationships is None:
                raise LookupError(f"Unknown household: {household_id}")  # noqa: TRY301
            print(json.dumps(_relationships_as_json(relationships), indent=2))
        elif parsed_args.command == "barcode-report":
            for label, count in barcode_assignment_report(
                parsed_args.site_id,
                limit=parsed_args.days,
                offset=parsed_args.offset,
            ):
                print(f"{label}\t{count}")
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console script entry point: load ``.env`` and install the SIGINT handler."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
