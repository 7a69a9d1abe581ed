"""Batch reconciler: merge externally sourced household records into storage.

Records are processed one at a time, in input order, inside a single unit of
work. Each record is its own transaction: it is committed when it validates and
rolled back when it does not, so a later record always observes the committed
state of every earlier one. Only an oversized batch aborts the whole call; every
other failure is reported in that record's outcome.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from famsync.domain.barcodes import BarcodeConflictPolicy
from famsync.domain.errors import BatchTooLarge, FieldCoercionError, PersistenceError
from famsync.domain.model import Household

from .apply import apply_record
from .contracts import MAX_BATCH_SIZE, SyncOptions, SyncOutcome, SyncStatus
from .normalize import coerce_legacy_id
from .resolve import record_barcode, resolve_target

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping, Sequence

    from famsync.domain.model import SiteId
    from famsync.domain.ports.persistence import HouseholdRepository
    from famsync.domain.ports.unit_of_work import HouseholdUnitOfWork

    from .apply import ApplyResult
    from .contracts import SyncRecord, TargetResolution

log = logging.getLogger(__name__)


@dataclass(slots=True)
class BatchSyncReconciler:
    """Reconcile a bounded batch of external records for one site."""

    policy: BarcodeConflictPolicy = field(default_factory=BarcodeConflictPolicy)
    max_batch_size: int = MAX_BATCH_SIZE
    share_defaults: Mapping[str, bool] = field(default_factory=dict[str, bool])

    def reconcile(
        self,
        records: Sequence[SyncRecord],
        options: SyncOptions | None = None,
        *,
        site_id: SiteId,
        unit_of_work_factory: Callable[[], HouseholdUnitOfWork],
    ) -> list[SyncOutcome]:
        """Return one outcome per record, in input order."""

        if len(records) > self.max_batch_size:
            raise BatchTooLarge(len(records), self.max_batch_size)
        effective_options = options or SyncOptions()
        log.info(
            "Reconciling %s household records for site %s (claim_by_barcode=%s, "
            "delete_conflicting=%s)",
            len(records),
            site_id,
            effective_options.claim_by_barcode_if_no_legacy_id,
            effective_options.delete_conflicting_if_no_legacy_id,
        )

        outcomes: list[SyncOutcome] = []
        with unit_of_work_factory() as uow:
            for record in records:
                outcomes.append(
                    self._reconcile_record(record, effective_options, site_id=site_id, uow=uow)
                )

        counts = Counter(outcome.status for outcome in outcomes)
        log.info(
            "Finished household batch: saved=%s, saved_with_error=%s, not_saved=%s",
            counts[SyncStatus.SAVED],
            counts[SyncStatus.SAVED_WITH_ERROR],
            counts[SyncStatus.NOT_SAVED],
        )
        return outcomes

    def _reconcile_record(
        self,
        record: SyncRecord,
        options: SyncOptions,
        *,
        site_id: SiteId,
        uow: HouseholdUnitOfWork,
    ) -> SyncOutcome:
        households = uow.repositories.households
        try:
            resolution = resolve_target(
                record,
                options,
                site_id=site_id,
                households=households,
                create=lambda: self._new_household(site_id),
            )
        except FieldCoercionError as exc:
            return _unresolved(record, exc)
        except PersistenceError as exc:
            uow.rollback()
            return _unresolved(record, exc)

        household = resolution.household
        errors: list[str]
        result: ApplyResult | None = None
        try:
            if options.delete_conflicting_if_no_legacy_id and not resolution.created:
                self._purge_conflicts(record, resolution, site_id=site_id, households=households)
            result = apply_record(household, record, policy=self.policy)
            peers = households.barcode_peers(site_id, exclude_id=household.id)
            errors = [error.message for error in self.policy.violations(household, peers)]
        except (FieldCoercionError, PersistenceError) as exc:
            errors = [str(exc)]

        if errors or result is None:
            return self._reject(record, resolution, errors=errors, uow=uow)

        try:
            if resolution.created:
                households.add(household)
            uow.commit()
        except PersistenceError as exc:
            return self._reject(record, resolution, errors=[str(exc)], uow=uow)

        if result.override_suppressed:
            return SyncOutcome(
                status=SyncStatus.SAVED_WITH_ERROR,
                legacy_id=household.legacy_id,
                id=household.id,
                name=household.name,
                error=f"Newer barcode not overwritten: {result.kept_barcode!r}",
            )
        return SyncOutcome(
            status=SyncStatus.SAVED,
            legacy_id=household.legacy_id,
            id=household.id,
            name=household.name,
        )

    def _reject(
        self,
        record: SyncRecord,
        resolution: TargetResolution,
        *,
        errors: list[str],
        uow: HouseholdUnitOfWork,
    ) -> SyncOutcome:
        household = resolution.household
        outcome = SyncOutcome(
            status=SyncStatus.NOT_SAVED,
            legacy_id=_reported_legacy_id(record),
            id=None if resolution.created else household.id,
            name=household.name,
            error="; ".join(errors),
        )
        uow.rollback()
        log.warning(
            "Household record not saved (legacy_id=%s): %s", outcome.legacy_id, outcome.error
        )
        return outcome

    def _purge_conflicts(
        self,
        record: SyncRecord,
        resolution: TargetResolution,
        *,
        site_id: SiteId,
        households: HouseholdRepository,
    ) -> None:
        barcode = record_barcode(record)
        if barcode is None:
            return
        target = resolution.household
        for conflict in households.find_conflicting_by_barcode(
            site_id, barcode, exclude_id=target.id
        ):
            log.info(
                "Soft-deleting household %s: barcode %s conflicts with household %s",
                conflict.id,
                barcode,
                target.id,
            )
            conflict.soft_delete()

    def _new_household(self, site_id: SiteId) -> Household:
        return Household.with_default_sharing(self.share_defaults, site_id=site_id)


def _unresolved(record: SyncRecord, exc: Exception) -> SyncOutcome:
    log.warning("Rejected household record: %s", exc)
    return SyncOutcome(
        status=SyncStatus.NOT_SAVED,
        legacy_id=record.get("legacy_id"),
        id=None,
        name=None,
        error=str(exc),
    )


def _reported_legacy_id(record: SyncRecord) -> object | None:
    raw = record.get("legacy_id")
    try:
        return coerce_legacy_id(raw)
    except FieldCoercionError:
        return raw
