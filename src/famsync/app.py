"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from logging import getLogger
from typing import TYPE_CHECKING

from famsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from famsync.config import get_privacy_config, get_sync_config
from famsync.domain.model import utcnow
from famsync.domain.ports.unit_of_work import HouseholdUnitOfWork
from famsync.domain.reconciliation import BatchSyncReconciler, SyncOptions
from famsync.domain.relationships import suggest_relationships
from famsync.domain.reporting import (
    DEFAULT_DATE_FORMAT,
    daily_barcode_assignment_counts,
    report_window,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from uuid import UUID

    from famsync.domain.model import SiteId
    from famsync.domain.reconciliation import SyncOutcome, SyncRecord
    from famsync.domain.relationships import SuggestedRelationships
    from famsync.domain.reporting import DailyCount

UnitOfWorkFactory = Callable[[], HouseholdUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work_factory(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyUnitOfWork


def update_household_batch(
    records: Sequence[SyncRecord],
    options: SyncOptions | Mapping[str, object] | None = None,
    *,
    site_id: SiteId,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    reconciler: BatchSyncReconciler | None = None,
) -> list[SyncOutcome]:
    """Reconcile one batch of external household records into storage.

    Without explicit ``options`` the defaults come from the environment
    (``FAMSYNC_CLAIM_BY_BARCODE``, ``FAMSYNC_DELETE_CONFLICTING``).
    """

    sync_config = get_sync_config()
    if options is None:
        effective_options = SyncOptions(
            claim_by_barcode_if_no_legacy_id=sync_config.claim_by_barcode_if_no_legacy_id,
            delete_conflicting_if_no_legacy_id=sync_config.delete_conflicting_if_no_legacy_id,
        )
    elif isinstance(options, Mapping):
        effective_options = SyncOptions.from_mapping(options)
    else:
        effective_options = options

    effective_reconciler = reconciler or BatchSyncReconciler(
        max_batch_size=sync_config.max_batch_size,
        share_defaults=get_privacy_config().share_defaults(),
    )
    return effective_reconciler.reconcile(
        records,
        effective_options,
        site_id=site_id,
        unit_of_work_factory=_resolve_unit_of_work_factory(unit_of_work_factory),
    )


def suggest_household_relationships(
    household_id: UUID,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> SuggestedRelationships | None:
    """Suggest kinship labels between the active members of one household."""

    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        household = uow.repositories.households.get(household_id)
        if household is None:
            log.info("Household %s not found", household_id)
            return None
        return suggest_relationships(household.active_members)


def barcode_assignment_report(
    site_id: SiteId,
    *,
    limit: int = 14,
    offset: int = 0,
    today: date | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
    only_show_date_for: tuple[str, str] | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[DailyCount]:
    """Count barcode assignments per day for a site, oldest day first."""

    effective_today = today or utcnow().date()
    since, until = report_window(limit=limit, offset=offset, today=effective_today)
    effective_uow = _resolve_unit_of_work_factory(unit_of_work_factory)
    with effective_uow() as uow:
        counts = uow.repositories.households.barcode_assignments_by_day(
            site_id, since=since, until=until
        )
    return daily_barcode_assignment_counts(
        counts,
        limit=limit,
        offset=offset,
        today=effective_today,
        date_format=date_format,
        only_show_date_for=only_show_date_for,
    )
