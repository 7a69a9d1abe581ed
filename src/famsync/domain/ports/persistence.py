"""Ports for persisting domain aggregates."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

from famsync.domain.model import Household

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import date
    from uuid import UUID

    from famsync.domain.model import Barcode, LegacyId, SiteId


@runtime_checkable
class Repository[TEntity](Protocol):
    """Minimal repository contract for a persistent aggregate store."""

    def add(self, entity: TEntity) -> None: ...


@runtime_checkable
class HouseholdRepository(Repository[Household], Protocol):
    """Persistence contract for households.

    Sync lookups never return deleted households and are always scoped to one site.
    Storage failures surface as ``famsync.domain.errors.PersistenceError``.
    """

    def get(self, household_id: UUID) -> Household | None: ...

    def get_by_legacy_id(self, site_id: SiteId, legacy_id: LegacyId) -> Household | None: ...

    def find_claimable_by_barcode(self, site_id: SiteId, barcode: Barcode) -> Household | None:
        """Active household without a legacy id whose primary barcode matches."""
        ...

    def find_conflicting_by_barcode(
        self,
        site_id: SiteId,
        barcode: Barcode,
        *,
        exclude_id: UUID,
    ) -> Sequence[Household]:
        """Active legacy-id-less households sharing ``barcode``, except ``exclude_id``."""
        ...

    def barcode_peers(self, site_id: SiteId, *, exclude_id: UUID) -> Sequence[Household]:
        """Active households of the site holding at least one barcode."""
        ...

    def barcode_assignments_by_day(
        self,
        site_id: SiteId,
        *,
        since: date,
        until: date,
    ) -> dict[date, int]: ...
