"""Per-day barcode assignment counts for a site."""

from __future__ import annotations

from datetime import date, timedelta
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

DEFAULT_DATE_FORMAT: Final[str] = "%Y-%m-%d"
BLANK_LABEL: Final[str] = " "

type DailyCount = tuple[str, int]


def report_window(*, limit: int, offset: int, today: date) -> tuple[date, date]:
    """Return the first and last day of a ``limit``-day window ending ``offset`` days ago."""

    if limit < 1:
        raise ValueError("limit must be at least 1")
    if offset < 0:
        raise ValueError("offset must not be negative")
    until = today - timedelta(days=offset)
    return until - timedelta(days=limit - 1), until


def daily_barcode_assignment_counts(
    counts: Mapping[date, int],
    *,
    limit: int,
    offset: int,
    today: date,
    date_format: str = DEFAULT_DATE_FORMAT,
    only_show_date_for: tuple[str, str] | None = None,
) -> list[DailyCount]:
    """Label every day of the window, oldest first, with its assignment count.

    Days missing from ``counts`` report zero. With ``only_show_date_for`` set to
    ``(strftime_pattern, value)``, days whose formatted pattern differs from
    ``value`` keep their count but get a blank label (e.g. ``("%a", "Mon")``).
    """

    since, until = report_window(limit=limit, offset=offset, today=today)
    data: list[DailyCount] = []
    day = since
    while day <= until:
        label = day.strftime(date_format)
        if only_show_date_for is not None:
            pattern, value = only_show_date_for
            if day.strftime(pattern) != value:
                label = BLANK_LABEL
        data.append((label, counts.get(day, 0)))
        day += timedelta(days=1)
    return data
