"""Domain primitives: scalar aliases and the clock seam.

Scalar aliases may be promoted to proper value objects later without changing imports.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

type Barcode = str
type LegacyId = int
type SiteId = int


class Clock(Protocol):
    def __call__(self) -> datetime: ...


def utcnow() -> datetime:
    return datetime.now(UTC)
