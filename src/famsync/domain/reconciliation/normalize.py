"""Turn raw record values into typed household attribute values.

External records carry strings (or null). An empty string means "set to null".
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from famsync.domain.errors import FieldCoercionError
from famsync.domain.model import SHARE_FIELDS, BarcodeField

if TYPE_CHECKING:
    from famsync.domain.model import LegacyId

# Sync bookkeeping and identity columns: never accepted from external input.
SKIPPED_FIELDS: Final[frozenset[str]] = frozenset(
    {"id", "site_id", "deleted", "barcode_assigned_at", "barcode_id_changed", "remote_hash"}
)

STRING_FIELDS: Final[frozenset[str]] = frozenset(
    {
        "name",
        "last_name",
        "address1",
        "address2",
        "city",
        "state",
        "zip",
        "email",
    }
)

BOOLEAN_FIELDS: Final[frozenset[str]] = frozenset(
    {*SHARE_FIELDS, "share_activity", "wall_enabled", "visible"}
)

# Stored with every non-digit character removed.
DIGITS_ONLY_FIELDS: Final[frozenset[str]] = frozenset({"home_phone"})

# Signed 64-bit, the widest integer column the supported databases store.
LEGACY_ID_MIN: Final[int] = -(2**63)
LEGACY_ID_MAX: Final[int] = 2**63 - 1

BARCODE_FIELDS: Final[frozenset[str]] = frozenset(field.value for field in BarcodeField)

_TRUE_STRINGS: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "on"})
_FALSE_STRINGS: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "off"})
_NON_DIGITS: Final = re.compile(r"\D")


def clean_value(value: object) -> object:
    return None if value == "" else value


def coerce_legacy_id(value: object) -> LegacyId | None:
    value = clean_value(value)
    if value is None:
        return None
    if isinstance(value, bool):
        raise FieldCoercionError("legacy_id", value, "integer")
    if isinstance(value, int):
        number = value
    else:
        try:
            number = int(str(value).strip())
        except ValueError as exc:
            raise FieldCoercionError("legacy_id", value, "integer") from exc
    if not LEGACY_ID_MIN <= number <= LEGACY_ID_MAX:
        raise FieldCoercionError("legacy_id", value, "64-bit integer")
    return number


def coerce_boolean(name: str, value: object) -> bool:
    value = clean_value(value)
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    normalized = str(value).strip().lower()
    if normalized in _TRUE_STRINGS:
        return True
    if normalized in _FALSE_STRINGS:
        return False
    raise FieldCoercionError(name, value, "boolean")


def coerce_string(value: object) -> str | None:
    value = clean_value(value)
    return None if value is None else str(value)


def coerce_digits(value: object) -> str | None:
    text = coerce_string(value)
    if text is None:
        return None
    return _NON_DIGITS.sub("", text) or None


def coerce_field(name: str, value: object) -> object:
    """Coerce a plain (non-barcode) attribute; ``KeyError`` for unknown names."""

    if name == "legacy_id":
        return coerce_legacy_id(value)
    if name in BOOLEAN_FIELDS:
        return coerce_boolean(name, value)
    if name in DIGITS_ONLY_FIELDS:
        return coerce_digits(value)
    if name in STRING_FIELDS:
        return coerce_string(value)
    raise KeyError(name)
