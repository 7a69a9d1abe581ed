"""Domain exceptions for batch reconciliation and barcode validation."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from famsync.domain.model import BarcodeField


class BatchTooLarge(ValueError):
    """Raised before any processing when a batch exceeds the configured limit."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"Too many records to batch at once ({size}, limit {limit})")
        self.size = size
        self.limit = limit


class BarcodeValidationError(ValueError):
    """A proposed barcode value cannot be stored on a household."""

    def __init__(self, barcode_field: BarcodeField, message: str) -> None:
        super().__init__(message)
        self.field = barcode_field
        self.message = message


class DuplicateIdentifier(BarcodeValidationError):
    """Value already used by another active household in the same site."""


class InvalidFormat(BarcodeValidationError):
    """Value is not a digit string of the allowed length."""


class SelfCollision(BarcodeValidationError):
    """Primary and alternate barcode of one household hold the same value."""


class FieldCoercionError(ValueError):
    """An incoming record value cannot be converted to the field's type."""

    def __init__(self, name: str, value: object, expected: str) -> None:
        super().__init__(f"{name} is not a valid {expected}: {value!r}")
        self.name = name
        self.value = value


class PersistenceError(RuntimeError):
    """The storage backend failed to read or write a household."""
