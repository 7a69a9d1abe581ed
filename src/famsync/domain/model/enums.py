"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: object) -> Gender | None:
        """Lenient lookup: ``"Male"``, ``" female "`` and enum members all work."""

        if isinstance(value, Gender):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class FamilyRole(StrEnum):
    """Lookup role used by relationship inference, not a statement about age."""

    ADULT = "adult"
    CHILD = "child"


class RelationshipLabel(StrEnum):
    WIFE = "wife"
    HUSBAND = "husband"
    SON = "son"
    DAUGHTER = "daughter"
    FATHER = "father"
    MOTHER = "mother"


class BarcodeField(StrEnum):
    PRIMARY = "barcode_id"
    ALTERNATE = "alternate_barcode_id"


class WriteSource(StrEnum):
    """Who performed a barcode write: staff/local code or the batch reconciler."""

    LOCAL = "local"
    SYNC = "sync"
