"""Suggested kinship labels between members of one household.

Labels are derived only from each member's position in sequence order, the
adult flag and gender. The first two members by sequence may take the adult
(spousal/parent) role, and only if they are actually flagged adult. Every later
member is looked up in the child role whatever their adult flag says.

The label is always spoken from the first member's perspective about the second
("A's wife is B"). Siblings, grandparents and same-sex partners are not
inferred; such pairs simply get no entry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from famsync.domain.model import FamilyRole, Gender, RelationshipLabel

if TYPE_CHECKING:
    from collections.abc import Sequence

    from famsync.domain.model import Person

type RelationshipKey = tuple[FamilyRole, Gender, FamilyRole, Gender]
type SuggestedRelationships = dict[Person, list[tuple[Person, RelationshipLabel]]]

ADULT_ELIGIBLE_POSITIONS: Final[int] = 2

_A, _C = FamilyRole.ADULT, FamilyRole.CHILD
_M, _F = Gender.MALE, Gender.FEMALE

RELATIONSHIP_TABLE: Final[dict[RelationshipKey, RelationshipLabel]] = {
    (_A, _M, _A, _F): RelationshipLabel.WIFE,
    (_A, _M, _C, _M): RelationshipLabel.SON,
    (_A, _M, _C, _F): RelationshipLabel.DAUGHTER,
    (_A, _F, _A, _M): RelationshipLabel.HUSBAND,
    (_A, _F, _C, _M): RelationshipLabel.SON,
    (_A, _F, _C, _F): RelationshipLabel.DAUGHTER,
    (_C, _M, _A, _M): RelationshipLabel.FATHER,
    (_C, _M, _A, _F): RelationshipLabel.MOTHER,
    (_C, _F, _A, _M): RelationshipLabel.FATHER,
    (_C, _F, _A, _F): RelationshipLabel.MOTHER,
}


def role_for(position: int, person: Person) -> FamilyRole:
    """Position and adult flag are independent inputs; both must allow ADULT."""

    if position < ADULT_ELIGIBLE_POSITIONS and person.is_adult:
        return FamilyRole.ADULT
    return FamilyRole.CHILD


def relationship_label(
    person_role: FamilyRole,
    person_gender: Gender | None,
    related_role: FamilyRole,
    related_gender: Gender | None,
) -> RelationshipLabel | None:
    if person_gender is None or related_gender is None:
        return None
    return RELATIONSHIP_TABLE.get((person_role, person_gender, related_role, related_gender))


def suggest_relationships(members: Sequence[Person]) -> SuggestedRelationships:
    """Map every member to ``(other member, label)`` pairs, in member order.

    ``members`` must already be ordered by ``sequence``. Each member gets an
    entry, possibly empty; pairs without a defined label are left out.
    """

    classified = [
        (person, role_for(position, person), Gender.parse(person.gender))
        for position, person in enumerate(members)
    ]
    relationships: SuggestedRelationships = {}
    for person, person_role, person_gender in classified:
        pairs = relationships.setdefault(person, [])
        for related, related_role, related_gender in classified:
            if related is person:
                continue
            label = relationship_label(person_role, person_gender, related_role, related_gender)
            if label is not None:
                pairs.append((related, label))
    return relationships
