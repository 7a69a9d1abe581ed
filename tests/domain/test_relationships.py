from __future__ import annotations

from typing import TYPE_CHECKING

from famsync.domain.model import FamilyRole, Gender, Household, RelationshipLabel
from famsync.domain.relationships import (
    RELATIONSHIP_TABLE,
    relationship_label,
    role_for,
    suggest_relationships,
)
from tests.helpers.households import FEMALE, MALE, add_family, make_household

if TYPE_CHECKING:
    from famsync.domain.model import Person
    from famsync.domain.relationships import SuggestedRelationships


def _labels(relationships: SuggestedRelationships) -> dict[tuple[str, str], str]:
    return {
        (person.first_name or "", related.first_name or ""): label.value
        for person, pairs in relationships.items()
        for related, label in pairs
    }


def _family(*members: tuple[str, Gender | None, bool | None]) -> tuple[Household, list[Person]]:
    household = make_household()
    return household, add_family(household, *members)


def test_parents_and_son() -> None:
    household, _ = _family(("A", MALE, True), ("B", FEMALE, True), ("C", MALE, False))

    labels = _labels(suggest_relationships(household.members))

    assert labels == {
        ("A", "B"): "wife",
        ("A", "C"): "son",
        ("B", "A"): "husband",
        ("B", "C"): "son",
        ("C", "A"): "father",
        ("C", "B"): "mother",
    }


def test_second_child_adds_daughter_without_sibling_label() -> None:
    household, _ = _family(
        ("A", MALE, True),
        ("B", FEMALE, True),
        ("C", MALE, False),
        ("D", FEMALE, False),
    )

    labels = _labels(suggest_relationships(household.members))

    assert labels[("A", "D")] == "daughter"
    assert labels[("B", "D")] == "daughter"
    assert labels[("D", "A")] == "father"
    assert labels[("D", "B")] == "mother"
    assert ("C", "D") not in labels
    assert ("D", "C") not in labels
    assert len(labels) == 10


def test_pairs_follow_member_order() -> None:
    household, people = _family(("A", MALE, True), ("B", FEMALE, True), ("C", MALE, False))

    relationships = suggest_relationships(household.members)

    assert list(relationships) == people
    assert relationships[people[0]] == [
        (people[1], RelationshipLabel.WIFE),
        (people[2], RelationshipLabel.SON),
    ]


def test_members_are_ordered_by_sequence_not_insertion() -> None:
    household = make_household()
    child = household.add_member(first_name="C", gender=MALE, adult=False, sequence=3)
    father = household.add_member(first_name="A", gender=MALE, adult=True, sequence=1)

    labels = _labels(suggest_relationships(household.members))

    assert [member.sequence for member in household.members] == [1, 3]
    assert labels == {("A", "C"): "son", ("C", "A"): "father"}
    assert child is not father


def test_adult_beyond_second_position_is_looked_up_as_child() -> None:
    household, _ = _family(("A", MALE, True), ("B", FEMALE, True), ("G", FEMALE, True))

    labels = _labels(suggest_relationships(household.members))

    assert labels[("A", "G")] == "daughter"
    assert labels[("G", "B")] == "mother"


def test_position_alone_does_not_confer_adult_role() -> None:
    household, _ = _family(("A", MALE, False), ("B", FEMALE, True))

    labels = _labels(suggest_relationships(household.members))

    assert labels == {("A", "B"): "mother", ("B", "A"): "son"}


def test_same_sex_adults_get_no_label() -> None:
    household, _ = _family(("A", MALE, True), ("B", MALE, True))

    relationships = suggest_relationships(household.members)

    assert all(pairs == [] for pairs in relationships.values())
    assert len(relationships) == 2


def test_missing_gender_omits_the_pair() -> None:
    household, _ = _family(("A", None, True), ("B", FEMALE, True), ("C", MALE, False))

    labels = _labels(suggest_relationships(household.members))

    assert labels == {("B", "C"): "son", ("C", "B"): "mother"}


def test_missing_adult_flag_counts_as_child() -> None:
    household, _ = _family(("A", MALE, None), ("B", FEMALE, True))

    assert _labels(suggest_relationships(household.members)) == {
        ("A", "B"): "mother",
        ("B", "A"): "son",
    }


def test_empty_and_single_member_households() -> None:
    assert suggest_relationships([]) == {}

    household, people = _family(("A", MALE, True))
    assert suggest_relationships(household.members) == {people[0]: []}


def test_role_for_combines_position_and_adult_flag() -> None:
    household, people = _family(("A", MALE, True), ("B", FEMALE, True), ("C", MALE, True))

    assert [role_for(position, person) for position, person in enumerate(people)] == [
        FamilyRole.ADULT,
        FamilyRole.ADULT,
        FamilyRole.CHILD,
    ]
    assert household.members == tuple(people)


def test_lookup_table_has_exactly_ten_entries() -> None:
    assert len(RELATIONSHIP_TABLE) == 10
    assert relationship_label(FamilyRole.CHILD, MALE, FamilyRole.CHILD, FEMALE) is None
    assert relationship_label(FamilyRole.ADULT, MALE, FamilyRole.ADULT, MALE) is None
    assert relationship_label(FamilyRole.ADULT, None, FamilyRole.ADULT, FEMALE) is None
    assert (
        relationship_label(FamilyRole.ADULT, FEMALE, FamilyRole.ADULT, MALE)
        is RelationshipLabel.HUSBAND
    )
