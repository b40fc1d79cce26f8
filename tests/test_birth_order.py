"""Tests for birth order and cadency helpers."""

import pytest

from conftest import parent, person
from lineage.birth_order import (
    BirthOrderResult,
    birth_order_label,
    cadency_mark_count,
    cadency_summary,
    compute_birth_order,
    is_eligible_for_cadency,
)
from lineage.graph import build_graph
from lineage.models import Gender, Person


@pytest.fixture
def sons():
    """Edmund and Margery's children, with a bastard and an adopted son among them."""
    people = [
        person(1, "Edmund", born="1230"),
        person(2, "Margery", born="1234", gender="female"),
        person(3, "Aldric", born="1260"),
        person(4, "Bob", born="1262"),
        person(5, "Wat", born="1258", legitimacy="bastard"),
        person(6, "Hal", born="1259", legitimacy="adopted"),
        person(7, "Giles"),
        person(8, "Maud", born="1257", gender="female"),
    ]
    relationships = []
    for child_id in (3, 4, 5, 6, 7, 8):
        relationships += [parent(child_id * 10, 1, child_id), parent(child_id * 10 + 1, 2, child_id)]
    return build_graph(people, relationships)


class TestComputeBirthOrder:
    def test_eldest_legitimate_son(self, sons):
        result = compute_birth_order(sons, 3)
        assert result.is_eligible
        assert result.position == 1
        assert result.total_eligible_siblings == 3
        assert [s.id for s in result.siblings] == [3, 4, 7]
        assert result.siblings[0].is_self

    def test_second_son(self, sons):
        result = compute_birth_order(sons, 4)
        assert (result.is_eligible, result.position, result.total_eligible_siblings) == (True, 2, 3)

    def test_two_brothers(self):
        people = [
            person(1, "Edmund", born="1230"),
            person(2, "Margery", born="1234", gender="female"),
            person(3, "Alice", born="1260"),
            person(4, "Bob", born="1262"),
        ]
        graph = build_graph(people, [parent(10, 1, 3), parent(11, 2, 3), parent(12, 1, 4), parent(13, 2, 4)])
        result = compute_birth_order(graph, 3)
        assert (result.is_eligible, result.position, result.total_eligible_siblings) == (True, 1, 2)

    def test_unknown_birth_year(self, sons):
        result = compute_birth_order(sons, 7)
        assert result.is_eligible
        assert result.position is None
        assert result.total_eligible_siblings == 3
        # Sorted after the brothers with known years
        assert result.siblings[-1].id == 7

    @pytest.mark.parametrize("pid, reason", [(5, "Bastards"), (6, "Adopted"), (8, "male")])
    def test_ineligible(self, sons, pid, reason):
        result = compute_birth_order(sons, pid)
        assert not result.is_eligible
        assert result.position is None
        assert reason in result.reason
        assert result.total_eligible_siblings == 3

    def test_no_parents_recorded(self, sons):
        result = compute_birth_order(sons, 1)
        assert result.is_eligible
        assert result.position is None
        assert result.total_eligible_siblings == 1
        assert "No parents" in result.reason

    def test_unknown_person(self, sons):
        result = compute_birth_order(sons, 999)
        assert not result.is_eligible
        assert result.total_eligible_siblings == 0

    def test_half_brothers_are_a_separate_line(self, sons):
        people = list(sons.people.values()) + [
            person(9, "Joan", born="1240", gender="female"),
            person(10, "Hugh", born="1250"),
        ]
        graph = build_graph(people, list(sons.relationships) + [parent(90, 1, 10), parent(91, 9, 10)])
        result = compute_birth_order(graph, 10)
        assert (result.position, result.total_eligible_siblings) == (1, 1)
        assert compute_birth_order(graph, 3).position == 1

    def test_unknown_legitimacy_is_ineligible(self):
        graph = build_graph([person(1, "Ivo", legitimacy="disputed")], [])
        assert not compute_birth_order(graph, 1).is_eligible


class TestCadencyHelpers:
    @pytest.mark.parametrize(
        "position, label",
        [(1, "1st Son (Heir)"), (2, "2nd Son"), (3, "3rd Son"), (4, "4th Son"), (11, "11th Son"), (22, "22nd Son"), (None, "Unknown"), (0, "Unknown")],
    )
    def test_birth_order_label(self, position, label):
        assert birth_order_label(position) == label

    def test_mark_count(self):
        assert cadency_mark_count(1) == 1
        assert cadency_mark_count(3) == 3
        assert cadency_mark_count(None) == 0
        assert cadency_mark_count(-2) == 0

    def test_eligibility_shortcut(self):
        assert is_eligible_for_cadency(Person(id=1, gender=Gender.MALE))
        assert not is_eligible_for_cadency(Person.from_record(person(1, "Wat", legitimacy="bastard")))
        assert not is_eligible_for_cadency(None)

    def test_summary_for_heir(self, sons):
        summary = cadency_summary(compute_birth_order(sons, 3))
        assert summary.eligible
        assert summary.label == "1st Son (Heir)"
        assert summary.marks == 1
        assert summary.description == "1 of 3 legitimate sons"
        assert summary.is_heir

    def test_summary_for_only_son(self):
        summary = cadency_summary(BirthOrderResult(True, 1, 1))
        assert summary.description == "Only legitimate son"

    def test_summary_when_ineligible(self, sons):
        summary = cadency_summary(compute_birth_order(sons, 5))
        assert not summary.eligible
        assert summary.marks == 0
        assert summary.label.startswith("Bastards")
        assert cadency_summary(None).label == "Not eligible for cadency"
