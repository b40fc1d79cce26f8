"""Tests for person and relationship records."""

import pytest

from lineage.models import (
    Gender,
    LegitimacyStatus,
    MarriageStatus,
    ParentKind,
    Person,
    Relationship,
    RelationshipType,
)


class TestPerson:
    def test_from_camel_case_record(self):
        p = Person.from_record(
            {
                "id": 7,
                "firstName": "Isolde",
                "lastName": "Vane",
                "dateOfBirth": "1258-04",
                "gender": "F",
                "houseId": 3,
            }
        )
        assert p.full_name == "Isolde Vane"
        assert p.gender == Gender.FEMALE
        assert p.house_id == 3
        assert p.birth.month == 4
        assert p.death is None

    def test_from_snake_case_record(self):
        p = Person.from_record({"id": "p1", "first_name": "Hal", "legitimacy_status": "adopted"})
        assert p.legitimacy_status == LegitimacyStatus.ADOPTED
        assert p.gender == Gender.UNKNOWN

    def test_legitimacy_defaults(self):
        assert LegitimacyStatus.coerce(None) == LegitimacyStatus.LEGITIMATE
        assert LegitimacyStatus.coerce("disputed") == LegitimacyStatus.UNKNOWN

    @pytest.mark.parametrize("record", [{"firstName": "Nobody"}, {"id": None}, {"id": [1]}, "Edmund"])
    def test_unusable_records(self, record):
        with pytest.raises(ValueError):
            Person.from_record(record)


class TestRelationship:
    def test_parent_edge(self):
        rel = Relationship.from_record({"id": 1, "person1Id": 2, "person2Id": 3, "relationshipType": "adopted_parent"})
        assert rel.relationship_type == RelationshipType.ADOPTED_PARENT
        assert rel.is_parent_edge
        assert rel.parent_kind == ParentKind.ADOPTED
        assert not rel.is_active_marriage

    def test_spouse_edge(self):
        rel = Relationship.from_record(
            {"id": 2, "person1Id": 2, "person2Id": 3, "relationshipType": "Spouse", "marriageStatus": "Married"}
        )
        assert rel.is_spouse_edge
        assert rel.parent_kind is None
        assert rel.marriage_status == MarriageStatus.MARRIED
        assert rel.is_active_marriage

    def test_divorce_ends_marriage(self):
        rel = Relationship(3, 1, 2, RelationshipType.SPOUSE, divorce_date="1290")
        assert not rel.is_active_marriage

    def test_unknown_type(self):
        with pytest.raises(ValueError):
            Relationship.from_record({"person1Id": 1, "person2Id": 2, "relationshipType": "cousin"})
