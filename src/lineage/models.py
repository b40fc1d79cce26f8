"""Data classes for people and the relationships between them."""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass
from enum import Enum

from lineage.dates import PartialDate, parse_partial_date


class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value) -> "Gender":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        aliases = {"m": "male", "f": "female"}
        try:
            return cls(aliases.get(text, text))
        except ValueError:
            return cls.UNKNOWN


class LegitimacyStatus(str, Enum):
    LEGITIMATE = "legitimate"
    BASTARD = "bastard"
    ADOPTED = "adopted"
    UNKNOWN = "unknown"

    @classmethod
    def coerce(cls, value) -> "LegitimacyStatus":
        # Records written before the field existed are legitimate
        if value is None or value == "":
            return cls.LEGITIMATE
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class RelationshipType(str, Enum):
    PARENT = "parent"
    ADOPTED_PARENT = "adopted-parent"
    SPOUSE = "spouse"

    @classmethod
    def parse(cls, value) -> "RelationshipType | None":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower().replace("_", "-")
        try:
            return cls(text)
        except ValueError:
            return None


class ParentKind(str, Enum):
    BIOLOGICAL = "biological"
    ADOPTED = "adopted"


class MarriageStatus(str, Enum):
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    ANNULLED = "annulled"

    @classmethod
    def parse(cls, value) -> "MarriageStatus | None":
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


def _field(record: Mapping, *keys, default=None):
    for key in keys:
        if key in record and record[key] is not None:
            return record[key]
    return default


def usable_id(value) -> bool:
    """True for a non-null id that can key a dict."""
    if value is None:
        return False
    try:
        hash(value)
    except TypeError:
        return False
    return True


@dataclass(frozen=True)
class Person:
    id: Hashable
    first_name: str = ""
    last_name: str = ""
    date_of_birth: str | None = None  # ISO partial date: YYYY, YYYY-MM or YYYY-MM-DD
    date_of_death: str | None = None
    gender: Gender = Gender.UNKNOWN
    legitimacy_status: LegitimacyStatus = LegitimacyStatus.LEGITIMATE
    house_id: Hashable | None = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    @property
    def birth(self) -> PartialDate | None:
        return parse_partial_date(self.date_of_birth)

    @property
    def death(self) -> PartialDate | None:
        return parse_partial_date(self.date_of_death)

    @classmethod
    def from_record(cls, record: "Person | Mapping") -> "Person":
        """Build a Person from a storage record (camelCase or snake_case keys)."""
        if isinstance(record, cls):
            return record
        if not isinstance(record, Mapping):
            raise ValueError(f"Person record must be a mapping, got {type(record).__name__}")
        person_id = record.get("id")
        if not usable_id(person_id):
            raise ValueError("Person record has no usable id")
        return cls(
            id=person_id,
            first_name=str(_field(record, "firstName", "first_name", default="")),
            last_name=str(_field(record, "lastName", "last_name", default="")),
            date_of_birth=_field(record, "dateOfBirth", "date_of_birth"),
            date_of_death=_field(record, "dateOfDeath", "date_of_death"),
            gender=Gender.coerce(record.get("gender")),
            legitimacy_status=LegitimacyStatus.coerce(
                _field(record, "legitimacyStatus", "legitimacy_status")
            ),
            house_id=_field(record, "houseId", "house_id"),
        )


@dataclass(frozen=True)
class Relationship:
    id: Hashable | None
    person1_id: Hashable
    person2_id: Hashable
    relationship_type: RelationshipType  # person1 is the parent for parent edges
    marriage_date: str | None = None
    divorce_date: str | None = None
    marriage_status: MarriageStatus | None = None

    @property
    def is_parent_edge(self) -> bool:
        return self.relationship_type in (RelationshipType.PARENT, RelationshipType.ADOPTED_PARENT)

    @property
    def is_spouse_edge(self) -> bool:
        return self.relationship_type == RelationshipType.SPOUSE

    @property
    def parent_kind(self) -> ParentKind | None:
        if self.relationship_type == RelationshipType.PARENT:
            return ParentKind.BIOLOGICAL
        if self.relationship_type == RelationshipType.ADOPTED_PARENT:
            return ParentKind.ADOPTED
        return None

    @property
    def is_active_marriage(self) -> bool:
        if not self.is_spouse_edge or self.divorce_date:
            return False
        return self.marriage_status in (None, MarriageStatus.MARRIED)

    @classmethod
    def from_record(cls, record: "Relationship | Mapping") -> "Relationship":
        """
        Build a Relationship from a storage record.

        Raises:
            ValueError: if the record is not a mapping, lacks either person id,
                or carries an unknown relationship type
        """
        if isinstance(record, cls):
            return record
        if not isinstance(record, Mapping):
            raise ValueError(f"Relationship record must be a mapping, got {type(record).__name__}")
        person1_id = _field(record, "person1Id", "person1_id")
        person2_id = _field(record, "person2Id", "person2_id")
        if not (usable_id(person1_id) and usable_id(person2_id)):
            raise ValueError("Relationship record is missing a usable person id")
        relationship_id = record.get("id")
        if relationship_id is not None and not usable_id(relationship_id):
            raise ValueError("Relationship record has an unusable id")
        raw_type = _field(record, "relationshipType", "relationship_type")
        relationship_type = RelationshipType.parse(raw_type)
        if relationship_type is None:
            raise ValueError(f"Unknown relationship type: {raw_type!r}")
        return cls(
            id=relationship_id,
            person1_id=person1_id,
            person2_id=person2_id,
            relationship_type=relationship_type,
            marriage_date=_field(record, "marriageDate", "marriage_date"),
            divorce_date=_field(record, "divorceDate", "divorce_date"),
            marriage_status=MarriageStatus.parse(_field(record, "marriageStatus", "marriage_status")),
        )
