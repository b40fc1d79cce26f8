"""Consistency checks for relationship and person edits before they are saved.

Every check is advisory: the validator reads a graph snapshot and a
candidate edit and returns a verdict. Blocking errors must stop the write,
warnings need the user's acknowledgement, and suggestions are follow-up
edits the caller may offer.
"""

from collections.abc import Hashable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from rapidfuzz import fuzz, utils

from lineage.config import DEFAULT_CONFIG, ValidationConfig
from lineage.dates import PartialDate, age_at, compare_dates, months_between, parse_partial_date
from lineage.graph import GenealogyGraph
from lineage.logging import get_logger
from lineage.models import MarriageStatus, ParentKind, Person, RelationshipType, usable_id

log = get_logger("validator")


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class IssueCode(str, Enum):
    # Malformed input
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"
    INVALID_RELATIONSHIP_TYPE = "INVALID_RELATIONSHIP_TYPE"
    INVALID_DATE = "INVALID_DATE"
    UNKNOWN_PERSON = "UNKNOWN_PERSON"

    # Blocking
    SELF_RELATIONSHIP = "SELF_RELATIONSHIP"
    DUPLICATE_RELATIONSHIP = "DUPLICATE_RELATIONSHIP"
    CIRCULAR_ANCESTRY = "CIRCULAR_ANCESTRY"
    PARENT_BORN_AFTER_CHILD = "PARENT_BORN_AFTER_CHILD"
    PARENT_DEAD_AT_BIRTH = "PARENT_DEAD_AT_BIRTH"
    MARRIED_AFTER_DEATH = "MARRIED_AFTER_DEATH"
    MARRIED_BEFORE_BIRTH = "MARRIED_BEFORE_BIRTH"
    DIVORCE_BEFORE_MARRIAGE = "DIVORCE_BEFORE_MARRIAGE"
    DEATH_BEFORE_BIRTH = "DEATH_BEFORE_BIRTH"

    # Warnings
    PARENT_TOO_YOUNG = "PARENT_TOO_YOUNG"
    PARENT_TOO_OLD = "PARENT_TOO_OLD"
    TOO_MANY_PARENTS = "TOO_MANY_PARENTS"
    TOO_MANY_CHILDREN = "TOO_MANY_CHILDREN"
    MARRIAGE_TOO_YOUNG = "MARRIAGE_TOO_YOUNG"
    LARGE_SPOUSE_AGE_GAP = "LARGE_SPOUSE_AGE_GAP"
    ALREADY_MARRIED = "ALREADY_MARRIED"
    TWIN_BIRTH_YEAR_MISMATCH = "TWIN_BIRTH_YEAR_MISMATCH"
    EXTREME_LIFESPAN = "EXTREME_LIFESPAN"
    POSSIBLE_DUPLICATE_PERSON = "POSSIBLE_DUPLICATE_PERSON"


class SuggestionCode(str, Enum):
    LINK_CO_PARENT = "LINK_CO_PARENT"
    LINK_SPOUSE_TO_CHILD = "LINK_SPOUSE_TO_CHILD"
    MARK_SPOUSE_WIDOWED = "MARK_SPOUSE_WIDOWED"


@dataclass(frozen=True)
class Issue:
    code: IssueCode
    severity: Severity
    message: str
    person_ids: tuple = ()
    details: dict = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class CandidateRelationship:
    """
    A relationship the caller wants to save, checked before it exists.

    `new_person` carries the record for an endpoint that has not been
    persisted yet (referenced by a sentinel id), or an edited snapshot of an
    existing person that should be used instead of the stored one.
    """

    person1_id: Hashable | None
    person2_id: Hashable | None
    relationship_type: object  # RelationshipType, or raw input still to be checked
    id: Hashable | None = None
    marriage_date: str | None = None
    divorce_date: str | None = None
    marriage_status: object = None
    new_person: Person | None = None

    @classmethod
    def from_record(cls, record: Mapping) -> "CandidateRelationship":
        """Lenient conversion from a form/storage mapping; missing fields stay None."""

        def pick(*keys):
            for key in keys:
                if record.get(key) is not None:
                    return record[key]
            return None

        return cls(
            person1_id=pick("person1Id", "person1_id"),
            person2_id=pick("person2Id", "person2_id"),
            relationship_type=pick("relationshipType", "relationship_type"),
            id=record.get("id"),
            marriage_date=pick("marriageDate", "marriage_date"),
            divorce_date=pick("divorceDate", "divorce_date"),
            marriage_status=pick("marriageStatus", "marriage_status"),
            new_person=pick("newPerson", "new_person"),
        )


@dataclass(frozen=True)
class Suggestion:
    code: SuggestionCode
    message: str
    relationship: CandidateRelationship | None = None
    updates: dict = field(default_factory=dict, compare=False)


@dataclass
class ValidationVerdict:
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    suggestions: list[Suggestion] = field(default_factory=list)

    @property
    def is_blocked(self) -> bool:
        return bool(self.errors)

    @property
    def requires_acknowledgement(self) -> bool:
        return bool(self.warnings)

    @property
    def issues(self) -> list[Issue]:
        return self.errors + self.warnings

    def codes(self) -> set[str]:
        return {issue.code.value for issue in self.issues}

    def add(self, code: IssueCode, severity: Severity, message: str, person_ids=(), **details) -> None:
        issue = Issue(code, severity, message, tuple(person_ids), details)
        if issue in self.errors or issue in self.warnings:
            return
        (self.errors if severity == Severity.ERROR else self.warnings).append(issue)

    def error(self, code: IssueCode, message: str, person_ids=(), **details) -> None:
        self.add(code, Severity.ERROR, message, person_ids, **details)

    def warn(self, code: IssueCode, message: str, person_ids=(), **details) -> None:
        self.add(code, Severity.WARNING, message, person_ids, **details)

    def suggest(self, suggestion: Suggestion) -> None:
        if suggestion not in self.suggestions:
            self.suggestions.append(suggestion)


def _name(person: Person | None, person_id=None) -> str:
    if person is not None and person.full_name:
        return person.full_name
    return f"#{person.id if person is not None else person_id}"


def _is_id(value) -> bool:
    if isinstance(value, bool) or not usable_id(value):
        return False
    return not (isinstance(value, str) and not value.strip())


def _parse_field(verdict: ValidationVerdict, value, label: str, person_ids=()) -> PartialDate | None:
    """Parse a date the caller is about to write; garbage is a blocking error."""
    if value is None or value == "":
        return None
    parsed = parse_partial_date(value)
    if parsed is None:
        verdict.error(
            IssueCode.INVALID_DATE,
            f"{label} {value!r} is not a recognised date (use YYYY, YYYY-MM or YYYY-MM-DD)",
            person_ids,
            field=label,
        )
    return parsed


class ConsistencyValidator:
    """
    Check candidate edits against a graph snapshot.

    Args:
        config: Thresholds used when a call does not pass its own
    """

    def __init__(self, config: ValidationConfig = DEFAULT_CONFIG):
        self.config = config

    # -- relationship edits --------------------------------------------------

    def validate(
        self,
        graph: GenealogyGraph,
        candidate,
        config: ValidationConfig | None = None,
    ) -> ValidationVerdict:
        """
        Validate a relationship before it is saved.

        Args:
            graph: Snapshot of the current records
            candidate: CandidateRelationship or a mapping with the same fields
            config: Thresholds for this call (defaults to the validator's)

        Returns:
            A ValidationVerdict; never raises for bad input
        """
        config = config if isinstance(config, ValidationConfig) else self.config
        verdict = ValidationVerdict()

        if not isinstance(graph, GenealogyGraph):
            verdict.error(IssueCode.INVALID_INPUT, "No genealogy graph was supplied")
            return verdict
        if isinstance(candidate, Mapping):
            candidate = CandidateRelationship.from_record(candidate)
        if not isinstance(candidate, CandidateRelationship):
            verdict.error(IssueCode.INVALID_INPUT, "Candidate is not a relationship record")
            return verdict

        if candidate.new_person is not None and not isinstance(candidate.new_person, Person):
            try:
                candidate = replace(candidate, new_person=Person.from_record(candidate.new_person))
            except ValueError as exc:
                verdict.error(IssueCode.INVALID_INPUT, f"New person record is unusable: {exc}")
                candidate = replace(candidate, new_person=None)
        if candidate.new_person is not None and not usable_id(candidate.new_person.id):
            verdict.error(IssueCode.INVALID_INPUT, "New person record has no usable id")
            candidate = replace(candidate, new_person=None)

        relationship_type = self._check_shape(verdict, candidate)
        people = self._people_for(verdict, graph, candidate)
        if verdict.is_blocked:
            return self._finish(verdict, candidate)

        p1, p2 = candidate.person1_id, candidate.person2_id
        if p1 == p2:
            verdict.error(IssueCode.SELF_RELATIONSHIP, "A person cannot be related to themselves", (p1,))
            return self._finish(verdict, candidate)

        self._check_duplicate(verdict, graph, candidate, relationship_type)
        self._check_existing_cycles(verdict, graph, (p1, p2), config)
        for person_id in (p1, p2):
            self._check_lifespan(verdict, people[person_id], config)
        if candidate.new_person is not None and candidate.new_person.id not in graph:
            self._check_new_person_dates(verdict, candidate.new_person)
            self._check_duplicate_person(verdict, graph, candidate.new_person, config)

        kind = None
        if relationship_type == RelationshipType.PARENT:
            kind = ParentKind.BIOLOGICAL
        elif relationship_type == RelationshipType.ADOPTED_PARENT:
            kind = ParentKind.ADOPTED

        if kind is not None:
            self._check_parent_edge(verdict, graph, people, p1, p2, kind, config)
        else:
            self._check_spouse_edge(verdict, graph, people, candidate, config)

        return self._finish(verdict, candidate)

    def _check_shape(self, verdict: ValidationVerdict, candidate: CandidateRelationship) -> RelationshipType | None:
        for label, value in (("person1Id", candidate.person1_id), ("person2Id", candidate.person2_id)):
            if not _is_id(value):
                verdict.error(IssueCode.MISSING_REQUIRED_FIELD, f"{label} is required", field=label)
        if candidate.relationship_type is None or candidate.relationship_type == "":
            verdict.error(
                IssueCode.MISSING_REQUIRED_FIELD, "relationshipType is required", field="relationshipType"
            )
            return None
        relationship_type = RelationshipType.parse(candidate.relationship_type)
        if relationship_type is None:
            verdict.error(
                IssueCode.INVALID_RELATIONSHIP_TYPE,
                f"Unknown relationship type {candidate.relationship_type!r}",
                value=str(candidate.relationship_type),
            )
        if candidate.marriage_status is not None and MarriageStatus.parse(candidate.marriage_status) is None:
            verdict.error(
                IssueCode.INVALID_INPUT,
                f"Unknown marriage status {candidate.marriage_status!r}",
                field="marriageStatus",
            )
        return relationship_type

    def _people_for(
        self, verdict: ValidationVerdict, graph: GenealogyGraph, candidate: CandidateRelationship
    ) -> dict:
        new_person = candidate.new_person
        people = {}
        for person_id in (candidate.person1_id, candidate.person2_id):
            if not _is_id(person_id):
                continue
            if new_person is not None and new_person.id == person_id:
                people[person_id] = new_person
            elif person_id in graph:
                people[person_id] = graph.person(person_id)
            else:
                verdict.error(IssueCode.UNKNOWN_PERSON, f"No person with id {person_id!r}", (person_id,))
        return people

    def _check_duplicate(self, verdict, graph, candidate, relationship_type) -> None:
        p1, p2 = candidate.person1_id, candidate.person2_id
        for rel in graph.relationships:
            if rel.relationship_type != relationship_type:
                continue
            if candidate.id is not None and rel.id == candidate.id:
                continue  # editing this very record
            same = (rel.person1_id, rel.person2_id) == (p1, p2)
            if relationship_type == RelationshipType.SPOUSE:
                same = same or (rel.person1_id, rel.person2_id) == (p2, p1)
            if same:
                verdict.error(
                    IssueCode.DUPLICATE_RELATIONSHIP,
                    f"This {relationship_type.value} relationship already exists",
                    (p1, p2),
                    existing_id=rel.id,
                )
                return

    def _check_existing_cycles(self, verdict, graph, person_ids, config) -> None:
        seen = []
        for person_id in person_ids:
            if person_id not in graph:
                continue
            cycle = graph.find_ancestry_cycle(person_id, config.max_ancestry_depth)
            if cycle is None or set(cycle) in seen:
                continue
            seen.append(set(cycle))
            log.warning("pre_existing_ancestry_cycle", person_id=person_id, cycle=cycle)
            names = " → ".join(_name(graph.person(pid), pid) for pid in cycle + cycle[:1])
            verdict.error(
                IssueCode.CIRCULAR_ANCESTRY,
                f"Existing records already form an ancestry loop ({names}); fix them before adding relationships here",
                tuple(cycle),
                path=cycle,
                pre_existing=True,
            )

    # -- parent edges ----------------------------------------------------------

    def _check_parent_edge(self, verdict, graph, people, parent_id, child_id, kind, config) -> None:
        parent, child = people[parent_id], people[child_id]

        ancestors = graph.ancestors(parent_id, config.max_ancestry_depth) if parent_id in graph else {}
        if child_id in ancestors:
            verdict.error(
                IssueCode.CIRCULAR_ANCESTRY,
                f"{_name(child)} is already an ancestor of {_name(parent)} "
                f"({ancestors[child_id]} generations up); this would make them their own ancestor",
                (parent_id, child_id),
                generations=ancestors[child_id],
                pre_existing=False,
            )

        self._check_parent_timing(verdict, parent, child, kind, config)

        existing_parents = [pid for pid in graph.parents(child_id) if pid != parent_id]
        if len(existing_parents) >= config.max_parents:
            verdict.warn(
                IssueCode.TOO_MANY_PARENTS,
                f"{_name(child)} already has {len(existing_parents)} recorded parents",
                (child_id, *existing_parents),
                existing_parent_ids=existing_parents,
            )

        existing_children = [cid for cid in graph.children(parent_id) if cid != child_id]
        if len(existing_children) + 1 > config.max_children:
            verdict.warn(
                IssueCode.TOO_MANY_CHILDREN,
                f"{_name(parent)} would have {len(existing_children) + 1} children "
                f"(more than {config.max_children})",
                (parent_id,),
                count=len(existing_children) + 1,
            )

        self._check_twins(verdict, graph, people, parent_id, child_id, config)

        # Co-parent suggestions while the child would still lack a second parent
        parents_after = set(graph.parents(child_id)) | {parent_id}
        if len(parents_after) < 2 and parent_id in graph:
            relationship_type = RelationshipType.PARENT if kind == ParentKind.BIOLOGICAL else RelationshipType.ADOPTED_PARENT
            for link in graph.spouses(parent_id, active_only=True):
                if link.spouse_id in parents_after or link.spouse_id == child_id:
                    continue
                spouse = graph.person(link.spouse_id)
                verdict.suggest(
                    Suggestion(
                        SuggestionCode.LINK_CO_PARENT,
                        f"Also record {_name(spouse, link.spouse_id)} as a parent of {_name(child)}",
                        CandidateRelationship(link.spouse_id, child_id, relationship_type),
                    )
                )

    def _check_parent_timing(self, verdict, parent: Person, child: Person, kind: ParentKind, config) -> None:
        parent_birth, parent_death, child_birth = parent.birth, parent.death, child.birth
        ids = (parent.id, child.id)

        if parent_birth and child_birth:
            if compare_dates(parent_birth, child_birth) > 0:
                verdict.error(
                    IssueCode.PARENT_BORN_AFTER_CHILD,
                    f"{_name(parent)} (b. {parent_birth}) was born after {_name(child)} (b. {child_birth})",
                    ids,
                )
            else:
                age = age_at(parent_birth, child_birth)
                if age < config.min_parent_age:
                    verdict.warn(
                        IssueCode.PARENT_TOO_YOUNG,
                        f"{_name(parent)} would have been {age} when {_name(child)} was born "
                        f"(minimum {config.min_parent_age})",
                        ids,
                        age=age,
                    )
                match kind:
                    case ParentKind.BIOLOGICAL:
                        too_old = age > config.max_parent_age
                    case ParentKind.ADOPTED:
                        too_old = False
                if too_old:
                    verdict.warn(
                        IssueCode.PARENT_TOO_OLD,
                        f"{_name(parent)} would have been {age} when {_name(child)} was born "
                        f"(maximum {config.max_parent_age})",
                        ids,
                        age=age,
                    )

        if parent_death and child_birth:
            match kind:
                case ParentKind.BIOLOGICAL:
                    grace_months = config.posthumous_birth_grace_years * 12
                case ParentKind.ADOPTED:
                    grace_months = 0
            gap = months_between(parent_death, child_birth)
            if gap > grace_months:
                verdict.error(
                    IssueCode.PARENT_DEAD_AT_BIRTH,
                    f"{_name(parent)} died ({parent_death}) too long before {_name(child)} was born ({child_birth})",
                    ids,
                    months=gap,
                )

    def _check_twins(self, verdict, graph, people, parent_id, child_id, config) -> None:
        child = people[child_id]
        child_birth = child.birth
        if child_birth is None or child_birth.month is None:
            return
        parents_after = set(graph.parents(child_id)) | {parent_id}
        for sibling_id in graph.children(parent_id):
            if sibling_id == child_id or set(graph.parents(sibling_id)) != parents_after:
                continue
            sibling = graph.person(sibling_id)
            sibling_birth = sibling.birth if sibling else None
            if sibling_birth is None or sibling_birth.month is None:
                continue
            gap = abs(months_between(sibling_birth, child_birth))
            if sibling_birth.year != child_birth.year and gap < config.min_sibling_spacing_months:
                verdict.warn(
                    IssueCode.TWIN_BIRTH_YEAR_MISMATCH,
                    f"{_name(child)} ({child_birth}) and {_name(sibling)} ({sibling_birth}) share both "
                    f"parents and were born {gap} months apart in different years; twins recorded with "
                    f"mismatched birth years?",
                    (child_id, sibling_id),
                    months=gap,
                )

    # -- spouse edges ----------------------------------------------------------

    def _check_spouse_edge(self, verdict, graph, people, candidate, config) -> None:
        a, b = candidate.person1_id, candidate.person2_id
        ids = (a, b)
        married = _parse_field(verdict, candidate.marriage_date, "marriageDate", ids)
        divorced = _parse_field(verdict, candidate.divorce_date, "divorceDate", ids)

        if married and divorced and compare_dates(divorced, married) < 0:
            verdict.error(
                IssueCode.DIVORCE_BEFORE_MARRIAGE,
                f"Divorce date {divorced} is before marriage date {married}",
                ids,
            )

        for person_id in ids:
            person = people[person_id]
            if married is None:
                continue
            if person.death and compare_dates(married, person.death) > 0:
                verdict.error(
                    IssueCode.MARRIED_AFTER_DEATH,
                    f"Marriage date {married} is after {_name(person)}'s death ({person.death})",
                    (person_id,),
                )
            if person.birth:
                if compare_dates(married, person.birth) < 0:
                    verdict.error(
                        IssueCode.MARRIED_BEFORE_BIRTH,
                        f"Marriage date {married} is before {_name(person)} was born ({person.birth})",
                        (person_id,),
                    )
                else:
                    age = age_at(person.birth, married)
                    if age < config.min_marriage_age:
                        verdict.warn(
                            IssueCode.MARRIAGE_TOO_YOUNG,
                            f"{_name(person)} would have been {age} at marriage "
                            f"(minimum {config.min_marriage_age})",
                            (person_id,),
                            age=age,
                        )

        birth_a, birth_b = people[a].birth, people[b].birth
        if birth_a and birth_b:
            gap = abs(birth_a.year - birth_b.year)
            if gap > config.max_spouse_age_gap:
                verdict.warn(
                    IssueCode.LARGE_SPOUSE_AGE_GAP,
                    f"{_name(people[a])} and {_name(people[b])} were born {gap} years apart",
                    ids,
                    years=gap,
                )

        status = MarriageStatus.parse(candidate.marriage_status)
        if divorced is not None or status not in (None, MarriageStatus.MARRIED):
            return

        for person_id, other_id in ((a, b), (b, a)):
            for link in graph.spouses(person_id, active_only=True):
                if link.spouse_id == other_id:
                    continue
                if candidate.id is not None and link.relationship_id == candidate.id:
                    continue
                current = graph.person(link.spouse_id)
                # Widowed in fact even if the status was never updated
                if current and current.death and married and compare_dates(current.death, married) <= 0:
                    continue
                verdict.warn(
                    IssueCode.ALREADY_MARRIED,
                    f"{_name(people[person_id])} is already married to {_name(current, link.spouse_id)}",
                    (person_id, link.spouse_id),
                    existing_relationship_id=link.relationship_id,
                )

        for person_id, spouse_id in ((a, b), (b, a)):
            spouse = people[spouse_id]
            for child_id in graph.children(person_id):
                child_parents = graph.parents(child_id)
                if child_id == spouse_id or spouse_id in child_parents or len(child_parents) >= 2:
                    continue
                verdict.suggest(
                    Suggestion(
                        SuggestionCode.LINK_SPOUSE_TO_CHILD,
                        f"Also record {_name(spouse)} as a parent of {_name(graph.person(child_id), child_id)}",
                        CandidateRelationship(spouse_id, child_id, RelationshipType.PARENT),
                    )
                )

    # -- person records ----------------------------------------------------------

    def validate_person(
        self,
        graph: GenealogyGraph,
        person,
        config: ValidationConfig | None = None,
    ) -> ValidationVerdict:
        """
        Validate a new or edited person record against the graph.

        Args:
            graph: Snapshot of the current records
            person: Person or storage mapping; an id already in the graph is an edit
            config: Thresholds for this call

        Returns:
            A ValidationVerdict; never raises for bad input
        """
        config = config if isinstance(config, ValidationConfig) else self.config
        verdict = ValidationVerdict()
        if not isinstance(graph, GenealogyGraph):
            verdict.error(IssueCode.INVALID_INPUT, "No genealogy graph was supplied")
            return verdict
        try:
            person = Person.from_record(person)
        except ValueError as exc:
            verdict.error(IssueCode.INVALID_INPUT, f"Person record is unusable: {exc}")
            return verdict
        if not usable_id(person.id):
            verdict.error(IssueCode.INVALID_INPUT, "Person record has no usable id")
            return verdict

        stored = graph.person(person.id)
        self._check_new_person_dates(verdict, person)
        self._check_lifespan(verdict, person, config)
        if stored is None or stored.full_name != person.full_name:
            self._check_duplicate_person(verdict, graph, person, config)

        if stored is not None:
            for parent_id in graph.parents(person.id):
                kind = graph.parent_kind(parent_id, person.id) or ParentKind.BIOLOGICAL
                self._check_parent_timing(verdict, graph.person(parent_id), person, kind, config)
            for child_id in graph.children(person.id):
                kind = graph.parent_kind(person.id, child_id) or ParentKind.BIOLOGICAL
                self._check_parent_timing(verdict, person, graph.person(child_id), kind, config)

            death = person.death
            for link in graph.spouses(person.id):
                married = parse_partial_date(link.marriage_date)
                if death and married and compare_dates(married, death) > 0:
                    verdict.error(
                        IssueCode.MARRIED_AFTER_DEATH,
                        f"{_name(person)} would have died ({death}) before marrying "
                        f"{_name(graph.person(link.spouse_id), link.spouse_id)} ({married})",
                        (person.id, link.spouse_id),
                        relationship_id=link.relationship_id,
                    )

            if death and not stored.date_of_death:
                for link in graph.spouses(person.id, active_only=True):
                    spouse = graph.person(link.spouse_id)
                    verdict.suggest(
                        Suggestion(
                            SuggestionCode.MARK_SPOUSE_WIDOWED,
                            f"Mark the marriage of {_name(person)} and {_name(spouse, link.spouse_id)} as widowed",
                            updates={
                                "relationship_id": link.relationship_id,
                                "marriage_status": MarriageStatus.WIDOWED.value,
                            },
                        )
                    )

        log.debug(
            "person_validated",
            person_id=person.id,
            errors=len(verdict.errors),
            warnings=len(verdict.warnings),
        )
        return verdict

    def _check_new_person_dates(self, verdict, person: Person) -> None:
        _parse_field(verdict, person.date_of_birth, "dateOfBirth", (person.id,))
        _parse_field(verdict, person.date_of_death, "dateOfDeath", (person.id,))

    def _check_lifespan(self, verdict, person: Person, config) -> None:
        birth, death = person.birth, person.death
        if not (birth and death):
            return
        if compare_dates(death, birth) < 0:
            verdict.error(
                IssueCode.DEATH_BEFORE_BIRTH,
                f"{_name(person)} died ({death}) before being born ({birth})",
                (person.id,),
            )
            return
        lifespan = age_at(birth, death)
        if lifespan > config.max_lifespan:
            verdict.warn(
                IssueCode.EXTREME_LIFESPAN,
                f"{_name(person)} lived {lifespan} years (more than {config.max_lifespan})",
                (person.id,),
                years=lifespan,
            )

    def _check_duplicate_person(self, verdict, graph, person: Person, config) -> None:
        name = person.full_name
        if not name:
            return
        birth_year = person.birth.year if person.birth else None
        for other in graph.people.values():
            if other.id == person.id or not other.full_name:
                continue
            score = fuzz.token_sort_ratio(name, other.full_name, processor=utils.default_process)
            if score < config.duplicate_name_threshold:
                continue
            other_year = other.birth.year if other.birth else None
            if birth_year is not None and other_year is not None:
                if abs(birth_year - other_year) > config.duplicate_birth_year_tolerance:
                    continue
            verdict.warn(
                IssueCode.POSSIBLE_DUPLICATE_PERSON,
                f"{name} looks like existing record {_name(other)} (#{other.id})",
                (person.id, other.id),
                score=round(score, 1),
                existing_id=other.id,
            )

    def _finish(self, verdict: ValidationVerdict, candidate: CandidateRelationship) -> ValidationVerdict:
        log.debug(
            "relationship_validated",
            person1_id=candidate.person1_id,
            person2_id=candidate.person2_id,
            errors=[issue.code.value for issue in verdict.errors],
            warnings=[issue.code.value for issue in verdict.warnings],
            suggestions=len(verdict.suggestions),
        )
        return verdict


_default_validator = ConsistencyValidator()


def validate(graph: GenealogyGraph, candidate, config: ValidationConfig | None = None) -> ValidationVerdict:
    return _default_validator.validate(graph, candidate, config)


def validate_person(graph: GenealogyGraph, person, config: ValidationConfig | None = None) -> ValidationVerdict:
    return _default_validator.validate_person(graph, person, config)
