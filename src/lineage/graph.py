"""Genealogy graph building and bounded ancestry traversal."""

from collections.abc import Hashable, Iterable, Mapping
from dataclasses import dataclass

import networkx as nx

from lineage.errors import GraphInputError
from lineage.logging import get_logger
from lineage.models import (
    MarriageStatus,
    ParentKind,
    Person,
    Relationship,
    RelationshipType,
    usable_id,
)

MAX_GENERATIONS = 10

log = get_logger("graph")


def sort_key(value) -> tuple:
    """Order mixed ids deterministically: numbers first, then everything else by text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    return (1, 0, str(value))


@dataclass(frozen=True)
class SpouseLink:
    spouse_id: Hashable
    relationship_id: Hashable | None
    marriage_status: MarriageStatus | None = None
    marriage_date: str | None = None
    divorce_date: str | None = None

    @property
    def is_active(self) -> bool:
        if self.divorce_date:
            return False
        return self.marriage_status in (None, MarriageStatus.MARRIED)

    @property
    def is_dissolved(self) -> bool:
        """Ended by divorce or annulment (widowhood does not dissolve in-law ties)."""
        if self.divorce_date:
            return True
        return self.marriage_status in (MarriageStatus.DIVORCED, MarriageStatus.ANNULLED)


@dataclass(frozen=True)
class OrphanedEdge:
    """A relationship record left out of the adjacency maps."""

    record: object
    reason: str  # missing-person, unknown-type or malformed
    missing_ids: tuple = ()


@dataclass
class GenealogyGraph:
    """
    Immutable-by-convention snapshot of people and their relationships.

    Rebuild with build_graph() whenever the underlying records change; there
    is no incremental update.
    """

    people: dict[Hashable, Person]
    parents_of: dict[Hashable, tuple]
    children_of: dict[Hashable, tuple]
    spouses_of: dict[Hashable, tuple[SpouseLink, ...]]
    parent_kinds: dict[tuple, ParentKind]
    relationships: tuple[Relationship, ...] = ()
    orphaned_edges: tuple[OrphanedEdge, ...] = ()
    skipped_people: tuple = ()

    def __contains__(self, person_id) -> bool:
        return person_id in self.people

    def person(self, person_id) -> Person | None:
        return self.people.get(person_id)

    def parents(self, person_id) -> tuple:
        return self.parents_of.get(person_id, ())

    def children(self, person_id) -> tuple:
        return self.children_of.get(person_id, ())

    def spouses(self, person_id, active_only: bool = False) -> tuple[SpouseLink, ...]:
        links = self.spouses_of.get(person_id, ())
        if active_only:
            return tuple(link for link in links if link.is_active)
        return links

    def parent_kind(self, parent_id, child_id) -> ParentKind | None:
        return self.parent_kinds.get((parent_id, child_id))

    def ancestor_routes(
        self, person_id, max_depth: int = MAX_GENERATIONS
    ) -> dict[Hashable, tuple[int, bool]]:
        """
        Ascend through parent edges one generation at a time.

        Args:
            person_id: Where the ascent starts (recorded at generation 0)
            max_depth: Number of generations to climb

        Returns:
            ancestor id -> (generation, adopted) where `adopted` is True only
            when every shortest route to that ancestor crosses an
            adopted-parent edge.
        """
        routes: dict[Hashable, tuple[int, bool]] = {person_id: (0, False)}
        frontier: dict[Hashable, bool] = {person_id: False}
        generation = 0
        while frontier and generation < max_depth:
            generation += 1
            next_frontier: dict[Hashable, bool] = {}
            for child_id, adopted in frontier.items():
                for parent_id in self.parents(child_id):
                    if parent_id in routes:
                        continue  # already reached on a shorter route, or a cycle
                    via_adoption = adopted or self.parent_kind(parent_id, child_id) == ParentKind.ADOPTED
                    # A biological route wins over an adoptive one of equal length
                    next_frontier[parent_id] = next_frontier.get(parent_id, True) and via_adoption
            for ancestor_id, adopted in next_frontier.items():
                routes[ancestor_id] = (generation, adopted)
            frontier = next_frontier
        return routes

    def ancestors(self, person_id, max_depth: int = MAX_GENERATIONS) -> dict[Hashable, int]:
        """Ancestor id -> generational distance; the person itself is at 0."""
        return {aid: gen for aid, (gen, _) in self.ancestor_routes(person_id, max_depth).items()}

    def is_ancestor(self, ancestor_id, person_id, max_depth: int = MAX_GENERATIONS) -> bool:
        if ancestor_id == person_id:
            return False
        return ancestor_id in self.ancestors(person_id, max_depth)

    def siblings(self, person_id) -> dict[Hashable, str]:
        """Sibling id -> "full" (same parent set) or "half" (some parents shared)."""
        own = set(self.parents(person_id))
        result: dict[Hashable, str] = {}
        for parent_id in own:
            for child_id in self.children(parent_id):
                if child_id == person_id or child_id in result:
                    continue
                result[child_id] = "full" if set(self.parents(child_id)) == own else "half"
        return result

    def find_ancestry_cycle(self, person_id, max_depth: int = MAX_GENERATIONS) -> list | None:
        """
        Look for a loop of parent edges among a person's bounded ancestry.

        Returns:
            The ids on the loop, each followed by their recorded parent, or None
        """
        reached = self.ancestors(person_id, max_depth)
        upward = nx.DiGraph()
        upward.add_nodes_from(reached)
        for child_id in reached:
            for parent_id in self.parents(child_id):
                if parent_id in reached:
                    upward.add_edge(child_id, parent_id)
        try:
            cycle = nx.find_cycle(upward, source=person_id, orientation="original")
        except nx.NetworkXNoCycle:
            return None
        return [edge[0] for edge in cycle]


def _require_collection(value, name: str) -> list:
    if value is None or isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise GraphInputError(f"{name} must be an iterable of records, got {type(value).__name__}")
    return list(value)


def _load_people(records: list) -> tuple[dict[Hashable, Person], list]:
    people: dict[Hashable, Person] = {}
    skipped = []
    parsed = []
    for record in records:
        try:
            person = Person.from_record(record)
            if not usable_id(person.id):
                raise ValueError("Person record has no usable id")
        except ValueError as exc:
            log.warning("person_record_skipped", error=str(exc))
            skipped.append(record)
            continue
        parsed.append(person)
    # Duplicate ids resolve the same way regardless of input order
    for person in sorted(parsed, key=lambda p: (sort_key(p.id), repr(p))):
        if person.id in people:
            log.warning("duplicate_person_id", person_id=person.id)
            continue
        people[person.id] = person
    return people, skipped


def _load_relationship(record) -> tuple[Relationship | None, str | None]:
    if isinstance(record, Relationship):
        if not (usable_id(record.person1_id) and usable_id(record.person2_id)):
            return None, "malformed"
        return record, None
    if isinstance(record, Mapping):
        raw_type = record.get("relationshipType", record.get("relationship_type"))
        if RelationshipType.parse(raw_type) is None:
            return None, "unknown-type"
    try:
        return Relationship.from_record(record), None
    except ValueError:
        return None, "malformed"


def build_graph(people: Iterable, relationships: Iterable) -> GenealogyGraph:
    """
    Build parent, child and spouse adjacency maps from flat records.

    Args:
        people: Person objects or storage mappings
        relationships: Relationship objects or storage mappings

    Returns:
        A GenealogyGraph. Edges that reference unknown people, carry an
        unknown type or are otherwise malformed are left out of the maps and
        listed in `orphaned_edges`.

    Raises:
        GraphInputError: if either argument is not a collection of records
    """
    person_records = _require_collection(people, "people")
    relationship_records = _require_collection(relationships, "relationships")

    people_by_id, skipped = _load_people(person_records)

    accepted: list[Relationship] = []
    orphaned: list[OrphanedEdge] = []
    for record in relationship_records:
        relationship, reason = _load_relationship(record)
        if relationship is None:
            orphaned.append(OrphanedEdge(record=record, reason=reason))
            continue
        missing = tuple(
            pid for pid in (relationship.person1_id, relationship.person2_id) if pid not in people_by_id
        )
        if missing:
            orphaned.append(OrphanedEdge(record=relationship, reason="missing-person", missing_ids=missing))
            continue
        accepted.append(relationship)

    accepted.sort(
        key=lambda r: (
            sort_key(r.id),
            sort_key(r.person1_id),
            sort_key(r.person2_id),
            r.relationship_type.value,
            repr(r),
        )
    )

    parents: dict[Hashable, set] = {}
    children: dict[Hashable, set] = {}
    spouses: dict[Hashable, list[SpouseLink]] = {}
    kinds: dict[tuple, ParentKind] = {}

    for rel in accepted:
        if rel.is_parent_edge:
            parent_id, child_id = rel.person1_id, rel.person2_id
            parents.setdefault(child_id, set()).add(parent_id)
            children.setdefault(parent_id, set()).add(child_id)
            # A biological edge outranks an adoptive one for the same pair
            if kinds.get((parent_id, child_id)) != ParentKind.BIOLOGICAL:
                kinds[(parent_id, child_id)] = rel.parent_kind
        else:
            for a, b in ((rel.person1_id, rel.person2_id), (rel.person2_id, rel.person1_id)):
                spouses.setdefault(a, []).append(
                    SpouseLink(
                        spouse_id=b,
                        relationship_id=rel.id,
                        marriage_status=rel.marriage_status,
                        marriage_date=rel.marriage_date,
                        divorce_date=rel.divorce_date,
                    )
                )

    graph = GenealogyGraph(
        people=people_by_id,
        parents_of={pid: tuple(sorted(ids, key=sort_key)) for pid, ids in parents.items()},
        children_of={pid: tuple(sorted(ids, key=sort_key)) for pid, ids in children.items()},
        spouses_of={
            pid: tuple(sorted(links, key=lambda link: (sort_key(link.spouse_id), sort_key(link.relationship_id))))
            for pid, links in spouses.items()
        },
        parent_kinds=kinds,
        relationships=tuple(accepted),
        orphaned_edges=tuple(sorted(orphaned, key=lambda o: (o.reason, repr(o.record)))),
        skipped_people=tuple(sorted(skipped, key=repr)),
    )
    log.debug(
        "graph_built",
        people=len(people_by_id),
        relationships=len(accepted),
        orphaned=len(orphaned),
    )
    if orphaned:
        log.warning("orphaned_edges", count=len(orphaned))
    return graph
