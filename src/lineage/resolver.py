"""Relationship labels between two people in a genealogy graph.

Blood relationships are found through the closest common ancestor of the
two people. Marriage-derived labels (spouse, step, in-law) are only looked
for when no blood relationship exists within the search bound, and are
built by resolving blood relationships through a spouse edge.

A label always describes what the first person is to the second, worded
by the first person's recorded gender:

    resolve(graph, edmund_id, cedric_id).display_text  -> "Father"
    resolve(graph, cedric_id, edmund_id).display_text  -> "Son"
"""

from collections.abc import Hashable
from dataclasses import dataclass, replace
from enum import Enum

from lineage.graph import MAX_GENERATIONS, GenealogyGraph, sort_key
from lineage.logging import get_logger
from lineage.models import MarriageStatus, Person
from lineage.terms import gendered, ordinal, removal_text

log = get_logger("resolver")


class RelationshipKind(str, Enum):
    SELF = "self"
    SPOUSE = "spouse"
    ANCESTOR = "ancestor"
    DESCENDANT = "descendant"
    SIBLING = "sibling"
    AUNT_UNCLE = "aunt-uncle"
    NIECE_NEPHEW = "niece-nephew"
    COUSIN = "cousin"


class Modifier(str, Enum):
    HALF = "half"
    STEP = "step"
    IN_LAW = "in-law"
    ADOPTED = "adopted"


@dataclass(frozen=True)
class RelationshipLabel:
    kind: RelationshipKind
    display_text: str
    degree: int | None = None
    removal: int | None = None
    modifier: Modifier | None = None
    distance_a: int | None = None
    distance_b: int | None = None
    common_ancestor_ids: tuple = ()
    alternatives: tuple["RelationshipLabel", ...] = ()

    def __str__(self) -> str:
        return self.display_text


def _great(count: int) -> str:
    return "Great-" * max(count, 0)


def describe(
    kind: RelationshipKind,
    person: Person | None,
    degree: int | None = None,
    removal: int | None = None,
    modifier: Modifier | None = None,
) -> str:
    """Human-readable text for a classified relationship, worded for `person`."""
    match kind:
        case RelationshipKind.SELF:
            text = "Self"
        case RelationshipKind.SPOUSE:
            text = gendered(person, "spouse")
        case RelationshipKind.ANCESTOR:
            base = gendered(person, "parent")
            text = base if degree == 1 else f"{_great(degree - 2)}Grand{base.lower()}"
        case RelationshipKind.DESCENDANT:
            base = gendered(person, "child")
            text = base if degree == 1 else f"{_great(degree - 2)}Grand{base.lower()}"
        case RelationshipKind.SIBLING:
            text = gendered(person, "sibling")
        case RelationshipKind.AUNT_UNCLE:
            text = f"{_great(degree - 2)}{gendered(person, 'aunt-uncle')}"
        case RelationshipKind.NIECE_NEPHEW:
            base = gendered(person, "niece-nephew")
            text = base if degree == 2 else f"{_great(degree - 3)}Grand-{base}"
        case RelationshipKind.COUSIN:
            text = " ".join(
                part for part in (f"{ordinal(degree)} Cousin", removal_text(removal or 0)) if part
            )

    match modifier:
        case None:
            return text
        case Modifier.HALF:
            return f"Half {text}" if kind == RelationshipKind.COUSIN else f"Half-{text}"
        case Modifier.STEP:
            return f"Step-{text}"
        case Modifier.IN_LAW:
            return f"{text}-in-Law"
        case Modifier.ADOPTED:
            return f"Adoptive {text}" if kind == RelationshipKind.ANCESTOR else f"Adopted {text}"


def _self_label() -> RelationshipLabel:
    return RelationshipLabel(
        kind=RelationshipKind.SELF,
        display_text="Self",
        degree=0,
        distance_a=0,
        distance_b=0,
    )


class RelationshipResolver:
    """
    Classify how two people are related.

    Args:
        max_depth: Generations to climb from each person before giving up
    """

    def __init__(self, max_depth: int = MAX_GENERATIONS):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.max_depth = max_depth

    def resolve(self, graph: GenealogyGraph, person_a, person_b) -> RelationshipLabel | None:
        """
        Closest relationship of person_a to person_b.

        Returns a "self" label when both ids are the same (callers should
        treat that as a mistake), and None when no relationship is found
        within the search bound.
        """
        if person_a == person_b:
            return _self_label()
        if person_a not in graph or person_b not in graph:
            return None

        label = self._blood(graph, person_a, person_b)
        if label is None:
            label = self._by_marriage(graph, person_a, person_b)
        if label is None:
            log.debug("no_relationship_found", person_a=person_a, person_b=person_b, max_depth=self.max_depth)
        return label

    def resolve_all(self, graph: GenealogyGraph, person_a, person_b) -> list[RelationshipLabel]:
        """
        Every distinct way person_a is related to person_b, closest first.

        Blood paths are reported once per distance pair through common
        ancestors that are not reached via another common ancestor. A
        direct marriage is appended after them. Step and in-law labels are
        only reported when nothing else is found.
        """
        if person_a == person_b:
            return [_self_label()]
        if person_a not in graph or person_b not in graph:
            return []

        routes_a = graph.ancestor_routes(person_a, self.max_depth)
        routes_b = graph.ancestor_routes(person_b, self.max_depth)
        common = routes_a.keys() & routes_b.keys()
        nearest = [
            c for c in common if not any(child in common for child in graph.children(c))
        ]

        by_distance: dict[tuple[int, int], list] = {}
        for ancestor_id in nearest:
            key = (routes_a[ancestor_id][0], routes_b[ancestor_id][0])
            by_distance.setdefault(key, []).append(ancestor_id)

        labels: list[RelationshipLabel] = []
        seen = set()
        for (da, db) in sorted(by_distance, key=lambda d: (d[0] + d[1], max(d), d[0])):
            label = self._classify(
                graph, person_a, person_b, da, db, by_distance[(da, db)], routes_a, routes_b
            )
            signature = (label.kind, label.degree, label.removal, label.modifier)
            if signature not in seen:
                seen.add(signature)
                labels.append(label)

        spouse = self._spouse_label(graph, person_a, person_b)
        if spouse is not None:
            labels.append(spouse)
        if not labels:
            extended = self._by_marriage(graph, person_a, person_b)
            if extended is not None:
                labels.append(extended)
        return labels

    def resolve_many(self, graph: GenealogyGraph, person_id) -> dict[Hashable, RelationshipLabel]:
        """Label of person_id relative to everyone else it is related to."""
        if person_id not in graph:
            return {}
        result = {}
        for other_id in sorted(graph.people, key=sort_key):
            if other_id == person_id:
                continue
            label = self.resolve(graph, person_id, other_id)
            if label is not None:
                result[other_id] = label
        return result

    # -- blood -------------------------------------------------------------

    def _blood(
        self, graph: GenealogyGraph, person_a, person_b, speaker: Person | None = None
    ) -> RelationshipLabel | None:
        routes_a = graph.ancestor_routes(person_a, self.max_depth)
        routes_b = graph.ancestor_routes(person_b, self.max_depth)
        common = routes_a.keys() & routes_b.keys()
        if not common:
            return None

        def closeness(ancestor_id):
            da, db = routes_a[ancestor_id][0], routes_b[ancestor_id][0]
            return (da + db, max(da, db))

        best = min(closeness(c) for c in common)
        tied = [c for c in common if closeness(c) == best]

        by_distance: dict[tuple[int, int], list] = {}
        for ancestor_id in tied:
            key = (routes_a[ancestor_id][0], routes_b[ancestor_id][0])
            by_distance.setdefault(key, []).append(ancestor_id)

        labels = [
            self._classify(graph, person_a, person_b, da, db, ancestors, routes_a, routes_b, speaker)
            for (da, db), ancestors in sorted(by_distance.items())
        ]
        primary = labels[0]
        if len(labels) == 1:
            return primary
        # Equally close through different generations: keep both readings
        return replace(
            primary,
            display_text=" and also ".join(label.display_text for label in labels),
            alternatives=tuple(labels[1:]),
        )

    def _classify(
        self,
        graph: GenealogyGraph,
        person_a,
        person_b,
        da: int,
        db: int,
        ancestors: list,
        routes_a: dict,
        routes_b: dict,
        speaker: Person | None = None,
    ) -> RelationshipLabel:
        speaker = speaker or graph.person(person_a)
        degree = None
        removal = None
        half = False

        if da == 0:
            kind, degree = RelationshipKind.ANCESTOR, db
        elif db == 0:
            kind, degree = RelationshipKind.DESCENDANT, da
        elif da == 1 and db == 1:
            kind = RelationshipKind.SIBLING
            half = not self._full_blood(graph, da, db, ancestors, routes_a, routes_b)
        elif da == 1:
            kind, degree = RelationshipKind.AUNT_UNCLE, db
            half = not self._full_blood(graph, da, db, ancestors, routes_a, routes_b)
        elif db == 1:
            kind, degree = RelationshipKind.NIECE_NEPHEW, da
            half = not self._full_blood(graph, da, db, ancestors, routes_a, routes_b)
        else:
            kind = RelationshipKind.COUSIN
            degree, removal = min(da, db) - 1, abs(da - db)
            half = not self._full_blood(graph, da, db, ancestors, routes_a, routes_b)

        # Adopted only when no biological route of this length exists
        adopted = all(routes_a[c][1] or routes_b[c][1] for c in ancestors)
        if adopted:
            modifier = Modifier.ADOPTED
        elif half:
            modifier = Modifier.HALF
        else:
            modifier = None

        return RelationshipLabel(
            kind=kind,
            display_text=describe(kind, speaker, degree, removal, modifier),
            degree=degree,
            removal=removal,
            modifier=modifier,
            distance_a=da,
            distance_b=db,
            common_ancestor_ids=tuple(sorted(ancestors, key=sort_key)),
        )

    @staticmethod
    def _full_blood(graph, da, db, ancestors, routes_a, routes_b) -> bool:
        """True when the two lines descend from the common ancestor through full siblings."""
        for ancestor_id in ancestors:
            children = graph.children(ancestor_id)
            line_a = [c for c in children if routes_a.get(c, (None,))[0] == da - 1]
            line_b = [c for c in children if routes_b.get(c, (None,))[0] == db - 1]
            for u in line_a:
                for v in line_b:
                    if u != v and set(graph.parents(u)) == set(graph.parents(v)):
                        return True
        return False

    # -- marriage ----------------------------------------------------------

    def _spouse_label(self, graph: GenealogyGraph, person_a, person_b) -> RelationshipLabel | None:
        links = [link for link in graph.spouses(person_a) if link.spouse_id == person_b]
        if not links:
            return None
        speaker = graph.person(person_a)
        text = describe(RelationshipKind.SPOUSE, speaker)
        if all(link.is_dissolved for link in links):
            text = f"Former {text}"
        elif not any(link.is_active for link in links) and any(
            link.marriage_status == MarriageStatus.WIDOWED for link in links
        ):
            text = f"Widowed {text}"
        return RelationshipLabel(kind=RelationshipKind.SPOUSE, display_text=text, degree=1)

    def _by_marriage(self, graph: GenealogyGraph, person_a, person_b) -> RelationshipLabel | None:
        spouse = self._spouse_label(graph, person_a, person_b)
        if spouse is not None:
            return spouse

        speaker = graph.person(person_a)
        found: list[RelationshipLabel] = []

        # Through A's spouse C: C's descendants are A's step-descendants
        for link in graph.spouses(person_a):
            if link.is_dissolved or link.spouse_id == person_b:
                continue
            blood = self._blood(graph, link.spouse_id, person_b, speaker)
            if blood is None:
                continue
            if blood.kind == RelationshipKind.ANCESTOR:
                found.append(self._derived(blood, Modifier.STEP, speaker))
            else:
                found.append(self._derived(blood, Modifier.IN_LAW, speaker))

        # Through B's spouse D: D's ancestors are B's in-laws, D's descendants B's step-children
        for link in graph.spouses(person_b):
            if link.is_dissolved or link.spouse_id == person_a:
                continue
            blood = self._blood(graph, person_a, link.spouse_id, speaker)
            if blood is None:
                continue
            if blood.kind == RelationshipKind.DESCENDANT:
                found.append(self._derived(blood, Modifier.STEP, speaker))
            else:
                found.append(self._derived(blood, Modifier.IN_LAW, speaker))

        if found:
            return min(found, key=lambda label: (label.distance_a or 0) + (label.distance_b or 0))

        # Step-siblings: a parent of A is married to a parent of B
        parents_b = set(graph.parents(person_b))
        for parent_id in graph.parents(person_a):
            for link in graph.spouses(parent_id):
                if not link.is_dissolved and link.spouse_id in parents_b:
                    return RelationshipLabel(
                        kind=RelationshipKind.SIBLING,
                        display_text=describe(RelationshipKind.SIBLING, speaker, modifier=Modifier.STEP),
                        modifier=Modifier.STEP,
                        distance_a=1,
                        distance_b=1,
                    )
        return None

    @staticmethod
    def _derived(blood: RelationshipLabel, modifier: Modifier, speaker: Person | None) -> RelationshipLabel:
        if modifier == Modifier.IN_LAW:
            # "Half-Brother" becomes "Half-Brother-in-Law"
            text = f"{describe(blood.kind, speaker, blood.degree, blood.removal, blood.modifier)}-in-Law"
        else:
            text = describe(blood.kind, speaker, blood.degree, blood.removal, modifier)
        return replace(blood, display_text=text, modifier=modifier, alternatives=())


_default_resolver = RelationshipResolver()


def resolve(graph: GenealogyGraph, person_a, person_b) -> RelationshipLabel | None:
    return _default_resolver.resolve(graph, person_a, person_b)


def resolve_all(graph: GenealogyGraph, person_a, person_b) -> list[RelationshipLabel]:
    return _default_resolver.resolve_all(graph, person_a, person_b)


def resolve_many(graph: GenealogyGraph, person_id) -> dict[Hashable, RelationshipLabel]:
    return _default_resolver.resolve_many(graph, person_id)
