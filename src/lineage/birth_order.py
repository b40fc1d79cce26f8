"""Birth order among legitimate sons, used for heraldic cadency.

Only legitimate males are counted. Bastards and adopted children keep the
arms of their house undifferenced, and daughters did not bear differenced
arms.
"""

from collections.abc import Hashable
from dataclasses import dataclass, field

from lineage.graph import GenealogyGraph, sort_key
from lineage.logging import get_logger
from lineage.models import Gender, LegitimacyStatus, ParentKind, Person
from lineage.terms import ordinal

log = get_logger("birth_order")


@dataclass(frozen=True)
class SiblingEntry:
    id: Hashable
    first_name: str
    last_name: str
    date_of_birth: str | None
    is_self: bool = False


@dataclass(frozen=True)
class BirthOrderResult:
    is_eligible: bool
    position: int | None
    total_eligible_siblings: int
    reason: str | None = None
    siblings: tuple[SiblingEntry, ...] = field(default=())


@dataclass(frozen=True)
class CadencySummary:
    eligible: bool
    label: str
    marks: int
    description: str | None = None
    is_heir: bool = False


def ineligibility_reason(person: Person | None) -> str | None:
    """Why a person cannot bear cadency marks, or None if they can."""
    if person is None:
        return "No person provided"
    if person.gender != Gender.MALE:
        return "Cadency marks traditionally apply only to male heirs"
    match person.legitimacy_status:
        case LegitimacyStatus.LEGITIMATE:
            return None
        case LegitimacyStatus.BASTARD:
            return "Bastards do not bear differenced arms of their father's house"
        case LegitimacyStatus.ADOPTED:
            return "Adopted children do not bear differenced arms through cadency"
        case LegitimacyStatus.UNKNOWN:
            return "Legitimacy is unknown"


def is_eligible_for_cadency(person: Person | None) -> bool:
    return ineligibility_reason(person) is None


def _biological_parents(graph: GenealogyGraph, person_id) -> frozenset:
    return frozenset(
        pid for pid in graph.parents(person_id) if graph.parent_kind(pid, person_id) == ParentKind.BIOLOGICAL
    )


def _order_key(person: Person) -> tuple:
    birth = person.birth
    # Unknown birth years sort last; ties fall back to id
    return (birth is None, birth.year if birth else 0, sort_key(person.id))


def compute_birth_order(graph: GenealogyGraph, person_id) -> BirthOrderResult:
    """
    Rank a person among the legitimate sons of the same parent pair.

    Args:
        graph: Snapshot of the current records
        person_id: Person to rank

    Returns:
        A BirthOrderResult. `position` is None when the person is ineligible,
        has no recorded parents or has no known birth year; the sibling
        count is reported either way.
    """
    person = graph.person(person_id)
    if person is None:
        return BirthOrderResult(False, None, 0, reason="No person provided")

    reason = ineligibility_reason(person)
    eligible = reason is None
    parents = _biological_parents(graph, person_id)
    if not parents:
        return BirthOrderResult(
            eligible,
            None,
            1 if eligible else 0,
            reason=reason or "No parents recorded - cannot determine birth order",
        )

    candidates = {person_id}
    for parent_id in parents:
        candidates.update(graph.children(parent_id))
    brothers = sorted(
        (
            graph.person(cid)
            for cid in candidates
            if _biological_parents(graph, cid) == parents and is_eligible_for_cadency(graph.person(cid))
        ),
        key=_order_key,
    )
    siblings = tuple(
        SiblingEntry(p.id, p.first_name, p.last_name, p.date_of_birth, is_self=p.id == person_id)
        for p in brothers
    )

    position = None
    if eligible:
        if person.birth is None:
            reason = "Birth year unknown - cannot determine birth order"
        else:
            position = next(i for i, p in enumerate(brothers, start=1) if p.id == person_id)

    log.debug(
        "birth_order_computed",
        person_id=person_id,
        position=position,
        total=len(brothers),
    )
    return BirthOrderResult(eligible, position, len(brothers), reason=reason, siblings=siblings)


def cadency_mark_count(position: int | None) -> int:
    """Number of cadency marks for a birth position; the heir still shows one."""
    if not position or position < 1:
        return 0
    return position


def birth_order_label(position: int | None) -> str:
    """1 -> "1st Son (Heir)", 2 -> "2nd Son"."""
    if not position or position < 1:
        return "Unknown"
    label = f"{ordinal(position)} Son"
    return label + " (Heir)" if position == 1 else label


def cadency_summary(result: BirthOrderResult | None) -> CadencySummary:
    if result is None or not result.is_eligible or result.position is None:
        label = result.reason if result is not None and result.reason else "Not eligible for cadency"
        return CadencySummary(eligible=False, label=label, marks=0)

    position, total = result.position, result.total_eligible_siblings
    return CadencySummary(
        eligible=True,
        label=birth_order_label(position),
        marks=cadency_mark_count(position),
        description=f"{position} of {total} legitimate sons" if total > 1 else "Only legitimate son",
        is_heir=position == 1,
    )
