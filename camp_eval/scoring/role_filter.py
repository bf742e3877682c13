# camp_eval/scoring/role_filter.py
"""
Role-Scoped Filter
------------------
Narrows the corps-member list to what a viewer may see and act on.

    scope     rater bound to a platoon -> that platoon only
              rater without a platoon, reviewer roles -> every platoon
    search    case-insensitive substring over surname, other names,
              state code, call-up number and id
    platoon   dropdown value; None or "all" disables it
    camp      camp state dropdown; None disables it

Every active filter must match (conjunction), so adding a filter can only
narrow the result.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Protocol, Sequence, Union
from uuid import UUID

from camp_eval.models.enumerations import CampState, RATER_ROLES, Role

PlatoonValue = Union[int, str, None]

ALL_PLATOONS = "all"


class Subject(Protocol):
    id: UUID
    surname: str
    other_names: Optional[str]
    state_code: str
    call_up_no: str
    platoon: int
    camp_state: CampState


def _platoon_key(value: PlatoonValue) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.lower() == ALL_PLATOONS:
        return None
    return text


def scope_platoon(role: Role, platoon_binding: PlatoonValue) -> Optional[str]:
    """Platoon a viewer is restricted to, or None for every platoon."""
    if Role(role) not in RATER_ROLES:
        return None
    return _platoon_key(platoon_binding)


def can_act_on(role: Role, platoon_binding: PlatoonValue, subject: Subject) -> bool:
    scoped = scope_platoon(role, platoon_binding)
    return scoped is None or _platoon_key(subject.platoon) == scoped


def matches_search(subject: Subject, search: Optional[str]) -> bool:
    term = (search or "").strip().lower()
    if not term:
        return True
    haystack = (
        subject.surname,
        subject.other_names or "",
        subject.state_code,
        subject.call_up_no,
        str(subject.id),
    )
    return any(term in field.lower() for field in haystack)


def filter_subjects(
    subjects: Iterable[Subject],
    role: Role,
    platoon_binding: PlatoonValue = None,
    search: Optional[str] = None,
    platoon: PlatoonValue = None,
    camp_state: Optional[CampState] = None,
) -> List[Subject]:
    """
    Apply role scope, search, platoon and camp state filters conjunctively.

    The input order is preserved and the input collection is not modified.
    """
    scoped = scope_platoon(role, platoon_binding)
    selected = _platoon_key(platoon)
    camp = CampState(camp_state) if camp_state is not None else None

    result = []
    for subject in subjects:
        key = _platoon_key(subject.platoon)
        if scoped is not None and key != scoped:
            continue
        if selected is not None and key != selected:
            continue
        if camp is not None and subject.camp_state != camp:
            continue
        if not matches_search(subject, search):
            continue
        result.append(subject)
    return result


@dataclass(frozen=True)
class PlatoonStats:
    platoon: int
    total: int
    fully_rated: int


def platoon_stats(
    subjects: Sequence[Subject],
    fully_rated_ids: Iterable[UUID],
    platoon_count: int = 10,
) -> List[PlatoonStats]:
    """Per-platoon member counts and how many have every composite rating complete."""
    rated = set(fully_rated_ids)
    totals: Dict[str, int] = {}
    done: Dict[str, int] = {}
    for subject in subjects:
        key = _platoon_key(subject.platoon)
        totals[key] = totals.get(key, 0) + 1
        if subject.id in rated:
            done[key] = done.get(key, 0) + 1
    return [
        PlatoonStats(
            platoon=n,
            total=totals.get(str(n), 0),
            fully_rated=done.get(str(n), 0),
        )
        for n in range(1, platoon_count + 1)
    ]
