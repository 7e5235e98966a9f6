from __future__ import annotations

from typing import Iterable, List

from ..models import CourseSection, Requirement


def sections_for(requirement: Requirement, catalog: Iterable[CourseSection]) -> List[CourseSection]:
    """Every section that could satisfy *requirement*, in catalog order.

    No exclusion or slot filtering here: manual pickers want to see
    excluded and full sections too.
    """
    if requirement.kind == "custom":
        return [
            s for s in catalog
            if s.is_custom and s.requirement_id == requirement.id
        ]
    if requirement.kind == "group":
        codes = set(requirement.courses)
    else:
        codes = {requirement.id}
    # custom classes only ever satisfy their own custom requirement
    return [s for s in catalog if not s.is_custom and s.subject_code in codes]


def eligible_sections(requirement: Requirement, catalog: Iterable[CourseSection]) -> List[CourseSection]:
    """Candidates for the auto-scheduler, best priority first.

    Zero-slot sections are dropped here but can still be locked by hand.
    """
    pool = [
        s for s in sections_for(requirement, catalog)
        if not s.excluded and s.slots > 0
    ]
    # sorted() is stable, so equal priorities keep catalog order
    return sorted(pool, key=lambda s: s.priority)
