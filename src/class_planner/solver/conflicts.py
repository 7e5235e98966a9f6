"""
Conflict checking between sections.

Two sections conflict when any of their weekly meetings overlap on the same
day (see TimeInterval.overlaps). Sections with no parseable meeting time
(TBA, empty) never conflict with anything.
"""

from __future__ import annotations

from itertools import combinations
from typing import List, Mapping, Optional, Tuple

from ..models import CourseSection
from .timeparse import parse_times


def sections_conflict(a: CourseSection, b: CourseSection) -> bool:
    times_a = parse_times(a.time)
    if not times_a:
        return False
    return any(t1.overlaps(t2) for t1 in times_a for t2 in parse_times(b.time))


def find_conflict(
    candidate: CourseSection,
    schedule: Mapping[str, CourseSection],
    ignore_requirement_id: Optional[str] = None,
) -> Optional[CourseSection]:
    """Return the first section in *schedule* that clashes with *candidate*."""
    times = parse_times(candidate.time)
    if not times:
        return None

    for rid, chosen in schedule.items():
        if rid == ignore_requirement_id:
            continue
        for t2 in parse_times(chosen.time):
            if any(t1.overlaps(t2) for t1 in times):
                return chosen
    return None


def schedule_conflicts(schedule: Mapping[str, CourseSection]) -> List[Tuple[str, str]]:
    """All (requirement_id, requirement_id) pairs in *schedule* that clash."""
    return [
        (ra, rb)
        for (ra, a), (rb, b) in combinations(schedule.items(), 2)
        if sections_conflict(a, b)
    ]
