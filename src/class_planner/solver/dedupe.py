from __future__ import annotations

from typing import Iterable, List, Mapping

from ..models import CourseSection, Schedule


def schedule_key(schedule: Mapping[str, CourseSection]) -> str:
    """Canonical identity: 'rid:subject:section' entries sorted by rid."""
    return "|".join(
        f"{rid}:{schedule[rid].subject_code}:{schedule[rid].section}"
        for rid in sorted(schedule)
    )


def dedupe(schedules: Iterable[Schedule]) -> List[Schedule]:
    """Drop repeated schedules, keeping the first of each and the order."""
    seen: set = set()
    unique: List[Schedule] = []
    for sched in schedules:
        key = schedule_key(sched)
        if key in seen:
            continue
        seen.add(key)
        unique.append(sched)
    return unique
