"""
Backtracking schedule generator.

Enumerates complete, clash-free schedules with a depth-first search:

  1. requirements already pinned by the user (locked) are fixed up front;
  2. the rest are sorted by priority (stable, lower first);
  3. each requirement's candidates are its eligible sections, priority order;
  4. at depth k every candidate that does not clash with the locked set or
     the shallower picks is bound, the search recurses to k+1, and the
     binding is undone on the way back.

Priority only changes *search order*: within the cap the search is
exhaustive.  The cap (max_results) is checked on entry and after each
recorded schedule so the search stops as soon as it is reached.

Excluded requirements that are not locked are left out of the search, so a
"complete" schedule covers every non-excluded requirement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from ..models import CourseSection, Requirement, Schedule
from .conflicts import find_conflict
from .resolver import eligible_sections

log = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 100


@dataclass
class GenerateStats:
    explored: int  = 0       # candidate bindings tried
    recorded: int  = 0
    capped:   bool = False


def split_locked(
    requirements: Sequence[Requirement],
    locked_selections: Mapping[str, CourseSection],
) -> Tuple[Schedule, List[Requirement]]:
    """Partition requirements into (locked schedule, requirements to search)."""
    locked: Schedule = {}
    to_schedule: List[Requirement] = []
    for req in requirements:
        chosen = locked_selections.get(req.id)
        if chosen is not None and chosen.is_locked:
            locked[req.id] = chosen
        elif not req.excluded:
            to_schedule.append(req)
    return locked, to_schedule


def generate(
    requirements: Sequence[Requirement],
    catalog: Iterable[CourseSection],
    locked_selections: Optional[Mapping[str, CourseSection]] = None,
    max_results: int = DEFAULT_MAX_RESULTS,
    stats: Optional[GenerateStats] = None,
) -> List[Schedule]:
    """Return up to *max_results* complete, clash-free schedules."""
    stats = stats if stats is not None else GenerateStats()
    catalog = list(catalog)

    locked, to_schedule = split_locked(requirements, locked_selections or {})
    to_schedule.sort(key=lambda r: r.priority)

    candidates = [eligible_sections(req, catalog) for req in to_schedule]
    for req, options in zip(to_schedule, candidates):
        log.debug("requirement %s: %d eligible section(s)", req.id, len(options))

    schedules: List[Schedule] = []
    current: Schedule = dict(locked)

    def dfs(k: int) -> None:
        if len(schedules) >= max_results:
            stats.capped = True
            return
        if k == len(to_schedule):
            schedules.append(dict(current))
            return

        rid = to_schedule[k].id
        for section in candidates[k]:
            if len(schedules) >= max_results:
                stats.capped = True
                return
            stats.explored += 1
            if find_conflict(section, current, rid) is not None:
                continue
            current[rid] = section
            dfs(k + 1)
            del current[rid]

    if max_results > 0:
        dfs(0)
    stats.recorded = len(schedules)
    log.debug(
        "generated %d schedule(s) for %d requirement(s), %d locked, %d tried%s",
        len(schedules), len(to_schedule), len(locked), stats.explored,
        " (cap reached)" if stats.capped else "",
    )
    return schedules
