"""
Pre-search checks that run before the generator is invoked.

Catching trivially hopeless plans here means the student sees plain-English
messages ("CS101 has no sections") rather than a bare "no schedule found".
Errors mean no schedule can exist; warnings are worth showing but the search
still runs.
"""

from __future__ import annotations

from itertools import combinations
from typing import Iterable, List, Tuple

from ..models import CourseSection, Plan
from ..session import all_sections, locked_selections, section_index
from .conflicts import sections_conflict
from .resolver import eligible_sections, sections_for


class PrecheckError(ValueError):
    """Raised by ensure_ok() when hard errors are present."""


def precheck(plan: Plan, catalog: Iterable[CourseSection]) -> Tuple[List[str], List[str]]:
    """Return (errors, warnings). errors = no schedule can be generated."""
    errors:   List[str] = []
    warnings: List[str] = []

    catalog = list(catalog)
    pool    = all_sections(plan, catalog)
    index   = section_index(plan, catalog)
    locked  = locked_selections(plan, catalog)

    for rid, ref in plan.selections.items():
        if ref.key not in index:
            warnings.append(
                f"Selection for '{rid}' points at {ref.subject_code} {ref.section}, "
                f"which is not in the catalog; it will be ignored."
            )

    for (ra, a), (rb, b) in combinations(locked.items(), 2):
        if sections_conflict(a, b):
            errors.append(
                f"Locked sections {a.label} ('{ra}') and {b.label} ('{rb}') "
                f"overlap — unlock one of them."
            )

    for rid, s in locked.items():
        if s.slots <= 0:
            warnings.append(f"Locked section {s.label} ('{rid}') has no free slots.")

    for req in plan.requirements:
        if req.id in locked or req.excluded:
            continue
        found = sections_for(req, pool)
        if not found:
            warnings.append(
                f"Requirement '{req.display_name}' matches no sections in the catalog."
            )
        elif not eligible_sections(req, pool):
            warnings.append(
                f"Every section of '{req.display_name}' is excluded or full — "
                f"it cannot be auto-scheduled."
            )

    return errors, warnings


def ensure_ok(plan: Plan, catalog: Iterable[CourseSection]) -> None:
    errors, _ = precheck(plan, catalog)
    if errors:
        raise PrecheckError("\n".join(errors))
