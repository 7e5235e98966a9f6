from __future__ import annotations

import logging
import time
from typing import Iterable, Optional

from ..io_json import apply_overrides
from ..models import CourseSection, Plan
from ..session import all_sections, locked_selections
from .backtrack import GenerateStats, generate
from .dedupe import dedupe
from .precheck import precheck
from .result import GenerateResult

log = logging.getLogger(__name__)


def solve(
    plan: Plan,
    catalog: Iterable[CourseSection],
    max_results: Optional[int] = None,
) -> GenerateResult:
    """Overrides -> precheck -> generate -> dedupe.

    Mutates the catalog's priority/excluded fields from plan.overrides.
    """
    catalog = list(catalog)
    cap     = plan.scheduler.max_results if max_results is None else max_results

    diagnostics = [
        f"Override for unknown section {o.subject_code} {o.section} ignored."
        for o in apply_overrides(catalog, plan)
    ]

    errors, warnings = precheck(plan, catalog)
    diagnostics.extend(errors)
    diagnostics.extend(warnings)
    if errors:
        return GenerateResult(status="NONE", diagnostics=diagnostics, errors=errors,
                              stats={"num_requirements": len(plan.requirements)})

    stats = GenerateStats()
    t0 = time.perf_counter()
    raw = generate(
        plan.requirements,
        all_sections(plan, catalog),
        locked_selections(plan, catalog),
        max_results = cap,
        stats       = stats,
    )
    schedules = dedupe(raw)
    elapsed = time.perf_counter() - t0

    if stats.capped:
        diagnostics.append(
            f"Stopped after {cap} schedules; more combinations may exist."
        )
    if not schedules:
        diagnostics.append("No conflict-free schedule satisfies every requirement.")

    log.debug("solve: %d schedule(s) in %.3fs", len(schedules), elapsed)
    return GenerateResult(
        status      = "FOUND" if schedules else "NONE",
        schedules   = schedules,
        diagnostics = diagnostics,
        stats       = {
            "num_requirements": len(plan.requirements),
            "explored":         stats.explored,
            "capped":           stats.capped,
            "wall_time_s":      round(elapsed, 3),
        },
    )
