"""
JSON serialisation / deserialisation for catalogs and plans.

Uses only the Python standard-library json module.  The docs warn that
parsing large or deeply nested JSON from untrusted sources can be expensive,
so basic structural validation is applied before domain objects are built.

Reference: Python docs — json
https://docs.python.org/3/library/json.html

Catalog format (as served by the course-data endpoint):
    {"courses": [{"Subject Code": "CS101", "Course Title": "...",
                  "Section": "A", "Time": "MWF 09:00-10:00", "Room": "...",
                  "Instructor": "...", "Free Slots": 12, "Remarks": ""}]}
A bare JSON array of the same records is accepted too.

Plan format: the asdict() shape of models.Plan.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List

from class_planner.models import (DEFAULT_PRIORITY, CourseSection, Plan,
    Requirement, SchedulerParams, SectionOverride, SectionRef)

log = logging.getLogger(__name__)


class ConfigError(ValueError):
    """Raised when the plan JSON is structurally invalid."""


class CatalogError(ConfigError):
    """Raised when the course catalog JSON is structurally invalid."""


def _require(obj: Dict[str, Any], key: str, ctx: str, exc: type = ConfigError) -> Any:
    if key not in obj:
        raise exc(f"Missing required key '{key}' in {ctx}")
    return obj[key]


def _as_list(obj: Any, ctx: str, exc: type = ConfigError) -> List[Any]:
    if not isinstance(obj, list):
        raise exc(f"Expected a JSON array in {ctx}, got {type(obj).__name__}")
    return obj


def _as_dict(obj: Any, ctx: str, exc: type = ConfigError) -> Dict[str, Any]:
    if not isinstance(obj, dict):
        raise exc(
            f"Expected a JSON object in {ctx}, got {type(obj).__name__}"
        )
    return obj


def _as_int(value: Any, ctx: str, exc: type = ConfigError) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise exc(f"Expected an integer in {ctx}, got {value!r}") from None


# ── catalog ──────────────────────────────────────────────────────────────────

def parse_catalog(raw: Any) -> List[CourseSection]:
    """Build CourseSections from decoded catalog JSON."""
    if isinstance(raw, dict):
        records = _as_list(_require(raw, "courses", "root", CatalogError),
                           "courses", CatalogError)
    else:
        records = _as_list(raw, "root", CatalogError)

    catalog: List[CourseSection] = []
    seen: set = set()
    for i, rec in enumerate(records):
        ctx = f"courses[{i}]"
        rec = _as_dict(rec, ctx, CatalogError)
        # "Free Slots" is the upstream key; older dumps used "Slots"
        slots_raw = rec.get("Free Slots", rec.get("Slots"))
        slots = 0 if slots_raw is None else _as_int(slots_raw, ctx, CatalogError)
        section = CourseSection(
            subject_code = str(_require(rec, "Subject Code", ctx, CatalogError)).strip(),
            section      = str(_require(rec, "Section",      ctx, CatalogError)).strip(),
            title        = str(rec.get("Course Title") or ""),
            time         = str(rec.get("Time") or ""),
            room         = str(rec.get("Room") or ""),
            instructor   = str(rec.get("Instructor") or ""),
            slots        = max(slots, 0),
            remarks      = str(rec.get("Remarks") or ""),
            priority     = DEFAULT_PRIORITY,
            excluded     = False,
        )
        if section.key in seen:
            raise CatalogError(
                f"Duplicate section {section.subject_code} {section.section} in {ctx}"
            )
        seen.add(section.key)
        catalog.append(section)

    log.debug("parsed %d catalog section(s)", len(catalog))
    return catalog


def load_catalog(path: str | Path) -> List[CourseSection]:
    """Load a course catalog from a JSON file."""
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog is not valid JSON: {e}") from e
    return parse_catalog(raw)


def unique_courses(catalog: Iterable[CourseSection]) -> Dict[str, str]:
    """Course code -> title, in first-seen order."""
    courses: Dict[str, str] = {}
    for s in catalog:
        courses.setdefault(s.subject_code, s.title)
    return courses


# ── plan ─────────────────────────────────────────────────────────────────────

def _custom_section(raw: Dict[str, Any], ctx: str) -> CourseSection:
    return CourseSection(
        subject_code   = str(_require(raw, "subject_code", ctx)),
        section        = str(_require(raw, "section",      ctx)),
        title          = str(raw.get("title", "")),
        time           = str(raw.get("time", "")),
        room           = str(raw.get("room", "")),
        instructor     = str(raw.get("instructor", "")),
        slots          = _as_int(raw.get("slots", 0), ctx),
        remarks        = str(raw.get("remarks", "")),
        priority       = _as_int(raw.get("priority", DEFAULT_PRIORITY), ctx),
        excluded       = bool(raw.get("excluded", False)),
        is_custom      = True,
        requirement_id = str(_require(raw, "requirement_id", ctx)),
    )


def parse_plan(raw: Any) -> Plan:
    raw  = _as_dict(raw, "root")
    # meta: null is tolerated
    meta = _as_dict(raw.get("meta") or {}, "meta")

    requirements_raw = _as_list(_require(raw, "requirements", "root"), "requirements")
    customs_raw      = _as_list(raw.get("custom_sections") or [], "custom_sections")
    selections_raw   = _as_dict(raw.get("selections") or {}, "selections")
    overrides_raw    = _as_list(raw.get("overrides") or [], "overrides")
    scheduler_raw    = _as_dict(raw.get("scheduler") or {}, "scheduler")

    requirements = []
    for i, r in enumerate(requirements_raw):
        ctx = f"requirements[{i}]"
        r = _as_dict(r, ctx)
        rid = str(_require(r, "id", ctx))
        requirements.append(Requirement(
            id       = rid,
            kind     = str(r.get("kind", "course")),
            name     = str(r.get("name") or rid),
            courses  = [str(c) for c in _as_list(r.get("courses") or [], f"{ctx}.courses")],
            priority = _as_int(r.get("priority", DEFAULT_PRIORITY), ctx),
            excluded = bool(r.get("excluded", False)),
        ))

    custom_sections = [
        _custom_section(_as_dict(c, f"custom_sections[{i}]"), f"custom_sections[{i}]")
        for i, c in enumerate(customs_raw)
    ]

    selections = {}
    for rid, ref in selections_raw.items():
        ctx = f"selections[{rid!r}]"
        ref = _as_dict(ref, ctx)
        selections[str(rid)] = SectionRef(
            subject_code = str(_require(ref, "subject_code", ctx)),
            section      = str(_require(ref, "section",      ctx)),
            locked       = bool(ref.get("locked", True)),
        )

    overrides = []
    for i, o in enumerate(overrides_raw):
        ctx = f"overrides[{i}]"
        o = _as_dict(o, ctx)
        priority = o.get("priority")
        excluded = o.get("excluded")
        overrides.append(SectionOverride(
            subject_code = str(_require(o, "subject_code", ctx)),
            section      = str(_require(o, "section",      ctx)),
            priority     = None if priority is None else _as_int(priority, ctx),
            excluded     = None if excluded is None else bool(excluded),
        ))

    plan = Plan(
        meta            = meta,
        requirements    = requirements,
        custom_sections = custom_sections,
        selections      = selections,
        overrides       = overrides,
        scheduler       = SchedulerParams(
            max_results = _as_int(scheduler_raw.get("max_results", 100), "scheduler"),
        ),
    )
    try:
        plan.validate()
    except ValueError as e:
        raise ConfigError(str(e)) from e
    _check_unique_ids(plan.requirements, "requirements")
    return plan


def _check_unique_ids(items: list, ctx: str) -> None:
    seen: set = set()
    dupes: set = set()
    for item in items:
        item_id = getattr(item, "id", None)
        if not item_id:
            raise ConfigError(f"Empty or missing 'id' in {ctx}")
        if item_id in seen:
            dupes.add(item_id)
        seen.add(item_id)
    if dupes:
        raise ConfigError(f"Duplicate ids in {ctx}: {sorted(dupes)}")


def load_plan(path: str | Path) -> Plan:
    """Load and validate a Plan from a JSON file."""
    with Path(path).open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Plan is not valid JSON: {e}") from e
    return parse_plan(raw)


def save_plan(plan: Plan, path: str | Path) -> None:
    """Serialise a Plan to JSON, creating parent directories if needed."""
    plan.validate()
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        # ensure_ascii=False preserves accented instructor names.
        # sort_keys=True keeps diffs readable in version control.
        json.dump(plan.to_dict(), f, ensure_ascii=False, indent=2, sort_keys=True)


def apply_overrides(catalog: Iterable[CourseSection], plan: Plan) -> List[SectionOverride]:
    """Copy the plan's priority/exclusion edits onto matching catalog sections.

    Returns the overrides that matched no section.
    """
    by_key = {s.key: s for s in catalog}
    unmatched: List[SectionOverride] = []
    for o in plan.overrides:
        target = by_key.get(o.key)
        if target is None:
            log.warning("override for unknown section %s %s ignored", *o.key)
            unmatched.append(o)
            continue
        if o.priority is not None:
            target.priority = o.priority
        if o.excluded is not None:
            target.excluded = o.excluded
    return unmatched
