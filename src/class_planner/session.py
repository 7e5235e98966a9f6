"""
Plan editing operations.

These are the user actions of the planner (pick a course, build a group,
add a custom class, pin a section, accept a generated schedule) expressed
as functions over an explicit Plan.  Nothing here keeps module-level state:
callers own the Plan and the catalog and pass them in.

Unknown requirement ids raise KeyError.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Dict, Iterable, List, Mapping, Tuple

from .models import (CourseSection, Plan, Requirement, Schedule, SectionRef)

log = logging.getLogger(__name__)

# Defaults of the "custom class" form.
CUSTOM_PRIORITY = 50
CUSTOM_SLOTS    = 99


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:10]}"


def _get(plan: Plan, rid: str) -> Requirement:
    req = plan.get_requirement(rid)
    if req is None:
        raise KeyError(f"Unknown requirement '{rid}'")
    return req


def add_course(plan: Plan, code: str, name: str = "") -> Requirement:
    existing = plan.get_requirement(code)
    if existing is not None:
        return existing
    req = Requirement(id=code, kind="course", name=name or code)
    plan.requirements.append(req)
    return req


def add_group(plan: Plan, name: str, codes: Iterable[str]) -> Requirement:
    """Any section of any member course satisfies a group."""
    members = list(dict.fromkeys(codes))
    if not name or not members:
        raise ValueError("A group needs a name and at least one course")
    req = Requirement(id=_new_id("group"), kind="group", name=name, courses=members)
    plan.requirements.append(req)
    return req


def add_custom_class(plan: Plan, section: CourseSection) -> Requirement:
    if not (section.subject_code and section.section and section.title):
        raise ValueError("A custom class needs a subject code, section and title")
    req = Requirement(
        id       = _new_id("custom"),
        kind     = "custom",
        name     = section.subject_code,
        priority = section.priority,
    )
    custom = replace(
        section,
        is_custom      = True,
        requirement_id = req.id,
        is_locked      = False,
    )
    plan.requirements.append(req)
    plan.custom_sections.append(custom)
    return req


def new_custom_section(subject_code: str, section: str, title: str, **details) -> CourseSection:
    """A CourseSection pre-filled with the custom-class form defaults."""
    fields = dict(time="TBA", room="TBA", instructor="TBA", slots=CUSTOM_SLOTS,
                  remarks="Custom class.", priority=CUSTOM_PRIORITY)
    fields.update(details)
    return CourseSection(subject_code=subject_code, section=section, title=title,
                         is_custom=True, **fields)


def remove_requirement(plan: Plan, rid: str) -> None:
    """Remove a requirement together with its selection and custom sections."""
    req = _get(plan, rid)
    plan.requirements.remove(req)
    plan.selections.pop(rid, None)
    plan.custom_sections = [s for s in plan.custom_sections if s.requirement_id != rid]


def set_requirement_priority(plan: Plan, rid: str, priority: int) -> None:
    _get(plan, rid).priority = int(priority)


def set_requirement_excluded(plan: Plan, rid: str, excluded: bool) -> None:
    _get(plan, rid).excluded = bool(excluded)


def select_section(plan: Plan, rid: str, section: CourseSection) -> None:
    """Manual pick: the section is locked and the scheduler keeps it."""
    _get(plan, rid)
    plan.selections[rid] = SectionRef(section.subject_code, section.section, locked=True)


def unlock_selection(plan: Plan, rid: str) -> None:
    _get(plan, rid)
    ref = plan.selections.get(rid)
    if ref is not None:
        ref.locked = False


def clear_selection(plan: Plan, rid: str) -> None:
    _get(plan, rid)
    plan.selections.pop(rid, None)


def accept_schedule(plan: Plan, schedule: Mapping[str, CourseSection]) -> None:
    """Replace the plan's selections with a generated schedule.

    Entries that were locked stay locked; the scheduler's picks are not.
    """
    plan.selections = {
        rid: SectionRef(s.subject_code, s.section, locked=s.is_locked)
        for rid, s in schedule.items()
        if plan.get_requirement(rid) is not None
    }


def section_index(plan: Plan, catalog: Iterable[CourseSection]) -> Dict[Tuple[str, str], CourseSection]:
    """(subject_code, section) -> section, over the catalog plus custom classes."""
    index = {s.key: s for s in catalog}
    for s in plan.custom_sections:
        index.setdefault(s.key, s)
    return index


def resolve_selections(
    plan: Plan,
    catalog: Iterable[CourseSection],
    locked_only: bool = False,
) -> Schedule:
    """The plan's current picks as a Schedule; dangling references are dropped."""
    index = section_index(plan, catalog)
    schedule: Schedule = {}
    for rid, ref in plan.selections.items():
        if locked_only and not ref.locked:
            continue
        section = index.get(ref.key)
        if section is None:
            log.warning("selection %s -> %s %s not in catalog, dropped", rid, *ref.key)
            continue
        schedule[rid] = replace(section, is_locked=ref.locked)
    return schedule


def locked_selections(plan: Plan, catalog: Iterable[CourseSection]) -> Schedule:
    return resolve_selections(plan, catalog, locked_only=True)


def all_sections(plan: Plan, catalog: Iterable[CourseSection]) -> List[CourseSection]:
    """Catalog plus the plan's custom sections, the pool the resolver searches."""
    return list(catalog) + list(plan.custom_sections)
