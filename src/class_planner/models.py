"""
Data model layer for the class schedule planner.

Every domain object is a plain Python dataclass. The @dataclass decorator
generates __init__, __repr__ and __eq__ automatically from field declarations.

Reference: Python Software Foundation. "dataclasses — Data Classes."
https://docs.python.org/3/library/dataclasses.html

Design note — catalog vs. plan:
  CourseSection objects come from the catalog (or are user-authored custom
  classes) and are mutated in place when priority/exclusion changes.
  The Plan holds requirements and *references* to sections by
  (subject_code, section) rather than embedding catalog objects, so a plan
  file stays valid when the catalog is refreshed.

Day numbering: Monday=1 … Saturday=6. There is no Sunday.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Tuple

DEFAULT_PRIORITY = 100

REQUIREMENT_KINDS = ("course", "group", "custom")


@dataclass(frozen=True)
class TimeInterval:
    """One weekly meeting, e.g. Tuesday 13:00-14:30 -> (2, 780, 870)."""
    day:   int   # 1 = Monday … 6 = Saturday
    start: int   # minutes from midnight
    end:   int   # minutes from midnight

    def overlaps(self, other: "TimeInterval") -> bool:
        # Open-interval overlap: back-to-back meetings do not clash.
        return (
            self.day == other.day
            and self.start < other.end
            and self.end > other.start
        )


@dataclass
class CourseSection:
    subject_code: str
    section:      str
    title:        str  = ""
    time:         str  = ""
    room:         str  = ""
    instructor:   str  = ""
    slots:        int  = 0
    remarks:      str  = ""
    priority:     int  = DEFAULT_PRIORITY
    excluded:     bool = False
    is_custom:    bool = False
    # Custom sections only: id of the custom requirement that owns them.
    requirement_id: str = ""
    # Only meaningful once placed into a Schedule.
    is_locked:    bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.subject_code, self.section)

    @property
    def label(self) -> str:
        return f"{self.subject_code} ({self.section})"


# requirement id -> the section chosen to satisfy it
Schedule = Dict[str, CourseSection]


@dataclass
class Requirement:
    id:       str
    kind:     str       = "course"
    name:     str       = ""
    courses:  List[str] = field(default_factory=list)   # group members
    priority: int       = DEFAULT_PRIORITY
    excluded: bool      = False

    @property
    def display_name(self) -> str:
        return self.name or self.id


@dataclass
class SectionRef:
    """A plan's pointer to a catalog (or custom) section."""
    subject_code: str
    section:      str
    locked:       bool = True

    @property
    def key(self) -> Tuple[str, str]:
        return (self.subject_code, self.section)


@dataclass
class SectionOverride:
    """User edits to a catalog section that survive a catalog refresh."""
    subject_code: str
    section:      str
    priority:     Optional[int]  = None
    excluded:     Optional[bool] = None

    @property
    def key(self) -> Tuple[str, str]:
        return (self.subject_code, self.section)


@dataclass
class SchedulerParams:
    # Hard cap on generated schedules; 100 results means "at least 100".
    max_results: int = 100


@dataclass
class Plan:
    meta:            Dict[str, Any]          = field(default_factory=dict)
    requirements:    List[Requirement]       = field(default_factory=list)
    custom_sections: List[CourseSection]     = field(default_factory=list)
    selections:      Dict[str, SectionRef]   = field(default_factory=dict)
    overrides:       List[SectionOverride]   = field(default_factory=list)
    scheduler:       SchedulerParams         = field(default_factory=SchedulerParams)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        if self.scheduler.max_results < 1:
            raise ValueError("scheduler.max_results must be >= 1")
        for req in self.requirements:
            if req.kind not in REQUIREMENT_KINDS:
                raise ValueError(
                    f"Requirement '{req.id}' has unknown kind {req.kind!r}"
                )
            if req.kind == "group" and not req.courses:
                raise ValueError(f"Group '{req.id}' has no member courses")
        known = {r.id for r in self.requirements}
        dangling = sorted(rid for rid in self.selections if rid not in known)
        if dangling:
            raise ValueError(f"Selections reference unknown requirements: {dangling}")

    def get_requirement(self, rid: str) -> Optional[Requirement]:
        return next((r for r in self.requirements if r.id == rid), None)
