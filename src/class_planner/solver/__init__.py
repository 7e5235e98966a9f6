from .backtrack import generate
from .conflicts import find_conflict
from .dedupe import dedupe, schedule_key
from .resolver import eligible_sections, sections_for
from .timeparse import parse_times

__all__ = [
    "dedupe",
    "eligible_sections",
    "find_conflict",
    "generate",
    "parse_times",
    "schedule_key",
    "sections_for",
]
