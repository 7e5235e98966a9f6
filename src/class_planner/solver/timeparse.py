"""
Meeting-time parser — turns catalog strings such as

    "MWF 09:00-10:00"
    "TTH 1300-1430; SAT 0800-1100"
    "M | W 7:30-9:00"

into TimeInterval objects (day, start-minute, end-minute).

Day codes (canonical table, Monday=1 … Saturday=6, no Sunday):
    M=1  T=2  W=3  TH=4  F=5  SAT=6  S=6

The tokenizer matches greedily, longest code first (3 → 2 → 1 letters),
so "TTH" reads as T + TH and never as T + T + <unknown H>.  Characters that
start no known code (spaces, '-', '|', stray letters) are skipped.

Times carry no am/pm marker; hours are taken as written.  A clause whose
end is not after its start (e.g. 12-hour "TTH 11:30-1:00") is dropped like
any other malformed clause, so such a section never conflicts.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import List, Optional, Tuple

from ..models import TimeInterval

DAY_CODES = {
    "M":   1,
    "T":   2,
    "W":   3,
    "TH":  4,
    "F":   5,
    "S":   6,
    "SAT": 6,
}

_LONGEST_CODE = max(len(code) for code in DAY_CODES)

_TIME_RANGE = re.compile(r"(\d{1,2}):?(\d{2})\s*-\s*(\d{1,2}):?(\d{2})")


def is_tba(text: Optional[str]) -> bool:
    return not text or "tba" in str(text).lower()


def tokenize_days(prefix: str) -> List[int]:
    """Return day numbers named in *prefix*, in order, without repeats."""
    text = prefix.upper()
    days: List[int] = []
    i = 0
    while i < len(text):
        for width in range(_LONGEST_CODE, 0, -1):
            day = DAY_CODES.get(text[i:i + width])
            if day is not None:
                if day not in days:
                    days.append(day)
                i += width
                break
        else:
            i += 1
    return days


def parse_clause(clause: str) -> Optional[Tuple[List[int], int, int]]:
    """(days, start, end) for one ';'-separated clause, or None if unusable."""
    m = _TIME_RANGE.search(clause)
    if not m:
        return None
    start = int(m.group(1)) * 60 + int(m.group(2))
    end   = int(m.group(3)) * 60 + int(m.group(4))
    if end <= start:
        return None
    days = tokenize_days(clause[:m.start()])
    if not days:
        return None
    return days, start, end


@lru_cache(maxsize=4096)
def _parse_cached(text: str) -> Tuple[TimeInterval, ...]:
    intervals: List[TimeInterval] = []
    for clause in text.split(";"):
        parsed = parse_clause(clause.strip())
        if parsed is None:
            continue
        days, start, end = parsed
        intervals.extend(TimeInterval(day, start, end) for day in days)
    return tuple(intervals)


def parse_times(text: Optional[str]) -> List[TimeInterval]:
    """Parse a meeting-time string. TBA, empty or garbage -> []."""
    if is_tba(text):
        return []
    return list(_parse_cached(str(text)))
