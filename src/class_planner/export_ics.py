"""
iCalendar (.ics) export of a chosen schedule.

Each weekly meeting of each section becomes one recurring VEVENT:
    DTSTART  first date on/after the term start that falls on that weekday
    RRULE    FREQ=WEEKLY;BYDAY=<day>;UNTIL=<term end, 23:59:59>
Times are floating (no TZID), which calendar apps show in local time.

Sections with TBA or unparseable times are skipped without failing the
export.

Reference: icalendar docs — https://icalendar.readthedocs.io/
           RFC 5545 §3.8.5.3 (RRULE)
"""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path
from typing import Mapping, Optional

from icalendar import Calendar, Event

from .models import CourseSection
from .solver.timeparse import parse_times

log = logging.getLogger(__name__)

PRODID = "-//class-planner//weekly schedule//EN"

# TimeInterval.day -> RFC 5545 weekday
BYDAY = {1: "MO", 2: "TU", 3: "WE", 4: "TH", 5: "FR", 6: "SA"}


class ExportError(ValueError):
    """Raised when a schedule has nothing that can be exported."""


def first_weekday_on_or_after(start: date, day: int) -> date:
    # date.isoweekday(): Monday=1 … Sunday=7, same numbering as TimeInterval
    return start + timedelta(days=(day - start.isoweekday()) % 7)


def _minutes(m: int) -> time:
    return time(m // 60, m % 60)


def build_calendar(
    schedule: Mapping[str, CourseSection],
    start_date: date,
    end_date: date,
    stamp: Optional[datetime] = None,
) -> Calendar:
    if start_date > end_date:
        raise ValueError(f"Start date {start_date} is after end date {end_date}")
    stamp = stamp or datetime.now(timezone.utc)
    until = datetime.combine(end_date, time(23, 59, 59))

    cal = Calendar()
    cal.add("prodid", PRODID)
    cal.add("version", "2.0")

    for rid, section in schedule.items():
        intervals = parse_times(section.time)
        if not intervals:
            log.debug("skipping %s (%s): no meeting times", section.label, rid)
            continue
        for iv in intervals:
            first = first_weekday_on_or_after(start_date, iv.day)
            if first > end_date:
                continue
            ev = Event()
            ev.add("uid", f"{section.subject_code}-{section.section}-"
                          f"{BYDAY[iv.day]}-{iv.start}@class-planner")
            ev.add("dtstamp", stamp)
            ev.add("summary", section.label)
            ev.add("description",
                   f"{section.title}\nInstructor: {section.instructor}")
            if section.room:
                ev.add("location", section.room)
            ev.add("dtstart", datetime.combine(first, _minutes(iv.start)))
            ev.add("dtend",   datetime.combine(first, _minutes(iv.end)))
            ev.add("rrule", {"FREQ": "WEEKLY", "BYDAY": BYDAY[iv.day], "UNTIL": until})
            cal.add_component(ev)
    return cal


def write_ics(
    schedule: Mapping[str, CourseSection],
    start_date: date,
    end_date: date,
    path: str | Path,
) -> int:
    """Write the schedule as an .ics file; return the number of events."""
    cal = build_calendar(schedule, start_date, end_date)
    n_events = len(cal.walk("VEVENT"))
    if n_events == 0:
        raise ExportError("There are no timed classes in this schedule to export.")
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(cal.to_ical())
    log.debug("wrote %d event(s) to %s", n_events, p)
    return n_events
