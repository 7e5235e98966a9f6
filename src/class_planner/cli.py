"""
Command-line interface for the class schedule planner.

Usage examples:
    python -m class_planner.cli generate --catalog courses.json --plan plan.json
    python -m class_planner.cli generate --catalog courses.json --plan plan.json --out result.json
    python -m class_planner.cli export --catalog courses.json --plan plan.json \\
        --start 2026-01-12 --end 2026-05-08 --schedule-index 1 --out term.ics
    python -m class_planner.cli courses --catalog courses.json

Exit codes:
    0  schedules found / export written
    1  bad arguments, unreadable input, or precheck found blocking errors
    2  no schedule found, or nothing to export
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional, Tuple

from class_planner.export_ics import ExportError, write_ics
from class_planner.io_json import ConfigError, load_catalog, load_plan, unique_courses
from class_planner.models import CourseSection, Plan, Schedule
from class_planner.session import resolve_selections
from class_planner.solver.api import solve
from class_planner.solver.timeparse import parse_times

DAY_NAMES = {1: "Mon", 2: "Tue", 3: "Wed", 4: "Thu", 5: "Fri", 6: "Sat"}


def _date(text: str) -> date:
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {text!r}") from None


def _positive(text: str) -> int:
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="class-planner",
        description="Weekly class schedule planner — command-line mode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  class-planner generate --catalog courses.json --plan plan.json\n"
            "  class-planner export --catalog courses.json --plan plan.json "
            "--start 2026-01-12 --end 2026-05-08 --out term.ics\n"
        ),
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    gen = sub.add_parser("generate", help="generate conflict-free schedules")
    gen.add_argument("--catalog", required=True, metavar="FILE",
                     help="path to the course catalog JSON")
    gen.add_argument("--plan", required=True, metavar="FILE",
                     help="path to the plan JSON (requirements, selections)")
    gen.add_argument("--max-results", type=_positive, default=None, metavar="N",
                     help="cap on schedules generated (default: plan setting, 100)")
    gen.add_argument("--show", type=int, default=3, metavar="N",
                     help="print the first N schedules (default: 3)")
    gen.add_argument("--out", default=None, metavar="FILE",
                     help="write result JSON to this path (optional)")

    exp = sub.add_parser("export", help="export a schedule as an .ics calendar")
    exp.add_argument("--catalog", required=True, metavar="FILE")
    exp.add_argument("--plan", required=True, metavar="FILE")
    exp.add_argument("--start", required=True, type=_date, metavar="YYYY-MM-DD",
                     help="first day of term")
    exp.add_argument("--end", required=True, type=_date, metavar="YYYY-MM-DD",
                     help="last day of term")
    exp.add_argument("--schedule-index", type=_positive, default=None, metavar="N",
                     help="export the N-th generated schedule instead of the "
                          "plan's current selections")
    exp.add_argument("--out", required=True, metavar="FILE",
                     help="path of the .ics file to write")

    crs = sub.add_parser("courses", help="list the courses in a catalog")
    crs.add_argument("--catalog", required=True, metavar="FILE")
    return parser


def _load(catalog_path: str, plan_path: Optional[str]) -> Tuple[List[CourseSection], Optional[Plan]]:
    try:
        catalog = load_catalog(catalog_path)
        plan = load_plan(plan_path) if plan_path else None
    except FileNotFoundError as e:
        print(f"[ERROR] File not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except (ConfigError, ValueError) as e:
        print(f"[ERROR] Could not load input: {e}", file=sys.stderr)
        sys.exit(1)
    return catalog, plan


def format_schedule(schedule: Schedule) -> List[str]:
    lines = []
    for rid in sorted(schedule):
        s = schedule[rid]
        meets = ", ".join(
            f"{DAY_NAMES[t.day]} {t.start // 60:02d}:{t.start % 60:02d}-"
            f"{t.end // 60:02d}:{t.end % 60:02d}"
            for t in parse_times(s.time)
        ) or "TBA"
        lock = " [locked]" if s.is_locked else ""
        lines.append(f"  {rid:<16} {s.label:<20} {meets}  {s.room}{lock}")
    return lines


def cmd_generate(args: argparse.Namespace) -> int:
    catalog, plan = _load(args.catalog, args.plan)

    result = solve(plan, catalog, max_results=args.max_results)

    if result.errors:
        print(
            f"\n[ERROR] {len(result.errors)} precheck error(s) found — "
            "schedule cannot be produced until these are fixed:\n",
            file=sys.stderr,
        )
        for i, err in enumerate(result.errors, 1):
            print(f"  {i}. {err}", file=sys.stderr)
        return 1

    for d in result.diagnostics:
        print(f"[DIAG] {d}")
    print(f"\nStatus    : {result.status}")
    for k, v in result.stats.items():
        print(f"  {k}: {v}")

    if result.found:
        print(f"\n{len(result.schedules)} schedule(s) found.")
        for i, sched in enumerate(result.schedules[:max(args.show, 0)], 1):
            print(f"\nSchedule {i}:")
            for line in format_schedule(sched):
                print(line)
    else:
        print("\nNo schedule found.")

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        with out.open("w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        print(f"\nResult written to: {args.out}")

    return 0 if result.found else 2


def cmd_export(args: argparse.Namespace) -> int:
    catalog, plan = _load(args.catalog, args.plan)

    if args.schedule_index is None:
        schedule = resolve_selections(plan, catalog)
    else:
        result = solve(plan, catalog)
        if result.errors:
            for err in result.errors:
                print(f"[ERROR] {err}", file=sys.stderr)
            return 1
        if args.schedule_index > len(result.schedules):
            print(
                f"[ERROR] Schedule {args.schedule_index} requested but only "
                f"{len(result.schedules)} were generated.",
                file=sys.stderr,
            )
            return 2
        schedule = result.schedules[args.schedule_index - 1]

    try:
        n_events = write_ics(schedule, args.start, args.end, args.out)
    except ExportError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    print(f"{n_events} event(s) written to: {args.out}")
    return 0


def cmd_courses(args: argparse.Namespace) -> int:
    catalog, _ = _load(args.catalog, None)
    courses = unique_courses(catalog)
    for code in sorted(courses):
        print(f"  {code:<12} {courses[code]}")
    print(f"\n{len(courses)} course(s), {len(catalog)} section(s).")
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    handlers = {
        "generate": cmd_generate,
        "export":   cmd_export,
        "courses":  cmd_courses,
    }
    sys.exit(handlers[args.command](args))


if __name__ == "__main__":
    main()
