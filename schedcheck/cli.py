"""
CLI (Command Line Interface).

This module provides quick terminal commands around the conflict engine, e.g.:

    schedcheck fetch --school-year 2024-2025 --semester "First Semester"
    schedcheck check --section S1 --professor P1 --subject SUBJ1 --days monday,wednesday --start 08:00 --end 09:00
    schedcheck suggest --section S1 --professor P1 --days monday --duration 90

Note:
- fetch stores a snapshot of the committed schedule; check/suggest only read that snapshot
- output is a rich table by default, plain text with --plain
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import requests
from rich.console import Console

from schedcheck.client import DEFAULT_TIMEOUT, ScheduleFetchError, default_base_url, fetch_schedule_rows
from schedcheck.conflicts import check_conflicts, exclude_meeting
from schedcheck.display import from_minutes, print_suggestions, print_violations, slot_label
from schedcheck.model import DEFAULT_TERM, Meeting, SuggestParams, Term, WindowConfig
from schedcheck.normalize import normalize_candidate, normalize_meetings, parse_days, parse_delivery_mode, to_minutes
from schedcheck.storage import load_snapshot, save_snapshot
from schedcheck.suggest import DEFAULT_DURATION, STEP_MINUTES, SUGGESTION_COUNT, derive_duration, suggest_slots

logger = logging.getLogger(__name__)


def _window_from_args(args: argparse.Namespace) -> WindowConfig:
    return WindowConfig.from_strings(
        work_start=args.work_start,
        work_end=args.work_end,
        lunch_start=args.lunch_start,
        lunch_end=args.lunch_end,
    )


def _load_committed(args: argparse.Namespace) -> tuple[Term | None, list[Meeting]]:
    """
    Load the snapshot and normalize it. A missing snapshot means an empty schedule.
    """
    term, rows = load_snapshot(args.snapshot)
    if not rows:
        logger.warning("Snapshot is empty or missing; run 'schedcheck fetch' first.")
    return term, normalize_meetings(rows, term=term)


def _cmd_fetch(args: argparse.Namespace) -> int:
    """
    Download the committed schedule of one term and store it as snapshot.
    """
    school_year = (args.school_year or "").strip()
    semester = (args.semester or "").strip()
    if not school_year or not semester:
        print("Please provide --school-year and --semester.")
        return 1

    term = Term(school_year=school_year, semester=semester)
    try:
        rows = fetch_schedule_rows(term, base_url=args.base_url, timeout=args.timeout)
    except (requests.RequestException, ScheduleFetchError) as exc:
        print(f"Fetching schedules failed: {exc}")
        return 2

    path = save_snapshot(rows, term, args.snapshot)
    usable = len(normalize_meetings(rows, term=term))
    print(f"Fetched {len(rows)} schedules ({usable} usable) for {school_year} / {semester}")
    print(f"Snapshot written to: {path}")
    return 0


def _candidate_fields(args: argparse.Namespace, term: Term | None) -> dict[str, Any]:
    fields: dict[str, Any] = {
        "section_id": args.section,
        "prof_id": args.professor,
        "subj_id": args.subject,
        "room_id": args.room,
        "days": args.days,
        "start_time": args.start,
        "end_time": args.end,
        "schedule_type": args.mode,
    }
    if term is not None:
        fields["term"] = term
    return fields


def _cmd_check(args: argparse.Namespace, console: Console) -> int:
    """
    Validate one candidate meeting; print violations and, if any, alternatives.
    """
    if not parse_days(args.days or ""):
        print("Please provide at least one valid day.")
        return 1

    window = _window_from_args(args)
    term, committed = _load_committed(args)
    committed = exclude_meeting(committed, args.exclude_id)

    candidate = normalize_candidate(_candidate_fields(args, term))
    violations = check_conflicts(candidate, committed, window)

    if args.plain:
        if not violations:
            print("No conflicts found.")
        for v in violations:
            print(f"- {v.rule.value}: {v.message}")
    else:
        print_violations(violations, console)

    if not violations:
        return 0

    params = SuggestParams(
        section_id=candidate.section_id,
        professor_id=candidate.professor_id,
        days=candidate.days,
        duration_minutes=derive_duration(candidate.start, candidate.end),
        delivery_mode=candidate.delivery_mode,
        term=term,
    )
    _show_slots(args, console, suggest_slots(params, committed, window, max_suggestions=args.limit))
    return 1


def _show_slots(args: argparse.Namespace, console: Console, slots: list) -> None:
    if args.plain:
        if not slots:
            print("No available time slots found.")
        for s in slots:
            print(f"- {slot_label(s)} ({from_minutes(s.start)}-{from_minutes(s.end)})")
        return
    print_suggestions(slots, console)


def _cmd_suggest(args: argparse.Namespace, console: Console) -> int:
    """
    Print up to --limit legal windows for a section/professor pair.
    """
    section = (args.section or "").strip()
    professor = (args.professor or "").strip()
    days = parse_days(args.days or "")
    if not section or not professor or not days:
        print("Please provide --section, --professor and at least one valid day.")
        return 1

    window = _window_from_args(args)
    term, committed = _load_committed(args)
    committed = exclude_meeting(committed, args.exclude_id)

    if args.duration is not None:
        duration = args.duration
    else:
        duration = derive_duration(to_minutes(args.start), to_minutes(args.end))

    params = SuggestParams(
        section_id=section,
        professor_id=professor,
        days=days,
        duration_minutes=duration,
        delivery_mode=parse_delivery_mode(args.mode),
        term=term,
    )
    slots = suggest_slots(params, committed, window, max_suggestions=args.limit, step_minutes=args.step)
    _show_slots(args, console, slots)
    return 0


def _add_snapshot_option(p: argparse.ArgumentParser) -> None:
    p.add_argument("--snapshot", type=Path, default=None, help="Snapshot file (default: package data/snapshot.json)")


def _add_candidate_options(p: argparse.ArgumentParser, require_subject: bool) -> None:
    p.add_argument("--section", type=str, required=True, help="Section id")
    p.add_argument("--professor", type=str, required=True, help="Professor id")
    p.add_argument("--subject", type=str, required=require_subject, default=None, help="Subject id")
    p.add_argument("--room", type=str, default=None, help="Room id (informational)")
    p.add_argument("--days", type=str, required=True, help="Comma separated weekdays (e.g. monday,wednesday)")
    p.add_argument("--start", type=str, default=None, help="Start time HH:MM")
    p.add_argument("--end", type=str, default=None, help="End time HH:MM")
    p.add_argument("--mode", type=str, default="Onsite", choices=["Onsite", "Online"], help="Delivery mode")
    p.add_argument("--exclude-id", type=str, default=None, help="Id of the record being edited (ignored in checks)")
    p.add_argument("--limit", type=int, default=SUGGESTION_COUNT, help="Maximum number of suggestions")
    p.add_argument("--work-start", type=str, default="07:30")
    p.add_argument("--work-end", type=str, default="16:30")
    p.add_argument("--lunch-start", type=str, default="12:00")
    p.add_argument("--lunch-end", type=str, default="13:00")
    p.add_argument("--plain", action="store_true", help="Plain text output (no tables)")
    _add_snapshot_option(p)


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="schedcheck", description="Class schedule conflict checker")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p_fetch = sub.add_parser("fetch", help="Fetch committed schedules of a term into the snapshot")
    p_fetch.add_argument("--school-year", type=str, default=DEFAULT_TERM.school_year)
    p_fetch.add_argument("--semester", type=str, default=DEFAULT_TERM.semester)
    p_fetch.add_argument("--base-url", type=str, default=None, help=f"API base URL (default: {default_base_url()})")
    p_fetch.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT)
    _add_snapshot_option(p_fetch)

    p_check = sub.add_parser("check", help="Check a candidate meeting against the snapshot")
    _add_candidate_options(p_check, require_subject=True)

    p_suggest = sub.add_parser("suggest", help="Suggest free time slots")
    _add_candidate_options(p_suggest, require_subject=False)
    p_suggest.add_argument("--duration", type=int, default=None, help=f"Minutes (default: from --start/--end or {DEFAULT_DURATION})")
    p_suggest.add_argument("--step", type=int, default=STEP_MINUTES, help="Scan step in minutes")

    return parser


def main(argv: list[str] | None = None, console: Console | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    console = console or Console()

    if args.command == "fetch":
        raise SystemExit(_cmd_fetch(args))

    try:
        _window_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    if args.command == "check":
        raise SystemExit(_cmd_check(args, console))
    if args.command == "suggest":
        raise SystemExit(_cmd_suggest(args, console))

    raise SystemExit(2)
