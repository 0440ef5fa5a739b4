"""
Conflict detection.

Given a candidate meeting and the committed meetings of the same term,
report every violated rule. Overlap rule (half-open intervals):
    start < other_end AND other_start < end

Rules are evaluated independently so the caller sees every problem at once.
Room conflicts are not checked here; room choices are filtered upstream.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from schedcheck.model import (
    DEFAULT_WINDOW,
    DeliveryMode,
    Meeting,
    RuleId,
    Violation,
    WindowConfig,
)

logger = logging.getLogger(__name__)


MESSAGES = {
    RuleId.WORKING_HOURS: "outside working hours",
    RuleId.ORDERING: "end not after start",
    RuleId.LUNCH_BREAK: "crosses lunch break",
    RuleId.DUPLICATE_SUBJECT: "subject already scheduled for this section",
    RuleId.SECTION_TIME: "section time conflict",
    RuleId.PROFESSOR_TIME: "professor time conflict",
}


def overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # Touching endpoints (a_end == b_start) do not overlap.
    return a_start < b_end and b_start < a_end


def _within(t: Optional[int], lo: int, hi: int) -> bool:
    return t is not None and lo <= t <= hi


def _same_term(candidate: Meeting, other: Meeting) -> bool:
    if candidate.term is None or other.term is None:
        return True
    return candidate.term == other.term


def _shares_day(a: Meeting, b: Meeting) -> bool:
    return not set(a.days).isdisjoint(b.days)


def _time_clash(candidate: Meeting, other: Meeting) -> bool:
    if other.start is None or other.end is None:
        return False
    return _shares_day(candidate, other) and overlaps(candidate.start, candidate.end, other.start, other.end)


def conflicting_meetings(candidate: Meeting, committed: Iterable[Meeting], rule: RuleId) -> List[Meeting]:
    """
    Return the committed meetings responsible for a duplicate-subject,
    section-time or professor-time violation. Other rules have no offenders.
    """
    pool = [m for m in committed if _same_term(candidate, m)]

    if rule is RuleId.DUPLICATE_SUBJECT:
        if not (candidate.section_id and candidate.subject_id):
            return []
        return [m for m in pool if m.section_id == candidate.section_id and m.subject_id == candidate.subject_id]

    if rule not in (RuleId.SECTION_TIME, RuleId.PROFESSOR_TIME):
        return []
    if not candidate.has_valid_times or not candidate.days:
        return []

    if rule is RuleId.SECTION_TIME:
        if not candidate.section_id:
            return []
        return [m for m in pool if m.section_id == candidate.section_id and _time_clash(candidate, m)]

    if not candidate.professor_id:
        return []
    return [m for m in pool if m.professor_id == candidate.professor_id and _time_clash(candidate, m)]


def check_conflicts(
    candidate: Meeting,
    committed: Iterable[Meeting],
    config: WindowConfig = DEFAULT_WINDOW,
) -> List[Violation]:
    """
    Evaluate all rules and return the violations in rule order (empty = legal).

    Each rule is reported at most once, however many committed meetings
    or shared days offend. The caller must remove the candidate's own
    record from committed when re-validating an edit (see exclude_meeting).
    """
    committed = list(committed)
    violations: List[Violation] = []

    def flag(rule: RuleId) -> None:
        violations.append(Violation(rule=rule, message=MESSAGES[rule]))

    # 1. working window (inclusive on both ends)
    if not (
        _within(candidate.start, config.work_start, config.work_end)
        and _within(candidate.end, config.work_start, config.work_end)
    ):
        flag(RuleId.WORKING_HOURS)

    # 2. ordering
    times_ok = candidate.has_valid_times
    if not times_ok:
        flag(RuleId.ORDERING)

    # 3. lunch break, onsite only
    if times_ok and candidate.delivery_mode == DeliveryMode.ONSITE:
        if overlaps(candidate.start, candidate.end, config.lunch_start, config.lunch_end):
            flag(RuleId.LUNCH_BREAK)

    # 4-6. committed set
    for rule in (RuleId.DUPLICATE_SUBJECT, RuleId.SECTION_TIME, RuleId.PROFESSOR_TIME):
        if conflicting_meetings(candidate, committed, rule):
            flag(rule)

    if violations:
        logger.debug("Candidate %r violates %s", candidate, [v.rule.value for v in violations])
    return violations


def exclude_meeting(committed: Iterable[Meeting], meeting_id: Optional[str]) -> List[Meeting]:
    """
    Drop the record with the given id, so an edited meeting is not compared with itself.
    """
    key = "" if meeting_id is None else str(meeting_id).strip()
    if not key:
        return list(committed)
    return [m for m in committed if m.meeting_id != key]
