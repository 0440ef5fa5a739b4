"""
Normalization (raw schedule rows -> canonical Meetings).

- Accepts rows in whatever shape the persistence layer returns
  (several possible field names per attribute)
- Converts 'HH:MM' / 'HH:MM:SS' to minutes since midnight
- Converts day lists or comma strings to canonical weekday tokens

Important rules (DO NOT CHANGE):
- A committed row that breaks an invariant is dropped, never repaired
- A candidate is never dropped: bad times stay None and fail the ordering rule
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from schedcheck.model import (
    MINUTES_PER_DAY,
    WEEKDAYS,
    DeliveryMode,
    Meeting,
    Origin,
    Term,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Field aliases
# ---------------------------------------------------------------------------

ID_KEYS = ("id", "sched_id", "schedule_id")
SUBJECT_KEYS = ("subj_id", "subject_id", "subjectId")
PROFESSOR_KEYS = ("prof_id", "professor_id", "professorId")
SECTION_KEYS = ("section_id", "section", "sectionId")
ROOM_KEYS = ("room_id", "roomId")
START_KEYS = ("start_time", "start", "startTime")
END_KEYS = ("end_time", "end", "endTime")
DAYS_KEYS = ("days", "schedule_days")
MODE_KEYS = ("schedule_type", "delivery_mode", "deliveryMode", "scheduleType")
SCHOOL_YEAR_KEYS = ("school_year", "schoolYear")
SEMESTER_KEYS = ("semester",)
ORIGIN_KEYS = ("origin", "source")

_DAY_ABBREVIATIONS = {day[:3]: day for day in WEEKDAYS}


def _first(row: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """
    Return the value of the first alias that is present and not None.
    """
    for key in keys:
        value = row.get(key)
        if value is not None:
            return value
    return None


def _as_key(value: Any) -> str:
    # 1 and "1" must compare equal
    return "" if value is None else str(value).strip()


# ---------------------------------------------------------------------------
# Time & day parsing
# ---------------------------------------------------------------------------


def to_minutes(value: Any) -> Optional[int]:
    """
    Convert 'HH:MM' or 'HH:MM:SS' to minutes since midnight.

    Integers are taken as minutes already. Returns None for anything that
    cannot be parsed (the caller decides whether that drops the record).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= MINUTES_PER_DAY else None
    if not isinstance(value, str):
        return None

    parts = value.strip().split(":")
    if len(parts) < 2:
        return None
    try:
        h = int(parts[0])
        m = int(parts[1])
    except ValueError:
        return None
    if h < 0 or not (0 <= m <= 59):
        return None

    minutes = h * 60 + m
    if minutes > MINUTES_PER_DAY:
        return None
    return minutes


def parse_days(value: Any) -> Tuple[str, ...]:
    """
    Accepts ["Monday", "wed"] or "monday, Wednesday".
    Unknown tokens are discarded; result is Monday-first without duplicates.
    """
    if isinstance(value, str):
        tokens: Iterable[Any] = value.split(",")
    elif isinstance(value, (list, tuple, set, frozenset)):
        tokens = value
    else:
        return ()

    found = set()
    for token in tokens:
        t = str(token).strip().lower()
        if not t:
            continue
        t = _DAY_ABBREVIATIONS.get(t, t)
        if t in WEEKDAYS:
            found.add(t)

    return tuple(day for day in WEEKDAYS if day in found)


def parse_delivery_mode(value: Any) -> DeliveryMode:
    if isinstance(value, DeliveryMode):
        return value
    if str(value or "").strip().lower() == "online":
        return DeliveryMode.ONLINE
    return DeliveryMode.ONSITE


def _parse_origin(value: Any) -> Origin:
    if isinstance(value, Origin):
        return value
    if str(value or "").strip().lower() == "auto":
        return Origin.AUTO
    return Origin.MANUAL


def _parse_term(row: Mapping[str, Any]) -> Optional[Term]:
    term = row.get("term")
    if isinstance(term, Term):
        return term

    school_year = _as_key(_first(row, SCHOOL_YEAR_KEYS))
    semester = _as_key(_first(row, SEMESTER_KEYS))
    if not school_year or not semester:
        return None
    return Term(school_year=school_year, semester=semester)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def normalize_candidate(fields: Mapping[str, Any]) -> Meeting:
    """
    Build a candidate Meeting from raw form-like fields. Never fails.
    """
    room = _as_key(_first(fields, ROOM_KEYS))
    meeting_id = _as_key(_first(fields, ID_KEYS))

    return Meeting(
        subject_id=_as_key(_first(fields, SUBJECT_KEYS)),
        professor_id=_as_key(_first(fields, PROFESSOR_KEYS)),
        section_id=_as_key(_first(fields, SECTION_KEYS)),
        days=parse_days(_first(fields, DAYS_KEYS)),
        start=to_minutes(_first(fields, START_KEYS)),
        end=to_minutes(_first(fields, END_KEYS)),
        delivery_mode=parse_delivery_mode(_first(fields, MODE_KEYS)),
        room_id=room or None,
        term=_parse_term(fields),
        origin=_parse_origin(_first(fields, ORIGIN_KEYS)),
        meeting_id=meeting_id or None,
    )


def normalize_meeting(row: Mapping[str, Any]) -> Optional[Meeting]:
    """
    Normalize one committed row. Returns None if the row breaks an invariant:
    - missing section, professor or subject identifier
    - start/end unparsable or not 0 <= start < end <= 1440
    - no known weekday
    """
    if not isinstance(row, Mapping):
        return None

    meeting = normalize_candidate(row)

    if not (meeting.section_id and meeting.professor_id and meeting.subject_id):
        return None
    if not meeting.has_valid_times:
        return None
    if not meeting.days:
        return None

    return meeting


def normalize_meetings(rows: Iterable[Any], term: Optional[Term] = None) -> List[Meeting]:
    """
    Normalize a list of committed rows, dropping malformed ones.

    If term is given, rows that carry a different term are dropped too.
    Rows without term information are assumed to belong to the fetched term.
    """
    out: List[Meeting] = []
    dropped = 0

    for row in rows or []:
        meeting = normalize_meeting(row)
        if meeting is None:
            dropped += 1
            logger.debug("Dropping malformed schedule row: %r", row)
            continue
        if term is not None and meeting.term is not None and meeting.term != term:
            continue
        out.append(meeting)

    if dropped:
        logger.debug("Dropped %d malformed schedule row(s)", dropped)
    return out
