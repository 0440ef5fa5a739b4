"""
Central data model definitions used across the project.

This module defines the canonical structure of Meeting, Violation and Slot objects so that:
- the normalizer, checker and suggester share the same field names
- times are always minutes since midnight and days are lowercase weekday tokens
- configuration (working window, lunch break, term) is passed explicitly
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# Canonical Monday-first order. Sunday is never schedulable.
WEEKDAYS: Tuple[str, ...] = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)

MINUTES_PER_DAY = 24 * 60


class DeliveryMode(str, Enum):
    ONSITE = "Onsite"
    ONLINE = "Online"


class Origin(str, Enum):
    AUTO = "auto"
    MANUAL = "manual"


class RuleId(str, Enum):
    """
    Identifiers of the conflict rules, in evaluation order.
    """

    WORKING_HOURS = "working_hours"
    ORDERING = "ordering"
    LUNCH_BREAK = "lunch_break"
    DUPLICATE_SUBJECT = "duplicate_subject"
    SECTION_TIME = "section_time"
    PROFESSOR_TIME = "professor_time"


@dataclass(frozen=True)
class Term:
    """
    (school year, semester) scope. Meetings of different terms never conflict.
    """

    school_year: str
    semester: str

    def as_dict(self) -> dict[str, str]:
        return {"school_year": self.school_year, "semester": self.semester}


DEFAULT_TERM = Term(school_year="2024-2025", semester="First Semester")


def _hhmm(value: str) -> int:
    h, m = value.strip().split(":")[:2]
    if not (0 <= int(m) <= 59):
        raise ValueError(f"minute out of range in {value!r}")
    return int(h) * 60 + int(m)


@dataclass(frozen=True)
class WindowConfig:
    """
    Institutional working window and lunch break, in minutes since midnight.
    """

    work_start: int = 7 * 60 + 30
    work_end: int = 16 * 60 + 30
    lunch_start: int = 12 * 60
    lunch_end: int = 13 * 60

    def __post_init__(self) -> None:
        for name in ("work_start", "work_end", "lunch_start", "lunch_end"):
            value = getattr(self, name)
            if not (0 <= value <= MINUTES_PER_DAY):
                raise ValueError(f"{name} must be between 00:00 and 24:00, got {value}")
        if self.work_end <= self.work_start:
            raise ValueError("work_end must be after work_start")
        if self.lunch_end <= self.lunch_start:
            raise ValueError("lunch_end must be after lunch_start")

    @classmethod
    def from_strings(
        cls,
        work_start: str = "07:30",
        work_end: str = "16:30",
        lunch_start: str = "12:00",
        lunch_end: str = "13:00",
    ) -> "WindowConfig":
        """
        Build a config from 'HH:MM' strings. Raises ValueError for invalid formats, out of range
        times, or an end that is not after its start.
        """
        try:
            return cls(
                work_start=_hhmm(work_start),
                work_end=_hhmm(work_end),
                lunch_start=_hhmm(lunch_start),
                lunch_end=_hhmm(lunch_end),
            )
        except (ValueError, AttributeError) as exc:
            raise ValueError(f"Invalid window time: {exc}") from exc


DEFAULT_WINDOW = WindowConfig()


@dataclass(frozen=True)
class Meeting:
    """
    One scheduled (or candidate) class occurrence.

    start/end are None when the source time could not be parsed; the
    normalizer never lets such a meeting into the committed set.
    """

    subject_id: str
    professor_id: str
    section_id: str
    days: Tuple[str, ...]
    start: Optional[int]
    end: Optional[int]
    delivery_mode: DeliveryMode = DeliveryMode.ONSITE
    room_id: Optional[str] = None
    term: Optional[Term] = None
    origin: Origin = Origin.MANUAL
    meeting_id: Optional[str] = None

    @property
    def has_valid_times(self) -> bool:
        return self.start is not None and self.end is not None and self.end > self.start


@dataclass(frozen=True)
class Violation:
    rule: RuleId
    message: str


@dataclass(frozen=True)
class Slot:
    """
    A suggested legal window on one weekday.
    """

    day: str
    start: int
    end: int


@dataclass(frozen=True)
class SuggestParams:
    section_id: str
    professor_id: str
    days: Tuple[str, ...]
    duration_minutes: int = 60
    delivery_mode: DeliveryMode = DeliveryMode.ONSITE
    term: Optional[Term] = None
