"""
schedcheck: conflict detection and free slot suggestions for class schedules.
"""

from schedcheck.client import fetch_committed
from schedcheck.conflicts import check_conflicts, exclude_meeting, overlaps
from schedcheck.model import (
    DEFAULT_TERM,
    DEFAULT_WINDOW,
    DeliveryMode,
    Meeting,
    Origin,
    RuleId,
    Slot,
    SuggestParams,
    Term,
    Violation,
    WindowConfig,
)
from schedcheck.normalize import normalize_candidate, normalize_meetings
from schedcheck.suggest import suggest_slots

__all__ = [
    "DEFAULT_TERM",
    "DEFAULT_WINDOW",
    "DeliveryMode",
    "Meeting",
    "Origin",
    "RuleId",
    "Slot",
    "SuggestParams",
    "Term",
    "Violation",
    "WindowConfig",
    "check_conflicts",
    "exclude_meeting",
    "fetch_committed",
    "normalize_candidate",
    "normalize_meetings",
    "overlaps",
    "suggest_slots",
]
