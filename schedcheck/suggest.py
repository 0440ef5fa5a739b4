"""
Available time slot suggestions.

Greedy first-fit scan over the working window:
- days in Monday-first order, times from work_start in fixed steps
- a window is legal if it avoids the lunch break (onsite only) and
  every committed meeting of the same section or professor on that day
- stop after max_suggestions windows

A legal window narrower than the step, or not aligned to it, is not found.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from schedcheck.conflicts import overlaps
from schedcheck.model import (
    DEFAULT_WINDOW,
    WEEKDAYS,
    DeliveryMode,
    Meeting,
    Slot,
    SuggestParams,
    WindowConfig,
)
from schedcheck.normalize import parse_days

SUGGESTION_COUNT = 5
STEP_MINUTES = 10
DEFAULT_DURATION = 60


def derive_duration(start: Optional[int], end: Optional[int], default: int = DEFAULT_DURATION) -> int:
    """
    Duration of the candidate if its times are usable, else the default.
    """
    if start is not None and end is not None and end > start:
        return end - start
    return default


def suggest_slots(
    params: SuggestParams,
    committed: Iterable[Meeting],
    config: WindowConfig = DEFAULT_WINDOW,
    max_suggestions: int = SUGGESTION_COUNT,
    step_minutes: int = STEP_MINUTES,
) -> List[Slot]:
    """
    Return up to max_suggestions legal (day, start, end) windows in discovery order.
    """
    result: List[Slot] = []

    # No speculative suggestions without a concrete actor pair.
    if not params.section_id or not params.professor_id or not params.days:
        return result
    duration = params.duration_minutes
    if duration <= 0 or step_minutes <= 0 or max_suggestions <= 0:
        return result

    # Only the two actors matter; pre-filter once
    relevant = [
        m
        for m in committed
        if (m.section_id == params.section_id or m.professor_id == params.professor_id)
        and m.start is not None
        and m.end is not None
        and (params.term is None or m.term is None or m.term == params.term)
    ]
    onsite = params.delivery_mode == DeliveryMode.ONSITE
    requested = parse_days(params.days)

    for day in WEEKDAYS:
        if day not in requested:
            continue
        busy = [(m.start, m.end) for m in relevant if day in m.days]

        t = config.work_start
        while t + duration <= config.work_end:
            t_end = t + duration
            lunch_clash = onsite and overlaps(t, t_end, config.lunch_start, config.lunch_end)
            if not lunch_clash and not any(overlaps(t, t_end, s, e) for s, e in busy):
                result.append(Slot(day=day, start=t, end=t_end))
                if len(result) >= max_suggestions:
                    return result
            t += step_minutes

    return result
