"""
Unit tests for time slot suggestions.

Suggester contract:
- first-fit scan, Monday-first, 10 minute steps from the start of the working window
- never more than max_suggestions results
- nothing without a section, a professor and at least one day
"""

import unittest

from schedcheck.model import DeliveryMode, Meeting, Slot, SuggestParams, Term, WindowConfig
from schedcheck.suggest import derive_duration, suggest_slots


def busy(section="S1", professor="P1", days=("monday",), start=450, end=600, term=None) -> Meeting:
    return Meeting(
        subject_id="X",
        professor_id=professor,
        section_id=section,
        days=tuple(days),
        start=start,
        end=end,
        term=term,
    )


def params(days=("monday",), duration=60, mode=DeliveryMode.ONSITE, section="S1", professor="P1", term=None):
    return SuggestParams(
        section_id=section,
        professor_id=professor,
        days=tuple(days),
        duration_minutes=duration,
        delivery_mode=mode,
        term=term,
    )


def starts(slots):
    return [s.start for s in slots]


class TestDeriveDuration(unittest.TestCase):
    def test_from_valid_times(self) -> None:
        self.assertEqual(derive_duration(480, 570), 90)

    def test_default_when_unusable(self) -> None:
        self.assertEqual(derive_duration(None, 570), 60)
        self.assertEqual(derive_duration(600, 600), 60)
        self.assertEqual(derive_duration(600, 540, default=45), 45)


class TestSuggestSlots(unittest.TestCase):
    def test_empty_schedule_starts_at_window_start(self) -> None:
        slots = suggest_slots(params(), [])
        self.assertEqual(
            slots,
            [
                Slot("monday", 450, 510),
                Slot("monday", 460, 520),
                Slot("monday", 470, 530),
                Slot("monday", 480, 540),
                Slot("monday", 490, 550),
            ],
        )

    def test_skips_section_busy_time(self) -> None:
        slots = suggest_slots(params(), [busy(professor="P9")])
        self.assertEqual(starts(slots), [600, 610, 620, 630, 640])

    def test_skips_professor_busy_time(self) -> None:
        slots = suggest_slots(params(), [busy(section="S9")])
        self.assertEqual(starts(slots), [600, 610, 620, 630, 640])

    def test_unrelated_meetings_are_ignored(self) -> None:
        slots = suggest_slots(params(), [busy(section="S9", professor="P9", end=990)])
        self.assertEqual(starts(slots), [450, 460, 470, 480, 490])

    def test_onsite_skips_lunch(self) -> None:
        committed = [busy(end=700)]
        self.assertEqual(starts(suggest_slots(params(), committed)), [780, 790, 800, 810, 820])

    def test_online_ignores_lunch(self) -> None:
        committed = [busy(end=700)]
        slots = suggest_slots(params(mode=DeliveryMode.ONLINE), committed)
        self.assertEqual(starts(slots), [700, 710, 720, 730, 740])

    def test_days_scanned_monday_first(self) -> None:
        committed = [busy(section="S9", days=("monday",), end=990)]
        slots = suggest_slots(params(days=("wednesday", "monday")), committed)
        self.assertEqual({s.day for s in slots}, {"wednesday"})
        self.assertEqual(slots[0], Slot("wednesday", 450, 510))

    def test_exhaustive_scan_order_and_count(self) -> None:
        slots = suggest_slots(params(days=("tuesday", "monday")), [], max_suggestions=1000)

        # 49 starts between 07:30 and 15:30, 11 of them cross lunch
        self.assertEqual(len(slots), 76)
        self.assertEqual([s.day for s in slots[:38]], ["monday"] * 38)
        self.assertEqual([s.day for s in slots[38:]], ["tuesday"] * 38)
        self.assertTrue(all(s.end - s.start == 60 for s in slots))

    def test_respects_cap(self) -> None:
        all_days = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday")
        self.assertEqual(len(suggest_slots(params(days=all_days), [])), 5)
        self.assertEqual(len(suggest_slots(params(days=all_days), [], max_suggestions=3)), 3)

    def test_deterministic(self) -> None:
        committed = [busy(), busy(section="S9", days=("tuesday",), start=500, end=700)]
        p = params(days=("monday", "tuesday"), duration=90)
        self.assertEqual(suggest_slots(p, committed), suggest_slots(p, committed))

    def test_missing_actor_or_days_gives_nothing(self) -> None:
        self.assertEqual(suggest_slots(params(section=""), []), [])
        self.assertEqual(suggest_slots(params(professor=""), []), [])
        self.assertEqual(suggest_slots(params(days=()), []), [])

    def test_duration_longer_than_window(self) -> None:
        self.assertEqual(suggest_slots(params(duration=600), []), [])

    def test_custom_step_and_window(self) -> None:
        config = WindowConfig.from_strings(work_start="08:00", work_end="10:00")
        slots = suggest_slots(params(duration=60), [], config, step_minutes=30)
        self.assertEqual(starts(slots), [480, 510, 540])

    def test_other_term_is_ignored(self) -> None:
        t1 = Term("2024-2025", "First Semester")
        t2 = Term("2024-2025", "Second Semester")
        committed = [busy(term=t2)]
        self.assertEqual(starts(suggest_slots(params(term=t1), committed)), [450, 460, 470, 480, 490])
        self.assertEqual(starts(suggest_slots(params(term=t2), committed)), [600, 610, 620, 630, 640])


if __name__ == "__main__":
    unittest.main()
