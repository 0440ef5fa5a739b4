"""
Unit tests for the window configuration.

WindowConfig contract:
- every time lies between 00:00 and 24:00
- the working window and the lunch break each end after they start
- invalid values raise ValueError (the CLI turns that into a usage error)
"""

import unittest

from schedcheck.model import DEFAULT_WINDOW, WindowConfig


class TestWindowConfig(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(
            (DEFAULT_WINDOW.work_start, DEFAULT_WINDOW.work_end, DEFAULT_WINDOW.lunch_start, DEFAULT_WINDOW.lunch_end),
            (450, 990, 720, 780),
        )
        self.assertEqual(WindowConfig.from_strings(), DEFAULT_WINDOW)

    def test_from_strings_accepts_seconds_and_end_of_day(self) -> None:
        config = WindowConfig.from_strings(work_start="07:00:00", work_end="24:00")
        self.assertEqual((config.work_start, config.work_end), (420, 1440))

    def test_bad_format(self) -> None:
        for value in ("late", "7", "aa:10"):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    WindowConfig.from_strings(work_start=value)

    def test_out_of_range(self) -> None:
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(lunch_start="25:99")
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(lunch_start="12:75")
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(work_end="24:30")
        with self.assertRaises(ValueError):
            WindowConfig(work_start=-10)

    def test_end_must_follow_start(self) -> None:
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(work_start="16:30", work_end="07:30")
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(work_start="08:00", work_end="08:00")
        with self.assertRaises(ValueError):
            WindowConfig.from_strings(lunch_start="13:00", lunch_end="12:00")


if __name__ == "__main__":
    unittest.main()
