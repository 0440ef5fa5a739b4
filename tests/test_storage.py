"""
Unit tests for the local schedule snapshot.

Storage contract:
- Missing/invalid file -> (None, [])
- JSON schema: {"term": {...}, "fetched_at": "...", "rows": [ ... ]}
"""

import json
import tempfile
import unittest
from pathlib import Path

from schedcheck.model import Term
from schedcheck.storage import load_snapshot, save_snapshot

TERM = Term(school_year="2024-2025", semester="First Semester")


class TestStorage(unittest.TestCase):
    def test_load_missing_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "missing.json"
            self.assertEqual(load_snapshot(p), (None, []))

    def test_load_corrupt_file_returns_empty(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "snapshot.json"
            p.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_snapshot(p), (None, []))

            p.write_text(json.dumps({"rows": "nope"}), encoding="utf-8")
            self.assertEqual(load_snapshot(p), (None, []))

    def test_save_and_load(self) -> None:
        rows = [{"id": 1, "section_id": "S1", "days": "monday"}, {"id": 2}]
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "nested" / "snapshot.json"
            written = save_snapshot(rows, TERM, p)
            self.assertEqual(written, p)

            term, loaded = load_snapshot(p)
            self.assertEqual(term, TERM)
            self.assertEqual(loaded, rows)

            data = json.loads(p.read_text(encoding="utf-8"))
            self.assertEqual(data["term"], {"school_year": "2024-2025", "semester": "First Semester"})
            self.assertIn("fetched_at", data)

    def test_non_dict_rows_are_skipped(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "snapshot.json"
            p.write_text(json.dumps({"rows": [{"id": 1}, 5, "x"]}), encoding="utf-8")
            self.assertEqual(load_snapshot(p), (None, [{"id": 1}]))


if __name__ == "__main__":
    unittest.main()
