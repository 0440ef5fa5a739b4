"""
Local snapshot of the committed schedule rows.

This module manages the file:

    data/snapshot.json

Design rationale:
- the remote data store is the source of truth
- the snapshot is the point-in-time copy one validation session works on,
  so check/suggest runs do not hit the network on every call

The raw rows are stored as fetched; normalization happens on load,
so a newer normalizer can re-read an old snapshot.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Iterable, Optional

from schedcheck.model import Term


def _default_snapshot_path() -> Path:
    """
    Return the default path of snapshot.json inside the package.

    Using a function instead of a constant makes testing easier,
    because tests can override the path.
    """
    base_dir = Path(__file__).resolve().parent
    return base_dir / "data" / "snapshot.json"


def load_snapshot(path: str | Path | None = None) -> tuple[Optional[Term], list[dict[str, Any]]]:
    """
    Load (term, rows) from snapshot.json.

    Returns (None, []) if the file does not exist or is invalid.
    """
    snapshot_path = Path(path) if path is not None else _default_snapshot_path()

    # Nothing fetched yet
    if not snapshot_path.exists():
        return None, []

    try:
        data = json.loads(snapshot_path.read_text(encoding="utf-8"))
        rows = data.get("rows", [])
        if not isinstance(rows, list):
            return None, []
        rows = [r for r in rows if isinstance(r, dict)]

        term = None
        raw_term = data.get("term")
        if isinstance(raw_term, dict):
            school_year = str(raw_term.get("school_year", "")).strip()
            semester = str(raw_term.get("semester", "")).strip()
            if school_year and semester:
                term = Term(school_year=school_year, semester=semester)
        return term, rows
    except (OSError, json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return None, []


def save_snapshot(rows: Iterable[dict[str, Any]], term: Term, path: str | Path | None = None) -> Path:
    """
    Save fetched rows together with their term and a fetch timestamp.

    Creates parent directories if needed. Returns the written path.
    """
    snapshot_path = Path(path) if path is not None else _default_snapshot_path()
    snapshot_path.parent.mkdir(parents=True, exist_ok=True)

    payload = {
        "term": term.as_dict(),
        "fetched_at": datetime.now().isoformat(timespec="seconds"),
        "rows": list(rows),
    }

    snapshot_path.write_text(json.dumps(payload, indent=2, ensure_ascii=False, default=str), encoding="utf-8")
    return snapshot_path
