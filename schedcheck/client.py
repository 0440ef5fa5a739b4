from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import requests

from schedcheck.model import Meeting, Term
from schedcheck.normalize import normalize_meetings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

DEFAULT_BASE_URL = "http://localhost/spcc_database"
SCHEDULE_ENDPOINT = "schedule.php"
DEFAULT_TIMEOUT = 10.0


class ScheduleFetchError(ValueError):
    """Raised when the schedule endpoint answers with something that is not a row list."""


def default_base_url() -> str:
    return os.environ.get("SCHEDCHECK_API_BASE", DEFAULT_BASE_URL).rstrip("/")


# ---------------------------------------------------------------------------
# Core logic
# ---------------------------------------------------------------------------


def _unwrap_rows(payload: Any) -> List[Dict[str, Any]]:
    """
    The endpoint has answered in several shapes over time:
        [...]
        {"data": [...]}
        {"data": {"schedules": [...]}}
        {"data": {"data": [...]}}
        {"schedules": [...]}
    """
    if isinstance(payload, list):
        return [r for r in payload if isinstance(r, dict)]
    if not isinstance(payload, dict):
        raise ScheduleFetchError(f"Unexpected schedule payload type: {type(payload).__name__}")

    if payload.get("success") is False or payload.get("status") == "error":
        raise ScheduleFetchError(str(payload.get("message") or "Schedule endpoint reported an error"))

    for key in ("data", "schedules"):
        inner = payload.get(key)
        if isinstance(inner, list):
            return _unwrap_rows(inner)
        if isinstance(inner, dict):
            return _unwrap_rows(inner)

    raise ScheduleFetchError("Schedule payload contains no rows")


def fetch_schedule_rows(
    term: Term,
    base_url: Optional[str] = None,
    professor_id: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[Dict[str, Any]]:
    """
    Load raw schedule rows for one term.

    Raises requests.RequestException on transport/HTTP errors and
    ScheduleFetchError if the body is not a recognizable row list.
    """
    url = f"{(base_url or default_base_url()).rstrip('/')}/{SCHEDULE_ENDPOINT}"
    params = term.as_dict()
    if professor_id:
        params["professor_id"] = str(professor_id)

    getter = session.get if session is not None else requests.get
    logger.info("GET %s %s", url, params)
    resp = getter(url, params=params, timeout=timeout)
    resp.raise_for_status()

    try:
        payload = resp.json()
    except ValueError as exc:
        raise ScheduleFetchError(f"Schedule endpoint did not return JSON: {exc}") from exc

    rows = _unwrap_rows(payload)
    logger.info("Fetched %d schedule rows for %s / %s", len(rows), term.school_year, term.semester)
    return rows


def fetch_committed(
    term: Term,
    base_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
    session: Optional[requests.Session] = None,
) -> List[Meeting]:
    """
    Read accessor: committed meetings of a term, normalized and filtered.
    """
    rows = fetch_schedule_rows(term, base_url=base_url, timeout=timeout, session=session)
    return normalize_meetings(rows, term=term)
