"""Date parsing helpers shared by the backend, the client and the view-model.

Dates travel as strings in a handful of shapes (ISO timestamps, plain
``YYYY-MM-DD``, Brazilian ``dd/mm/yyyy``, epoch milliseconds). Everything
is parsed into aware UTC datetimes; naive values are taken as UTC.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, Optional

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_BR_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})$")


def _from_string(raw: str) -> Optional[datetime]:
    text = raw.strip()
    if not text:
        return None

    match = _BR_DATE_RE.match(text)
    if match:
        dd, mm, yyyy = match.groups()
        try:
            return datetime(int(yyyy), int(mm), int(dd), tzinfo=timezone.utc)
        except ValueError:
            return None

    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    return _as_utc(parsed)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_date(value: Any) -> Optional[datetime]:
    """Parse ``value`` into an aware UTC datetime.

    Args:
        value: datetime, date, epoch milliseconds or a date string

    Returns:
        The parsed datetime, or None when the value is empty or unparsable
    """
    if value is None or value == "" or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, (int, float)):
        if value == 0:
            return None
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        return _from_string(value)
    return None


def to_iso(value: datetime) -> str:
    """Format as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    utc = _as_utc(value)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def to_iso_or_none(value: Any) -> Optional[str]:
    """Parse ``value`` and re-emit it as an ISO timestamp; None if unparsable."""
    parsed = parse_date(value)
    return to_iso(parsed) if parsed is not None else None


def to_calendar_date(value: Any) -> Optional[str]:
    """Return the UTC calendar date (``YYYY-MM-DD``) of ``value``, or None."""
    parsed = parse_date(value)
    return parsed.strftime("%Y-%m-%d") if parsed is not None else None


def sort_timestamp(value: Any) -> float:
    """Epoch seconds used when ordering by date; missing dates sort as 0."""
    parsed = parse_date(value)
    return parsed.timestamp() if parsed is not None else 0.0


def utc_now_iso() -> str:
    return to_iso(datetime.now(timezone.utc))


def today_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def normalize_to_input_date(value: Any, today: Optional[str] = None) -> str:
    """Convert ``value`` to the ``YYYY-MM-DD`` form used by date inputs.

    Empty or unparsable values fall back to today's date instead of failing.

    Args:
        value: Any date representation accepted by :func:`parse_date`
        today: Override for "today" (``YYYY-MM-DD``)

    Returns:
        A ``YYYY-MM-DD`` string
    """
    fallback = today or today_iso()
    if not value:
        return fallback

    if isinstance(value, str):
        text = value.strip()
        if _ISO_DATE_RE.match(text):
            return text
        if "T" in text:
            return text.split("T", 1)[0]

    return to_calendar_date(value) or fallback
