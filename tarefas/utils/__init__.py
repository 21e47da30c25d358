"""Utility helpers."""

from tarefas.utils.dates import (
    normalize_to_input_date,
    parse_date,
    sort_timestamp,
    to_calendar_date,
    to_iso,
    to_iso_or_none,
    today_iso,
    utc_now_iso,
)

__all__ = [
    "normalize_to_input_date",
    "parse_date",
    "sort_timestamp",
    "to_calendar_date",
    "to_iso",
    "to_iso_or_none",
    "today_iso",
    "utc_now_iso",
]
