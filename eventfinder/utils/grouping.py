"""Grouping of an event list into calendar-date buckets."""

from datetime import datetime, tzinfo
from typing import Dict, Iterable, List, Optional

from ..filters.state import MONTH_ABBREVIATIONS
from ..models.event import Event

def format_date_key(value: datetime, tz: Optional[tzinfo] = None) -> str:
    """Format a timestamp as ``Mon d, yyyy``, e.g. ``Mar 1, 2024``."""
    if tz is not None and value.tzinfo is not None:
        value = value.astimezone(tz)
    return f"{MONTH_ABBREVIATIONS[value.month - 1]} {value.day}, {value.year:04d}"

def group_events_by_date(events: Iterable[Event], tz: Optional[tzinfo] = None) -> Dict[str, List[Event]]:
    """
    Bucket events by the date they start on.

    Buckets come out in the order their first event was seen, so the
    server's sort order decides both the order of days and the order of
    events within a day.

    Args:
        events: Events in the order the API returned them
        tz: Zone to convert aware start times to before taking the date

    Returns:
        Dict[str, List[Event]]: Formatted date -> events on that date
    """
    grouped: Dict[str, List[Event]] = {}
    for event in events:
        grouped.setdefault(format_date_key(event.start_time, tz), []).append(event)
    return grouped
