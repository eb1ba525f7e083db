"""Shared helpers: logging setup, result grouping and debouncing."""

from .debounce import Debouncer
from .grouping import group_events_by_date, format_date_key

__all__ = ['Debouncer', 'group_events_by_date', 'format_date_key']
