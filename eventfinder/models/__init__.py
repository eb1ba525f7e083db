"""Models package initialization."""

from .event import Event, Organization

__all__ = ['Event', 'Organization']
