"""Blueprints served by the web frontend."""

from .events import events_bp
from .health import bp as health_bp

__all__ = ['events_bp', 'health_bp']
