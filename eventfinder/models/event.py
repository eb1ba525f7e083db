"""Event model definition."""

from datetime import datetime
from typing import List, Optional
from dataclasses import dataclass, field

@dataclass
class Event:
    """
    Event model representing an event as served by the events API.

    Fields:
        id: Document identifier (``_id`` in the API payload)
        title: Event title
        start_time: When the event starts (``date_from``)
        end_time: When the event ends (``date_to``, optional)
        url: Link to the event page
        ticket_url: Link to buy tickets (optional)
        brief_description: Short summary shown on cards (optional)
        description: Full event description
        organization: Name of the hosting organization (optional)
        photo_url: URL to the event's image (optional)
        is_virtual: Whether the event can be attended online
        is_in_person: Whether the event has a physical venue
        location: Free-form location descriptor
        address, room, city, state, zip_code, country: Address fields (optional)
        keywords: Tags attached to the event
        is_saved: Whether the current user saved this event
    """
    id: str
    title: str
    start_time: datetime
    end_time: Optional[datetime] = None
    url: Optional[str] = None
    ticket_url: Optional[str] = None
    brief_description: Optional[str] = None
    description: Optional[str] = None
    organization: Optional[str] = None
    photo_url: Optional[str] = None
    is_virtual: bool = False
    is_in_person: bool = False
    location: Optional[str] = None
    address: Optional[str] = None
    room: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip_code: Optional[str] = None
    country: Optional[str] = None
    keywords: List[str] = field(default_factory=list)
    is_saved: bool = False

    @property
    def place(self) -> str:
        """Short human-readable location used on event cards."""
        if self.is_virtual and not self.is_in_person:
            return 'Virtual'
        parts = [p for p in (self.city, self.state) if p]
        if parts:
            return ', '.join(parts)
        return self.location or ''

@dataclass
class Organization:
    """An organization events can be filtered by."""
    id: str
    name: str
