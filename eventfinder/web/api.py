import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import requests
from datetime import datetime
from ..models.event import Event, Organization

logger = logging.getLogger(__name__)

class EventAPIError(Exception):
    """Raised when the API answers with ``success: false`` or a malformed body."""

def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp as sent by the API (``Z`` suffix allowed)."""
    return datetime.fromisoformat(value.replace('Z', '+00:00'))

class EventAPIClient:
    """Client for the events API.

    Every endpoint answers with an envelope ``{"success": bool, ...}``.
    Only ``success`` is inspected; the HTTP status code is not.
    """

    def __init__(self, base_url: str, timeout: int = 30,
                 cookies: Optional[Mapping[str, str]] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        # Session cookies identify the current user to the save-event endpoints
        self.cookies = dict(cookies or {})

    def get_events(self, organization: Optional[str] = None) -> List[Event]:
        """
        Fetch all events, newest first.

        Args:
            organization: Only return events of this organization (optional)

        Returns:
            List[Event]: List of Event objects

        Raises:
            requests.RequestException: If the API request fails
            EventAPIError: If the API reports a failure
        """
        params = {'organization': organization} if organization else None
        data = self._get('/api/events', params=params)
        return self._convert_events(data)

    def search_events(self, params: Sequence[Tuple[str, str]]) -> List[Event]:
        """
        Fetch events matching serialized filter parameters.

        Args:
            params: Query pairs from ``serialize_filters``; keys may repeat

        Returns:
            List[Event]: Events in the order the server sorted them
        """
        data = self._get('/api/events/search', params=list(params))
        return self._convert_events(data)

    def get_organizations(self) -> List[Organization]:
        data = self._get('/api/organizations')
        organizations = data.get('organizations')
        if not isinstance(organizations, list):
            raise EventAPIError("API response must contain a list of organizations")
        return [Organization(id=org['_id'], name=org['name']) for org in organizations]

    def get_saved_event_ids(self) -> List[str]:
        """Fetch the ids of the events the current user saved."""
        data = self._get('/api/saveevent')
        event_ids = data.get('eventIds')
        if not isinstance(event_ids, list):
            raise EventAPIError("API response must contain a list of event ids")
        return [str(event_id) for event_id in event_ids]

    def get_saved_events(self, event_ids: Iterable[str]) -> List[Event]:
        """Fetch full details for the given saved event ids."""
        data = self._get(
            '/api/events/savedevents',
            params={'savedIds': ','.join(event_ids)}
        )
        events = self._convert_events(data)
        for event in events:
            event.is_saved = True
        return events

    def _get(self, path: str, params=None) -> Dict[str, Any]:
        """
        GET an endpoint and unwrap its envelope.

        Raises:
            requests.RequestException: If the request itself fails
            EventAPIError: If the body is not an envelope or ``success`` is false
        """
        try:
            response = requests.get(
                f"{self.base_url}{path}",
                params=params,
                cookies=self.cookies,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"Failed to fetch {path} from API: {e}")
            raise

        try:
            data = response.json()
        except ValueError as e:
            raise EventAPIError(f"Invalid JSON from {path}: {e}") from e

        if not isinstance(data, dict):
            raise EventAPIError(f"API response from {path} must be an object")
        if not data.get('success'):
            message = data.get('message') or data.get('error') or 'unknown error'
            raise EventAPIError(f"API request to {path} failed: {message}")
        return data

    def _convert_events(self, data: Dict[str, Any]) -> List[Event]:
        events_data = data.get('events')
        if not isinstance(events_data, list):
            raise EventAPIError("API response must contain a list of events")
        try:
            return [self._convert_to_event(event) for event in events_data]
        except (ValueError, TypeError, AttributeError) as e:
            raise EventAPIError(f"Malformed event in API response: {e}") from e

    def _convert_to_event(self, data: dict) -> Event:
        """
        Convert API event data to an Event object.

        Args:
            data: Dictionary containing event data from the API

        Returns:
            Event: Event object

        Raises:
            ValueError: If required fields are missing or invalid
        """
        # Ensure required fields are present
        required_fields = ['_id', 'title', 'date_from']
        missing_fields = [field for field in required_fields if not data.get(field)]
        if missing_fields:
            raise ValueError(f"Missing required fields: {', '.join(missing_fields)}")

        # An unparsable start time fails the whole response in _convert_events
        start_time = parse_timestamp(data['date_from'])

        end_time = None
        if data.get('date_to'):
            try:
                end_time = parse_timestamp(data['date_to'])
            except ValueError as e:
                logger.warning(f"Invalid datetime format for date_to: {e}")

        organization = data.get('organization')
        if isinstance(organization, dict):
            organization = organization.get('name')

        # Create Event object
        return Event(
            id=str(data['_id']),
            title=data['title'],
            start_time=start_time,
            end_time=end_time,
            url=data.get('url'),
            ticket_url=data.get('ticket_url'),
            brief_description=data.get('brief_description'),
            description=data.get('description'),
            organization=organization,
            photo_url=data.get('photo_url'),
            is_virtual=bool(data.get('is_virtual')),
            is_in_person=bool(data.get('is_in_person')),
            location=data.get('location'),
            address=data.get('address'),
            room=data.get('room'),
            city=data.get('city'),
            state=data.get('state'),
            zip_code=data.get('zip_code'),
            country=data.get('country'),
            keywords=list(data.get('keywords') or []),
            is_saved=bool(data.get('is_saved'))
        )
