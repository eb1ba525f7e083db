from datetime import date, datetime
from typing import Dict, List, Optional, Tuple
from zoneinfo import ZoneInfo
from flask import Blueprint, abort, current_app, make_response, render_template, request, url_for
from icalendar import Calendar, Event as ICalEvent
from werkzeug.datastructures import MultiDict
from ...filters import (
    ALL_ORGANIZATIONS,
    DateRange,
    EventType,
    FilterDimension,
    FilterStateModel,
)
from ..api import EventAPIClient
from ..views import AllEventsView, EventsView, SavedEventsView

# Create the blueprint
events_bp = Blueprint('events', __name__)

def make_view(view_class) -> EventsView:
    """Build a view wired to the configured API, acting as the requesting user."""
    client = EventAPIClient(
        base_url=current_app.config['API_BASE_URL'],
        timeout=current_app.config['API_TIMEOUT'],
        cookies=request.cookies
    )
    return view_class(
        client,
        debounce_wait=current_app.config['SEARCH_DEBOUNCE_SECONDS'],
        tz=ZoneInfo(current_app.config['DISPLAY_TIMEZONE'])
    )

def parse_date_arg(args: MultiDict, key: str) -> Optional[date]:
    value = args.get(key)
    if not value:
        return None
    return date.fromisoformat(value[:10])

def apply_request_filters(model: FilterStateModel, args: MultiDict) -> None:
    """
    Replay the filters encoded in the query string onto a fresh model.

    Event type goes first so that a complete date range in the same request
    wins, matching what the filter panel would have done.

    Raises:
        ValueError: If an event type, date or location id is invalid
    """
    event_type = args.get('eventType')
    if event_type:
        model.apply_filter_change(FilterDimension.EVENT_TYPE, event_type)

    start, end = parse_date_arg(args, 'dateFrom'), parse_date_arg(args, 'dateTo')
    if start or end:
        model.apply_filter_change(FilterDimension.DATE_RANGE, DateRange(start, end))

    # Repeats would toggle a location back off
    for location in dict.fromkeys(args.getlist('locations')):
        model.apply_filter_change(FilterDimension.LOCATION, location)

    model.set_search_term(args.get('search', '').strip())
    model.select_organization(args.get('organization'))

def _as_date_arg(value) -> str:
    if isinstance(value, datetime):
        value = value.date()
    return value.isoformat()

def page_args(model: FilterStateModel) -> Dict[str, object]:
    """Query arguments that reproduce a filter model on the events page."""
    state = model.state
    args: Dict[str, object] = {}
    if model.event_type_selected or state.event_type != model.default_event_type:
        args['eventType'] = EventType(state.event_type).value
    if state.search_term:
        args['search'] = state.search_term
    if state.organization != ALL_ORGANIZATIONS:
        args['organization'] = state.organization
    if state.date_range.start is not None:
        args['dateFrom'] = _as_date_arg(state.date_range.start)
    if state.date_range.end is not None:
        args['dateTo'] = _as_date_arg(state.date_range.end)
    if state.locations:
        args['locations'] = list(state.locations)
    return args

def filter_links(model: FilterStateModel) -> Dict[str, object]:
    """URLs for every control of the filter panel, each one a single change away."""

    def link_after(change) -> str:
        clone = model.copy()
        change(clone)
        return url_for('events.index', **page_args(clone))

    chips: List[Tuple[str, str]] = [
        (label, link_after(lambda m, label=label: m.remove_filter(label)))
        for label in model.active_filters
    ]
    locations = [
        (location_id, name, location_id in model.state.locations,
         link_after(lambda m, loc=location_id: m.apply_filter_change(FilterDimension.LOCATION, loc)))
        for location_id, name in model.locations.items()
    ]
    event_types = [
        (event_type.value.capitalize(), event_type == model.state.event_type,
         link_after(lambda m, t=event_type: m.apply_filter_change(FilterDimension.EVENT_TYPE, t)))
        for event_type in EventType
    ]
    return {
        'chips': chips,
        'locations': locations,
        'event_types': event_types,
        'clear_all': link_after(lambda m: m.clear_all()),
    }

@events_bp.route('/')
def index():
    """Render the events page."""
    view = make_view(AllEventsView)
    try:
        try:
            apply_request_filters(view.filters, request.args)
        except ValueError as e:
            abort(400, description=str(e))

        view.load_organizations()
        view.refresh()
        return render_template(
            'index.html',
            view=view.render(),
            links=filter_links(view.filters),
            args=page_args(view.filters)
        )
    finally:
        view.close()

@events_bp.route('/saved')
def saved():
    """Render the current user's saved events."""
    view = make_view(SavedEventsView)
    try:
        view.filters.set_search_term(request.args.get('search', '').strip())
        view.filters.select_organization(request.args.get('organization'))
        view.load_organizations()
        view.refresh()
        return render_template('saved.html', view=view.render())
    finally:
        view.close()

@events_bp.route('/calendar.ics')
def ics_feed():
    """Generate an iCalendar feed of the events matching the query string."""
    view = make_view(AllEventsView)
    try:
        try:
            apply_request_filters(view.filters, request.args)
        except ValueError as e:
            abort(400, description=str(e))
        view.refresh()
        events = view.events
    finally:
        view.close()

    # Create calendar
    cal = Calendar()
    cal.add('prodid', '-//Event Finder//eventfinder//')
    cal.add('version', '2.0')
    cal.add('x-wr-calname', 'Events')
    cal.add('x-wr-timezone', current_app.config['DISPLAY_TIMEZONE'])

    # Add events to calendar
    for event in events:
        cal_event = ICalEvent()
        cal_event.add('uid', f"{event.id}@eventfinder")
        cal_event.add('summary', event.title)
        cal_event.add('dtstart', event.start_time)

        if event.end_time:
            cal_event.add('dtend', event.end_time)

        description = event.description or event.brief_description
        if description:
            cal_event.add('description', description)

        if event.place:
            cal_event.add('location', event.place)

        if event.url:
            cal_event.add('url', event.url)

        cal.add_component(cal_event)

    # Generate response
    response = make_response(cal.to_ical())
    response.headers['Content-Type'] = 'text/calendar; charset=utf-8'
    response.headers['Content-Disposition'] = 'attachment; filename=calendar.ics'

    return response
