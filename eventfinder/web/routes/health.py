"""Health check endpoints."""

import requests
from flask import Blueprint, current_app, jsonify
from ..api import EventAPIClient, EventAPIError

bp = Blueprint('health', __name__)

@bp.route('/health')
def health_check():
    """Check if the application and the events API are healthy."""
    client = EventAPIClient(
        base_url=current_app.config['API_BASE_URL'],
        timeout=current_app.config['API_TIMEOUT']
    )
    try:
        # Cheapest endpoint that still goes through the envelope
        client.get_organizations()

        return jsonify({
            'status': 'healthy',
            'api': 'reachable'
        }), 200
    except (requests.RequestException, EventAPIError) as e:
        current_app.logger.warning(f"Health check failed: {e}")
        return jsonify({
            'status': 'unhealthy',
            'api': str(e)
        }), 503
