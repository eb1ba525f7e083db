from flask import Flask, render_template
from .routes import events_bp, health_bp
from ..config import Config
from ..utils.logging_config import setup_logging
import logging

# Module logger
logger = logging.getLogger(__name__)

def create_app(config_class=Config):
    """Create and configure the Flask application."""
    # Initialize Flask app
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # Register blueprints
    app.register_blueprint(events_bp)
    app.register_blueprint(health_bp)

    # Error handlers
    @app.errorhandler(400)
    def bad_request_error(error):
        return render_template('errors/400.html', message=error.description), 400

    @app.errorhandler(404)
    def not_found_error(error):
        return render_template('errors/404.html'), 404

    @app.errorhandler(500)
    def internal_error(error):
        logger.error(f"Unhandled error: {error}")
        return render_template('errors/500.html'), 500

    logger.info(f"Web frontend configured for API at {app.config['API_BASE_URL']}")
    return app

__all__ = ['create_app']
