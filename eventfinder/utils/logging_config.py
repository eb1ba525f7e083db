"""Logging configuration for the application."""

import logging
import sys

def setup_logging(level: str = 'INFO'):
    """Configure logging for the application."""
    root_logger = logging.getLogger()
    if root_logger.handlers:
        # Already configured (e.g. by the test runner or a repeated create_app)
        return

    # Create a formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Create a console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)

    # Configure the root logger
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    # Set higher log levels for noisy components
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
