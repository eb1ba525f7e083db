"""Application configuration.

This module loads the .env file and exposes the settings used by the web
frontend and the API client.

Usage:
    from eventfinder.config import Config, IS_PRODUCTION_ENVIRONMENT

Note:
    In production environment variables should be set directly in the
    platform's environment configuration instead of a .env file.
"""

import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# Environment configuration
env_setting = os.environ.get('ENVIRONMENT', '').lower()
IS_PRODUCTION_ENVIRONMENT = env_setting == 'production'

if env_setting not in ['development', 'production']:
    logging.warning(
        f"Environment setting '{env_setting}' is invalid or not specified. "
        "Expected 'development' or 'production'. Defaulting to development environment."
    )

class Config:
    # Flask configuration
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev')
    DEBUG = os.getenv('FLASK_DEBUG', 'False').lower() == 'true'
    TESTING = False
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # API configuration
    API_BASE_URL = os.getenv('API_BASE_URL', 'http://localhost:3000')
    API_TIMEOUT = int(os.getenv('API_TIMEOUT', '30'))

    # View configuration
    SEARCH_DEBOUNCE_SECONDS = float(os.getenv('SEARCH_DEBOUNCE_SECONDS', '0.3'))
    DISPLAY_TIMEZONE = os.getenv('DISPLAY_TIMEZONE', 'UTC')

__all__ = ['Config', 'IS_PRODUCTION_ENVIRONMENT']
