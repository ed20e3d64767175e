"""
Configuration for OrderDesk.

The backend REST API is required; every page except the login pages and
the public store link talks to it with the caller's bearer token.
"""

import os

from dotenv import load_dotenv

# Load .env file early so environment variables are available for Config class
# This must happen before the Config class is defined
load_dotenv(override=True)


class Config:
    """Default configuration for the Flask application."""

    # Flask settings
    SECRET_KEY = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")
    SESSION_COOKIE_NAME = "order_desk_session"
    ENVIRONMENT = os.environ.get("FLASK_ENV", "development")

    # Debug mode
    DEBUG = os.environ.get("FLASK_DEBUG", "1") == "1"

    # ==========================================================================
    # Backend API
    # ==========================================================================
    # API_BASE_URL: Root of the backend REST API (no trailing slash needed)
    # API_TIMEOUT_SECONDS: Per-request timeout; a timeout surfaces as
    #   "backend unavailable" and is not retried
    # ==========================================================================
    API_BASE_URL = os.environ.get("API_BASE_URL", "http://localhost:8080/api")
    API_TIMEOUT_SECONDS = float(os.environ.get("API_TIMEOUT_SECONDS", "10"))

    # Public origin of this app, used to build shareable store links
    FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:5000")

    DEFAULT_LANGUAGE = os.environ.get("DEFAULT_LANGUAGE", "he")


class ProductionConfig(Config):
    """Production configuration."""
    DEBUG = False
    TESTING = False
    SESSION_COOKIE_SECURE = True
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = 'Lax'
    PERMANENT_SESSION_LIFETIME = 3600  # 1 hour


class DevelopmentConfig(Config):
    """Development configuration."""
    DEBUG = True
    TESTING = False


class TestingConfig(Config):
    """Testing configuration."""
    DEBUG = False
    TESTING = True
    SECRET_KEY = "test-secret-key"
    API_BASE_URL = "http://backend.test/api"
    FRONTEND_URL = "http://desk.test"
