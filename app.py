"""
OrderDesk - Flask Application Entry Point.

This is a slim app factory that:
1. Loads configuration (.env + config classes)
2. Creates the shared backend API client
3. Registers route blueprints
4. Sets up error handlers and context processors

ARCHITECTURE:
    Browser
    └── Flask request handling (one request at a time per user)
        └── BackendAPIClient (shared, token looked up per request)
            └── Backend REST API (source of truth)

Nothing is cached between requests; every page fetches fresh data.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from flask import Flask, flash, redirect, render_template, request, session, url_for

from logging_config import setup_logging, get_logger
from core.api_client import BackendAPIClient
from core.exceptions import (
    AuthorizationError,
    BackendUnavailableError,
    BusinessRuleError,
    NotFoundError,
)
from routes import register_blueprints
from routes.helpers import list_url
from services import auth_service
from modules.formatting import format_date_long, format_date_short, format_price, order_card_date
from modules.i18n import (
    create_translation_filter,
    get_supported_languages,
    translate_backend_message,
    i18n_manager,
    DEFAULT_LANGUAGE,
)


# Module logger (configured after setup_logging)
logger = get_logger(__name__)


def create_app(config_object: Optional[Union[str, type]] = None) -> Flask:
    """
    Application factory - creates and configures Flask app.

    Args:
        config_object: Config class or import path (defaults to config.Config)

    Returns:
        Configured Flask application

    Raises:
        ValueError: If API_BASE_URL is empty
    """
    # Use override=True so .env file always takes precedence over shell environment
    env_file = Path(__file__).parent / '.env'
    if env_file.exists():
        load_dotenv(env_file, override=True)
    else:
        load_dotenv(override=True)

    app = Flask(__name__)
    app.config.from_object(config_object or "config.Config")

    # Configure logging
    log_level = logging.DEBUG if app.config.get("DEBUG") else logging.INFO
    enable_file_logging = app.config.get("ENVIRONMENT") == "production"

    root_logger = setup_logging(
        app_name="order_desk",
        log_level=log_level,
        enable_file_logging=enable_file_logging
    )

    # Set Flask's logger to use our configured logger
    app.logger.handlers = root_logger.handlers
    app.logger.setLevel(log_level)

    logger.info(f"Starting OrderDesk in {app.config.get('ENVIRONMENT')} mode")

    # =========================================================================
    # BACKEND CLIENT
    # =========================================================================

    # Tests may install their own client before or after create_app()
    if "API_CLIENT" not in app.config:
        app.config["API_CLIENT"] = BackendAPIClient(
            app.config["API_BASE_URL"],
            token_provider=auth_service.get_token,
            timeout=app.config.get("API_TIMEOUT_SECONDS", 10.0),
        )
    logger.info(f"Backend API: {app.config['API_BASE_URL']}")

    # =========================================================================
    # REGISTER BLUEPRINTS
    # =========================================================================

    register_blueprints(app)

    # =========================================================================
    # CONTEXT PROCESSORS
    # =========================================================================

    def _current_language() -> str:
        return session.get("language", app.config.get("DEFAULT_LANGUAGE", DEFAULT_LANGUAGE))

    @app.context_processor
    def inject_i18n():
        """Inject translation function into all templates."""
        current_lang = _current_language()
        languages = get_supported_languages()
        return {
            "_": create_translation_filter(current_lang),
            "current_language": current_lang,
            "text_direction": languages.get(current_lang, {}).get("dir", "rtl"),
            "supported_languages": languages,
        }

    @app.context_processor
    def inject_helpers():
        return {
            "current_role": auth_service.current_role(),
            "format_price": format_price,
            "format_date_short": format_date_short,
            "format_date_long": format_date_long,
            "order_card_date": order_card_date,
            "list_url": list_url,
        }

    # =========================================================================
    # ERROR HANDLERS
    # =========================================================================

    @app.errorhandler(AuthorizationError)
    def handle_unauthorized(e):
        role = auth_service.logout()
        logger.warning(f"Backend rejected session (HTTP {e.status_code}); logged out {role or 'anonymous'}")
        flash("auth.session_expired", "warning")
        return redirect(auth_service.login_url(role))

    @app.errorhandler(BackendUnavailableError)
    def handle_backend_unavailable(e):
        logger.error(f"Backend unavailable: {e}")
        return render_template("error.html", message="errors.network"), 503

    @app.errorhandler(NotFoundError)
    def handle_backend_not_found(e):
        logger.warning(f"Backend resource not found: {e}")
        flash(translate_backend_message(e.user_message, _current_language()) or "errors.not_found", "warning")
        return redirect(auth_service.home_url(auth_service.current_role()))

    @app.errorhandler(BusinessRuleError)
    def handle_business_rule(e):
        message = translate_backend_message(e.user_message, _current_language()) or "errors.generic"
        return render_template("error.html", message=message), 400

    @app.errorhandler(404)
    def handle_not_found(e):
        flash("errors.page_not_found", "warning")
        return redirect(url_for("auth.index"))

    @app.errorhandler(500)
    def handle_server_error(e):
        logger.error(f"500 error: {e}", exc_info=True)
        return render_template("error.html", message="errors.generic"), 500

    # =========================================================================
    # LANGUAGE ROUTE
    # =========================================================================

    @app.route("/set_language/<lang>", methods=["GET"])
    def set_language(lang: str):
        if i18n_manager.is_language_supported(lang):
            session["language"] = lang
            session.modified = True
        else:
            flash("errors.unsupported_language", "error")
        return redirect(request.referrer or url_for("auth.index"))

    logger.info("Application initialized successfully")
    return app


if __name__ == "__main__":
    app = create_app()
    debug_mode = os.environ.get("FLASK_DEBUG", "1") == "1"
    app.run(debug=debug_mode)
