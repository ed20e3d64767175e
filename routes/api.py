"""
API routes (machine-readable endpoints).

Handles:
- /health - Health check endpoint
"""

from flask import Blueprint, current_app, jsonify

from logging_config import get_logger


# Module logger
logger = get_logger(__name__)

api_bp = Blueprint("api", __name__)


@api_bp.route("/health", methods=["GET"])
def health():
    """
    Health check endpoint.

    Reports whether the backend answers at all; the app itself is
    healthy whenever it can serve this request.
    """
    api_client = current_app.config.get("API_CLIENT")
    backend_ok = bool(api_client and api_client.ping())
    if not backend_ok:
        logger.warning("Health check: backend not reachable")

    return jsonify({
        "status": "healthy" if backend_ok else "degraded",
        "backend": "reachable" if backend_ok else "unreachable",
        "api_base_url": current_app.config.get("API_BASE_URL"),
    })
