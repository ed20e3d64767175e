"""
Centralized logging configuration for OrderDesk.

This module provides request-aware logging: every record carries the id
and path of the HTTP request that produced it, so the backend calls made
while serving one page can be followed in the log.

Features:
    - Automatic request id and path in all log messages
    - Console output (always enabled)
    - Rotating file logs (optional, for production)
    - Separate error log for ERROR/CRITICAL messages
    - Helper function for getting loggers with consistent naming

Log Format:
    2025-12-03 10:15:30 [INFO    ] [-       ] order_desk.app - Starting application
    2025-12-03 10:15:31 [DEBUG   ] [3f9c1a2b] order_desk.core.api_client - GET /agent/orders
    2025-12-03 10:15:31 [INFO    ] [3f9c1a2b] order_desk.routes.orders - Discount updated

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes request context automatically")

Never log bearer tokens or passwords.
"""

import logging
import sys
import uuid
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from flask import g, has_request_context, request


APP_LOGGER_NAME = "order_desk"


# =============================================================================
# REQUEST CONTEXT FILTER
# =============================================================================

class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds request context to all log records.

    This filter adds two attributes to each log record:
        - request_id: Short id of the current request ("-" outside requests)
        - request_path: Path of the current request ("" outside requests)
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if has_request_context():
            if "request_id" not in g:
                g.request_id = uuid.uuid4().hex[:8]
            record.request_id = g.request_id
            record.request_path = request.path
        else:
            record.request_id = "-"
            record.request_path = ""

        # Always allow the record through (we're adding context, not filtering)
        return True


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with request context.

    This sets up:
    1. Console handler (always enabled) - for immediate feedback
    2. Rotating file handler (optional) - for persistent logs
    3. Error file handler (optional) - for ERROR/CRITICAL only
    4. Request context filter - adds request id to all messages

    Args:
        app_name: Name of the root logger (default: "order_desk")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Remove any existing handlers (allows re-configuration)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(request_id)-8s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    # Files also record the request path
    file_formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)-8s] [%(request_id)-8s] %(request_path)s %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    context_filter = RequestContextFilter()

    # ---------------------------------------------------------------------
    # Console Handler (always enabled)
    # ---------------------------------------------------------------------
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    console_handler.addFilter(context_filter)
    logger.addHandler(console_handler)

    # ---------------------------------------------------------------------
    # File Handlers (optional)
    # ---------------------------------------------------------------------
    if enable_file_logging:
        if log_dir is None:
            log_dir = Path(__file__).parent / "logs"

        log_dir.mkdir(parents=True, exist_ok=True)

        # Main application log (all levels)
        app_log_file = log_dir / f"{app_name}.log"
        file_handler = RotatingFileHandler(
            filename=app_log_file,
            maxBytes=10 * 1024 * 1024,  # 10 MB per file
            backupCount=5,
            encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(file_formatter)
        file_handler.addFilter(context_filter)
        logger.addHandler(file_handler)

        # Error log (ERROR and CRITICAL only)
        error_log_file = log_dir / f"{app_name}_error.log"
        error_handler = RotatingFileHandler(
            filename=error_log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8"
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(file_formatter)
        error_handler.addFilter(context_filter)
        logger.addHandler(error_handler)

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger under "order_desk", e.g. "order_desk.services.order_service"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"

    return logging.getLogger(name)
