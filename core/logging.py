"""
Unified Logging Configuration

This module sets up a centralized logging system for the entire application.
All modules should import and use the logger from this module instead of
using print() statements.

Usage:
    from core.logging import logger

    logger.debug("Detailed debugging information")
    logger.info("General informational messages")
    logger.warning("Warning messages for potentially harmful situations")
    logger.error("Error messages for serious problems")

Log Levels (from most to least verbose):
    DEBUG    - Detailed diagnostic information (e.g., "GET https://brapi.dev/... | Status: 200")
    INFO     - General informational messages (e.g., "Refresh pass finished")
    WARNING  - Upstream fetch failures (e.g., "Quote page fetch failed for ITSA4")
    ERROR    - Unexpected errors that don't crash the app (e.g., "Update failed for IVV")
    CRITICAL - Severe errors that may crash

Configuration:
    Log level is controlled by the LOG_LEVEL setting in .env file.
"""

import logging
import sys
from typing import Optional

from core.config import settings


APP_LOGGER_NAME = "heatmap"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s %(message)s"

# Libraries that log every request at INFO/DEBUG
NOISY_LOGGERS = ("aiohttp.access", "urllib3", "httpx")


def setup_logging(log_level: str = "INFO", log_format: Optional[str] = None) -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string (uses LOG_FORMAT if None)

    Returns:
        logging.Logger: Configured logger instance

    Example:
        >>> logger = setup_logging(log_level="DEBUG")
        >>> logger.info("Application started")
        2026-10-19 12:00:00 [INFO] heatmap Application started
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format=log_format or LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True
    )

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logger = logging.getLogger(APP_LOGGER_NAME)
    logger.setLevel(level)
    return logger


# ============================================
# Initialize Logger with Settings
# ============================================

logger = setup_logging(log_level=settings.log_level)


# ============================================
# Convenience Functions
# ============================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child of the application logger for a specific module.

    Example:
        from core.logging import get_logger
        logger = get_logger(__name__)  # Creates "heatmap.sources.brapi"
    """
    return logging.getLogger(f"{APP_LOGGER_NAME}.{name}")


# ============================================
# Log Helper Functions
# ============================================

def log_api_request(source: str, url: str, params: dict = None) -> None:
    """
    Log an outbound request with consistent formatting.

    Args:
        source: Upstream source name (e.g., "brapi")
        url: Requested URL
        params: Query parameters (optional). Values of "token" are masked.

    Example:
        >>> log_api_request("brapi", "https://brapi.dev/api/quote/ITSA4", {"token": "abc"})
        [DEBUG] API Request: brapi https://brapi.dev/api/quote/ITSA4 | Params: {'token': '***'}
    """
    if params:
        shown = {k: ("***" if k == "token" else v) for k, v in params.items()}
        logger.debug(f"API Request: {source} {url} | Params: {shown}")
    else:
        logger.debug(f"API Request: {source} {url}")


def log_api_response(source: str, url: str, status: int, response_time: float = None) -> None:
    """
    Log an upstream response with status and timing information.

    Example:
        >>> log_api_response("bcb", "https://api.bcb.gov.br/...", 200, 0.342)
        [DEBUG] API Response: bcb https://api.bcb.gov.br/... | Status: 200 | Time: 0.342s
    """
    time_str = f" | Time: {response_time:.3f}s" if response_time else ""
    logger.debug(f"API Response: {source} {url} | Status: {status}{time_str}")


logger.debug("Logging system initialized")
