"""
Shared response helpers for the HTTP functions.
"""

import logging

from src.core.errors import WebhookError

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
}

PREFLIGHT_HEADERS = {
    **CORS_HEADERS,
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_response(error: WebhookError):
    """Map a webhook error to its HTTP response."""
    if error.status_code >= 500:
        logger.error(f"{error.error}: {error.message}")
    else:
        logger.warning(f"{error.error}: {error.message}")

    return {"error": error.error, "message": error.message}, error.status_code, CORS_HEADERS
