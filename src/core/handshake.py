"""
Webhook subscription handshake.

Before sending real deliveries, the source sends a one-time request carrying
a secret in a header. The endpoint proves ownership by echoing it back.
"""

import logging

from src.core.settings import WebhookSettings

logger = logging.getLogger(__name__)


def get_handshake_token(request, settings: WebhookSettings):
    """Return the handshake token from the request headers, if any."""
    token = request.headers.get(settings.handshake_header)
    if token and token.strip():
        return token.strip()
    return None


def is_handshake(request, settings: WebhookSettings) -> bool:
    """A request is a handshake iff it carries the token header. The body is ignored."""
    return get_handshake_token(request, settings) is not None


def respond_handshake(request, settings: WebhookSettings):
    """Echo the token back in the response headers."""
    token = get_handshake_token(request, settings)
    logger.info("Answering webhook handshake")
    return "", 200, {settings.handshake_header: token}
