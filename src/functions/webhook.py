"""
Cloud Function receiving task-tracker webhooks.
Fires downstream processing when a task moves into the target status.
"""

import logging
from functools import lru_cache

import functions_framework

from src.core.acknowledger import acknowledge
from src.core.errors import MethodNotAllowed, WebhookError
from src.core.handshake import is_handshake, respond_handshake
from src.core.ingestion import WebhookProcessor
from src.core.models import DeliveryEnvelope
from src.core.settings import WebhookSettings
from src.core.validator import validate
from src.functions.responses import CORS_HEADERS, PREFLIGHT_HEADERS, error_response
from src.integrations.firestore_client import FirestoreClient
from src.integrations.processing_trigger import build_processing_trigger

logger = logging.getLogger(__name__)


class WebhookHandler:
    """Handles one webhook request at a time with injected collaborators."""

    def __init__(self, settings: WebhookSettings, store, processing_trigger):
        self.settings = settings
        self.processor = WebhookProcessor(settings, store, processing_trigger)

    def __call__(self, request):
        envelope = DeliveryEnvelope(
            signature=request.headers.get(self.settings.signature_header),
            handshake=is_handshake(request, self.settings),
        )

        # Handshakes may arrive with any method and an empty body
        if envelope.handshake:
            body, status, headers = respond_handshake(request, self.settings)
            return body, status, {**CORS_HEADERS, **headers}

        if request.method == "OPTIONS":
            return "", 204, PREFLIGHT_HEADERS

        try:
            if request.method != "POST":
                raise MethodNotAllowed(f"{request.method} is not supported")

            envelope.body = validate(request.get_data())
            logger.info(
                f"Webhook delivery received with {len(envelope.body.get('events') or [])} event(s)"
            )

            outcomes = self.processor.process(envelope)
        except WebhookError as e:
            return error_response(e)
        except Exception as e:
            logger.exception("Unexpected error handling webhook")
            return error_response(WebhookError(str(e)))

        body, status = acknowledge(outcomes)
        return body, status, CORS_HEADERS


@lru_cache(maxsize=1)
def get_webhook_handler() -> WebhookHandler:
    """Build the handler once per process."""
    settings = WebhookSettings.load()
    store = FirestoreClient(
        project_id=settings.project_id,
        dispatch_collection=settings.dispatch_collection,
    )
    return WebhookHandler(settings, store, build_processing_trigger(settings))


@functions_framework.http
def asana_webhook(request):
    """
    HTTP Cloud Function receiving Asana webhook deliveries.

    Answers the subscription handshake, then dispatches tasks that moved
    into the target status.
    """
    return get_webhook_handler()(request)
