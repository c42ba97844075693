"""
Downstream processing triggers.
Invoked once for each task that moved into the target status.
"""

import logging
from typing import Optional

import httpx
from slack_sdk import WebClient

from src.core.models import ResourceEvent
from src.core.settings import WebhookSettings

logger = logging.getLogger(__name__)


class LoggingProcessingTrigger:
    """Only records matched events. Used when no downstream is configured."""

    def trigger(self, event: ResourceEvent, timeout: Optional[float] = None) -> None:
        logger.info(
            f"Task {event.resource_id} entered status '{event.new_status}' "
            "(no processing target configured)"
        )


class HttpProcessingTrigger:
    """Posts matched events to a processing service."""

    def __init__(self, url: str, timeout: float = 10.0, client: Optional[httpx.Client] = None):
        self.url = url
        self.timeout = timeout
        self.client = client or httpx.Client(
            timeout=timeout,
            headers={"User-Agent": "TaskWebhook/1.0"},
        )

    def trigger(self, event: ResourceEvent, timeout: Optional[float] = None) -> None:
        """
        Send the event to the processing service.

        Args:
            event: Matched event
            timeout: Remaining request budget; caps the configured timeout

        Raises:
            httpx.HTTPError: If the request fails or returns an error status
        """
        effective_timeout = self.timeout if timeout is None else min(self.timeout, timeout)
        response = self.client.post(
            self.url,
            json={"event": event.to_dict()},
            timeout=effective_timeout,
        )
        response.raise_for_status()


class SlackProcessingTrigger:
    """Announces matched events in a Slack channel."""

    def __init__(self, channel_id: str, token: Optional[str] = None, client: Optional[WebClient] = None):
        self.channel_id = channel_id
        self.client = client or WebClient(token=token)

    def trigger(self, event: ResourceEvent, timeout: Optional[float] = None) -> None:
        text = f"Task {event.resource_id} moved to *{event.new_status}*, starting analysis."
        self.client.chat_postMessage(
            channel=self.channel_id,
            text=text,
            blocks=[
                {
                    "type": "section",
                    "text": {"type": "mrkdwn", "text": text},
                },
            ],
        )


class CompositeProcessingTrigger:
    """Runs several triggers in order. Every trigger runs even if one fails."""

    def __init__(self, triggers: list):
        self.triggers = triggers

    def trigger(self, event: ResourceEvent, timeout: Optional[float] = None) -> None:
        errors = []
        for trigger in self.triggers:
            try:
                trigger.trigger(event, timeout=timeout)
            except Exception as e:
                logger.error(f"{type(trigger).__name__} failed for task {event.resource_id}: {e}")
                errors.append(e)
        if errors:
            raise errors[0]


def build_processing_trigger(settings: WebhookSettings):
    """Build the processing trigger described by the settings."""
    triggers = []
    if settings.processing_url:
        triggers.append(HttpProcessingTrigger(
            settings.processing_url,
            timeout=settings.processing_timeout_seconds,
        ))
    if settings.slack_channel_id and settings.slack_bot_token:
        triggers.append(SlackProcessingTrigger(
            settings.slack_channel_id,
            token=settings.slack_bot_token,
        ))

    if not triggers:
        return LoggingProcessingTrigger()
    if len(triggers) == 1:
        return triggers[0]
    return CompositeProcessingTrigger(triggers)
