"""
Relevance filter for resource events.
"""

from src.core.models import ResourceEvent, ResourceType, EventAction
from src.core.settings import WebhookSettings


def _normalize(value: str) -> str:
    return value.strip().casefold()


class EventFilter:
    """Selects task events whose status changed to the configured target."""

    def __init__(self, settings: WebhookSettings):
        self.target_status = _normalize(settings.target_status)
        self.status_field = settings.status_field

    def is_relevant(self, event: ResourceEvent) -> bool:
        if event.resource_type != ResourceType.TASK:
            return False
        if event.action != EventAction.CHANGED:
            return False
        if event.new_status is None:
            return False

        # Sources that name the changed field must be reporting the status field
        if event.changed_field and self.status_field:
            if _normalize(event.changed_field) != _normalize(self.status_field):
                return False

        return _normalize(event.new_status) == self.target_status
