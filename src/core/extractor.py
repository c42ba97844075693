"""
Event extraction from delivery envelopes.
Unpacks zero or more resource events, skipping descriptors that can't be read.
"""

import json
import hashlib
import logging
from typing import Iterator, Optional

from src.core.models import DeliveryEnvelope, ResourceEvent, ResourceType, EventAction

logger = logging.getLogger(__name__)


class EventStream:
    """Lazy, restartable sequence of events from one envelope."""

    def __init__(self, envelope: DeliveryEnvelope):
        self.envelope = envelope

    def __iter__(self) -> Iterator[ResourceEvent]:
        for index, descriptor in enumerate(self.envelope.body.get("events") or []):
            event = parse_event(descriptor)
            if event is None:
                logger.debug(f"Skipping unreadable event descriptor at index {index}")
                continue
            yield event


def extract(envelope: DeliveryEnvelope) -> EventStream:
    """Extract resource events from an envelope, in delivery order."""
    return EventStream(envelope)


def parse_event(descriptor) -> Optional[ResourceEvent]:
    """
    Build a ResourceEvent from a raw descriptor.

    Returns None when the descriptor lacks a resource type or identifier.
    """
    if not isinstance(descriptor, dict):
        return None

    resource = descriptor.get("resource")
    if not isinstance(resource, dict):
        return None

    resource_type = resource.get("resource_type")
    resource_id = resource.get("gid")
    if not resource_type or resource_id is None or resource_id == "":
        return None

    change = descriptor.get("change")
    if not isinstance(change, dict):
        change = {}

    return ResourceEvent(
        resource_id=str(resource_id),
        resource_type=ResourceType.parse(resource_type),
        action=EventAction.parse(descriptor.get("action")),
        new_status=_new_status(descriptor, change),
        changed_field=_string_or_none(change.get("field")),
        created_at=_string_or_none(descriptor.get("created_at")),
        fingerprint=fingerprint(descriptor),
    )


def fingerprint(descriptor: dict) -> str:
    """Content hash identifying a descriptor across redeliveries."""
    canonical = json.dumps(descriptor, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def _string_or_none(value) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def _new_status(descriptor: dict, change: dict) -> Optional[str]:
    status = descriptor.get("new_status")
    if isinstance(status, str):
        return status

    new_value = change.get("new_value")
    if isinstance(new_value, str):
        return new_value
    if isinstance(new_value, dict):
        if isinstance(new_value.get("name"), str):
            return new_value["name"]
        enum_value = new_value.get("enum_value")
        if isinstance(enum_value, dict) and isinstance(enum_value.get("name"), str):
            return enum_value["name"]

    return None
