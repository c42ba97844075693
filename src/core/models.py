"""
Data models for webhook deliveries, resource events and dispatch records.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional


class ResourceType(str, Enum):
    TASK = "task"
    OTHER = "other"

    @classmethod
    def parse(cls, value) -> "ResourceType":
        return cls.TASK if value == cls.TASK.value else cls.OTHER


class EventAction(str, Enum):
    CHANGED = "changed"
    ADDED = "added"
    REMOVED = "removed"
    UNDEFINED = "undefined"

    @classmethod
    def parse(cls, value) -> "EventAction":
        for action in cls:
            if action.value == value:
                return action
        return cls.UNDEFINED


class DispatchStatus(str, Enum):
    TRIGGERED = "triggered"
    DEDUPLICATED = "deduplicated"
    FAILED = "failed"
    DEFERRED = "deferred"  # Request time budget ran out before dispatch


@dataclass
class DeliveryEnvelope:
    """One inbound webhook call. Never persisted."""
    body: dict = field(default_factory=dict)
    received_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    signature: Optional[str] = None  # Stored as received, not verified
    handshake: bool = False


@dataclass(frozen=True)
class ResourceEvent:
    """A single change notification unpacked from an envelope."""
    resource_id: str
    resource_type: ResourceType
    action: EventAction
    new_status: Optional[str] = None
    changed_field: Optional[str] = None
    created_at: Optional[str] = None  # Source-provided event timestamp
    fingerprint: Optional[str] = None  # sha256 of the raw descriptor

    def to_dict(self) -> dict:
        data = {
            "resource_id": self.resource_id,
            "resource_type": self.resource_type.value,
            "action": self.action.value,
            "new_status": self.new_status,
            "changed_field": self.changed_field,
            "created_at": self.created_at,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class DispatchRecord:
    """Durable marker that an event occurrence was already dispatched."""
    key: str
    resource_id: str
    action: str
    dispatched_at: datetime
    expires_at: Optional[datetime] = None

    @classmethod
    def for_event(
        cls,
        key: str,
        event: ResourceEvent,
        now: Optional[datetime] = None,
        retention_days: Optional[int] = None,
    ) -> "DispatchRecord":
        now = now or datetime.now(timezone.utc)
        expires_at = now + timedelta(days=retention_days) if retention_days else None
        return cls(
            key=key,
            resource_id=event.resource_id,
            action=event.action.value,
            dispatched_at=now,
            expires_at=expires_at,
        )

    def to_dict(self) -> dict:
        data = {
            "key": self.key,
            "resource_id": self.resource_id,
            "action": self.action,
            "dispatched_at": self.dispatched_at,
            "expires_at": self.expires_at,
        }
        return {k: v for k, v in data.items() if v is not None}


@dataclass(frozen=True)
class DispatchOutcome:
    """Result of dispatching one matched event."""
    status: DispatchStatus
    event: ResourceEvent
    key: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def triggered(cls, event: ResourceEvent, key: str) -> "DispatchOutcome":
        return cls(DispatchStatus.TRIGGERED, event, key)

    @classmethod
    def deduplicated(cls, event: ResourceEvent, key: str) -> "DispatchOutcome":
        return cls(DispatchStatus.DEDUPLICATED, event, key)

    @classmethod
    def failed(cls, event: ResourceEvent, key: str, reason: str) -> "DispatchOutcome":
        return cls(DispatchStatus.FAILED, event, key, reason)

    @classmethod
    def deferred(cls, event: ResourceEvent, reason: str) -> "DispatchOutcome":
        return cls(DispatchStatus.DEFERRED, event, reason=reason)
