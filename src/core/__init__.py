from .settings import WebhookSettings
from .extractor import extract
from .event_filter import EventFilter
from .dispatcher import DispatchTrigger
from .ingestion import WebhookProcessor

__all__ = ["WebhookSettings", "extract", "EventFilter", "DispatchTrigger", "WebhookProcessor"]
