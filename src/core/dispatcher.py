"""
Dispatch of matched events to downstream processing.

Each distinct event occurrence is dispatched at most once. A DispatchRecord is
inserted with an atomic insert-if-absent before processing is triggered, so a
redelivered envelope finds the record already present and is deduplicated.
"""

import json
import hashlib
import logging
from datetime import datetime, timezone
from typing import Optional

from src.core.models import DispatchOutcome, DispatchRecord, ResourceEvent
from src.core.settings import WebhookSettings

logger = logging.getLogger(__name__)


class DispatchTrigger:
    """Triggers downstream processing for matched events, once per occurrence."""

    def __init__(self, store, processing_trigger, settings: WebhookSettings):
        """
        Args:
            store: Dispatch record store exposing insert_if_absent(record) -> bool
            processing_trigger: Downstream action exposing trigger(event, timeout=None)
            settings: Webhook settings
        """
        self.store = store
        self.processing_trigger = processing_trigger
        self.settings = settings

    def dispatch_key(self, event: ResourceEvent) -> str:
        """
        Build the composite dedup key for an event occurrence.

        The occurrence is identified by the source's event timestamp when it
        sends one, otherwise by a hash of the descriptor content. Arrival time
        is never part of the key, so a redelivery always maps to the same key.
        """
        occurrence = event.created_at or event.fingerprint
        if not occurrence:
            canonical = json.dumps(event.to_dict(), sort_keys=True)
            occurrence = hashlib.sha256(canonical.encode("utf-8")).hexdigest()

        return f"{event.resource_id}:{event.action.value}:{event.new_status or ''}:{occurrence}"

    def dispatch(
        self,
        event: ResourceEvent,
        timeout: Optional[float] = None,
    ) -> DispatchOutcome:
        """
        Dispatch one matched event.

        Args:
            event: The matched event
            timeout: Remaining time budget for the downstream call, in seconds

        Returns:
            DispatchOutcome: triggered, deduplicated, or failed if the store errored
        """
        now = datetime.now(timezone.utc)
        key = self.dispatch_key(event)
        record = DispatchRecord.for_event(
            key, event, now=now, retention_days=self.settings.retention_days
        )

        try:
            inserted = self.store.insert_if_absent(record)
        except Exception as e:
            logger.error(f"Dispatch record insert failed for {key}: {e}")
            return DispatchOutcome.failed(event, key, str(e) or type(e).__name__)

        if not inserted:
            logger.info(f"Event already dispatched, skipping: {key}")
            return DispatchOutcome.deduplicated(event, key)

        # Downstream failures are retried by the downstream, not by redelivery
        try:
            self.processing_trigger.trigger(event, timeout=timeout)
            logger.info(f"Triggered processing for task {event.resource_id}")
        except Exception:
            logger.exception(f"Processing trigger failed for task {event.resource_id}")

        return DispatchOutcome.triggered(event, key)
