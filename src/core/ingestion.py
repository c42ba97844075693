"""
Webhook ingestion pipeline.
Runs extraction, filtering and dispatch for one validated delivery.
"""

import time
import logging
from typing import Callable

from src.core.dispatcher import DispatchTrigger
from src.core.errors import DispatchStoreError
from src.core.event_filter import EventFilter
from src.core.extractor import extract
from src.core.models import DeliveryEnvelope, DispatchOutcome, DispatchStatus, ResourceType
from src.core.settings import WebhookSettings

logger = logging.getLogger(__name__)


class WebhookProcessor:
    """Processes the events of one delivery within the request time budget."""

    def __init__(
        self,
        settings: WebhookSettings,
        store,
        processing_trigger,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings
        self.event_filter = EventFilter(settings)
        self.dispatcher = DispatchTrigger(store, processing_trigger, settings)
        self.clock = clock

    def process(self, envelope: DeliveryEnvelope) -> list[DispatchOutcome]:
        """
        Dispatch every relevant event in the envelope, in delivery order.

        Matched events left when the time budget runs out are deferred
        rather than dispatched.

        Raises:
            DispatchStoreError: If the dispatch record store fails
        """
        deadline = self.clock() + self.settings.request_timeout_seconds
        outcomes = []

        for event in extract(envelope):
            if event.resource_type == ResourceType.TASK:
                logger.info(
                    f"Task event detected: task={event.resource_id} "
                    f"action={event.action.value} status={event.new_status}"
                )

            if not self.event_filter.is_relevant(event):
                continue

            remaining = deadline - self.clock()
            if remaining <= 0:
                logger.warning(
                    f"Request time budget exhausted, deferring task {event.resource_id}"
                )
                outcomes.append(DispatchOutcome.deferred(event, "time budget exhausted"))
                continue

            outcome = self.dispatcher.dispatch(event, timeout=remaining)
            if outcome.status == DispatchStatus.FAILED:
                raise DispatchStoreError(outcome.reason)
            outcomes.append(outcome)

        return outcomes
