"""
Delivery acknowledgement.
"""

from collections import Counter
from datetime import datetime, timezone
from typing import Iterable

from src.core.models import DispatchOutcome, DispatchStatus


def acknowledge(outcomes: Iterable[DispatchOutcome]):
    """
    Build the success response for a validated delivery.

    Always answers 200 so the source doesn't redeliver because of slow or
    failing downstream processing.
    """
    counts = Counter(outcome.status for outcome in outcomes)

    return {
        "message": "Webhook received",
        "received": True,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "events": {
            "triggered": counts[DispatchStatus.TRIGGERED],
            "deduplicated": counts[DispatchStatus.DEDUPLICATED],
            "deferred": counts[DispatchStatus.DEFERRED],
        },
    }, 200
