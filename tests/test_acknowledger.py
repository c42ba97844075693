"""Tests for delivery acknowledgement."""

from src.core.acknowledger import acknowledge
from src.core.models import DispatchOutcome, EventAction, ResourceEvent, ResourceType


def make_event(resource_id):
    return ResourceEvent(
        resource_id=resource_id,
        resource_type=ResourceType.TASK,
        action=EventAction.CHANGED,
        new_status="in analysis",
    )


class TestAcknowledge:
    """Tests for acknowledge()."""

    def test_counts_outcomes(self):
        """Test outcomes are summarized by status."""
        body, status = acknowledge([
            DispatchOutcome.triggered(make_event("1"), "k1"),
            DispatchOutcome.triggered(make_event("2"), "k2"),
            DispatchOutcome.deduplicated(make_event("3"), "k3"),
            DispatchOutcome.deferred(make_event("4"), "time budget exhausted"),
        ])

        assert status == 200
        assert body["received"] is True
        assert body["events"] == {"triggered": 2, "deduplicated": 1, "deferred": 1}

    def test_no_outcomes(self):
        """Test an empty delivery is still acknowledged."""
        body, status = acknowledge([])

        assert status == 200
        assert body["events"] == {"triggered": 0, "deduplicated": 0, "deferred": 0}

    def test_accepts_generator(self):
        """Test outcomes can be any iterable."""
        outcomes = (DispatchOutcome.triggered(make_event(gid), gid) for gid in ["1", "2"])
        body, _ = acknowledge(outcomes)
        assert body["events"]["triggered"] == 2
