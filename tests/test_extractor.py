"""Tests for event extraction."""

from src.core.extractor import extract, parse_event
from src.core.models import DeliveryEnvelope, EventAction, ResourceType


def task_event(gid, action="changed", **extra):
    return {"resource": {"gid": gid, "resource_type": "task"}, "action": action, **extra}


class TestExtract:
    """Tests for extract()."""

    def test_missing_events_field(self):
        """Test an envelope without events yields nothing."""
        assert list(extract(DeliveryEnvelope(body={}))) == []

    def test_drops_malformed_and_preserves_order(self):
        """Test malformed descriptors are skipped and order is kept."""
        envelope = DeliveryEnvelope(body={"events": [
            task_event("1"),
            {"action": "changed"},
            task_event("2", action="added"),
            {"resource": {"gid": "3"}, "action": "changed"},
            "not a descriptor",
            {"resource": {"resource_type": "task"}},
            task_event("4", action="removed"),
        ]})

        events = list(extract(envelope))

        assert [e.resource_id for e in events] == ["1", "2", "4"]
        assert [e.action for e in events] == [
            EventAction.CHANGED, EventAction.ADDED, EventAction.REMOVED,
        ]

    def test_stream_is_restartable(self):
        """Test iterating the stream twice yields the same events."""
        stream = extract(DeliveryEnvelope(body={"events": [task_event("1"), task_event("2")]}))
        assert list(stream) == list(stream)

    def test_stream_is_lazy(self):
        """Test descriptors are parsed as the stream is consumed."""
        stream = extract(DeliveryEnvelope(body={"events": [task_event("1"), task_event("2")]}))
        iterator = iter(stream)
        assert next(iterator).resource_id == "1"
        assert next(iterator).resource_id == "2"


class TestParseEvent:
    """Tests for parse_event()."""

    def test_other_resource_type(self):
        """Test non-task resources map to OTHER."""
        event = parse_event({"resource": {"gid": "9", "resource_type": "project"}, "action": "changed"})
        assert event.resource_type == ResourceType.OTHER

    def test_unknown_action(self):
        """Test unknown or missing actions map to UNDEFINED."""
        assert parse_event(task_event("1", action="deleted")).action == EventAction.UNDEFINED
        event = parse_event({"resource": {"gid": "1", "resource_type": "task"}})
        assert event.action == EventAction.UNDEFINED

    def test_numeric_gid_becomes_string(self):
        """Test resource identifiers are kept as strings."""
        event = parse_event({"resource": {"gid": 123, "resource_type": "task"}, "action": "changed"})
        assert event.resource_id == "123"

    def test_new_status_top_level(self):
        """Test new_status is read from the descriptor."""
        event = parse_event(task_event("1", new_status="in analysis"))
        assert event.new_status == "in analysis"

    def test_new_status_from_change(self):
        """Test new_status falls back to the change's new value."""
        event = parse_event(task_event(
            "1",
            change={"field": "status", "action": "changed", "new_value": {"name": "in analysis"}},
        ))
        assert event.new_status == "in analysis"
        assert event.changed_field == "status"

    def test_new_status_from_enum_value(self):
        """Test enum custom field values are unwrapped."""
        event = parse_event(task_event(
            "1",
            change={"field": "custom_fields", "new_value": {"enum_value": {"name": "in analysis"}}},
        ))
        assert event.new_status == "in analysis"

    def test_no_status(self):
        """Test events without a status change have no new_status."""
        assert parse_event(task_event("1")).new_status is None

    def test_non_string_changed_field_dropped(self):
        """Test a changed field that isn't a string is ignored."""
        event = parse_event(task_event("1", new_status="in analysis", change={"field": 5}))
        assert event is not None
        assert event.changed_field is None

    def test_non_string_created_at_dropped(self):
        """Test a timestamp that isn't a string is ignored."""
        assert parse_event(task_event("1", created_at={"at": 1})).created_at is None

    def test_fingerprint_matches_for_identical_descriptors(self):
        """Test the same descriptor content always hashes the same."""
        first = parse_event(task_event("1", new_status="in analysis"))
        second = parse_event({"new_status": "in analysis", "action": "changed",
                              "resource": {"resource_type": "task", "gid": "1"}})
        assert first.fingerprint == second.fingerprint

    def test_fingerprint_differs_for_different_content(self):
        """Test different descriptors hash differently."""
        first = parse_event(task_event("1", new_status="in analysis"))
        second = parse_event(task_event("1", new_status="in analysis", user={"gid": "7"}))
        assert first.fingerprint != second.fingerprint

    def test_created_at_kept(self):
        """Test the source's event timestamp is kept."""
        event = parse_event(task_event("1", created_at="2024-01-08T10:00:00.000Z"))
        assert event.created_at == "2024-01-08T10:00:00.000Z"
