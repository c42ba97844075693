"""Shared fixtures for webhook tests."""

import pytest
from flask import Flask

from src.core.settings import WebhookSettings


class InMemoryDispatchStore:
    """Dispatch record store keeping records in a dict."""

    def __init__(self):
        self.records = {}

    def insert_if_absent(self, record) -> bool:
        if record.key in self.records:
            return False
        self.records[record.key] = record
        return True


class RecordingTrigger:
    """Processing trigger remembering the events it was called with."""

    def __init__(self, error=None):
        self.events = []
        self.timeouts = []
        self.error = error

    def trigger(self, event, timeout=None):
        self.events.append(event)
        self.timeouts.append(timeout)
        if self.error:
            raise self.error


@pytest.fixture
def settings():
    """Settings targeting the 'in analysis' status."""
    return WebhookSettings(target_status="in analysis", request_timeout_seconds=30)


@pytest.fixture
def store():
    return InMemoryDispatchStore()


@pytest.fixture
def trigger():
    return RecordingTrigger()


@pytest.fixture
def flask_app():
    """Flask app used to build request contexts for function calls."""
    return Flask(__name__)
