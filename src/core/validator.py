"""
Payload validation for webhook deliveries.
"""

import json
from typing import Union

from src.core.errors import MalformedPayload


def validate(raw_body: Union[bytes, str, None]) -> dict:
    """
    Confirm a delivery body is a recognized event envelope.

    Args:
        raw_body: Request body as received

    Returns:
        The parsed envelope body

    Raises:
        MalformedPayload: If the body is not a JSON object
    """
    if isinstance(raw_body, bytes):
        try:
            raw_body = raw_body.decode("utf-8")
        except UnicodeDecodeError:
            raise MalformedPayload("Body is not valid UTF-8")

    # Handshakes are answered before validation, so an empty body here is malformed
    if not raw_body or not raw_body.strip():
        raise MalformedPayload("Body is empty")

    try:
        body = json.loads(raw_body)
    except json.JSONDecodeError as e:
        raise MalformedPayload(f"Body is not valid JSON: {e.msg}")
    except (ValueError, RecursionError):
        raise MalformedPayload("Body is not valid JSON")

    if not isinstance(body, dict):
        raise MalformedPayload("Body must be a JSON object")

    events = body.get("events")
    if events is not None and not isinstance(events, list):
        raise MalformedPayload("'events' must be a list")

    return body
