"""
Error types for webhook ingestion.
Each error carries the HTTP status the function adapter should answer with.
"""


class WebhookError(Exception):
    """Base class for errors that end a webhook request."""

    status_code = 500
    error = "Internal Server Error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.error)
        self.message = message or self.error


class MalformedPayload(WebhookError):
    """The delivery body is not a recognized event envelope."""

    status_code = 400
    error = "Malformed Payload"


class MethodNotAllowed(WebhookError):
    """Deliveries must be POSTed."""

    status_code = 405
    error = "Method Not Allowed"


class DispatchStoreError(WebhookError):
    """
    The dispatch record store could not be written.

    The whole delivery must be retried by the source; insert-if-absent keeps
    the retry from triggering processing twice.
    """

    status_code = 500
    error = "Dispatch Store Unavailable"
