"""
Process-wide settings for the webhook functions.
Built once at startup from config/webhook.yaml plus environment overrides,
then passed to the handlers that need them.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(__file__), "..", "..", "config", "webhook.yaml"
)


@dataclass(frozen=True)
class WebhookSettings:
    """Recognized configuration options."""
    target_status: str = "in analysis"
    status_field: Optional[str] = None
    request_timeout_seconds: float = 50.0
    handshake_header: str = "X-Hook-Secret"
    signature_header: str = "X-Hook-Signature"
    dispatch_collection: str = "dispatch_records"
    retention_days: int = 7
    processing_url: Optional[str] = None
    processing_timeout_seconds: float = 10.0
    slack_bot_token: Optional[str] = None
    slack_channel_id: Optional[str] = None
    project_id: Optional[str] = None

    @classmethod
    def from_dict(cls, config: dict) -> "WebhookSettings":
        """Build settings from the nested YAML layout."""
        asana = config.get("asana") or {}
        webhook = config.get("webhook") or {}
        dispatch = config.get("dispatch") or {}
        processing = config.get("processing") or {}
        defaults = cls()

        return cls(
            target_status=asana.get("target_status", defaults.target_status),
            status_field=asana.get("status_field", defaults.status_field) or None,
            request_timeout_seconds=float(
                webhook.get("request_timeout_seconds", defaults.request_timeout_seconds)
            ),
            handshake_header=webhook.get("handshake_header", defaults.handshake_header),
            signature_header=webhook.get("signature_header", defaults.signature_header),
            dispatch_collection=dispatch.get("collection", defaults.dispatch_collection),
            retention_days=int(dispatch.get("retention_days", defaults.retention_days)),
            processing_url=processing.get("url") or None,
            processing_timeout_seconds=float(
                processing.get("timeout_seconds", defaults.processing_timeout_seconds)
            ),
            slack_channel_id=processing.get("slack_channel_id") or None,
        )

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[dict] = None,
    ) -> "WebhookSettings":
        """
        Load settings from a YAML file and apply environment overrides.

        Args:
            config_path: Path to the YAML file (defaults to config/webhook.yaml)
            environ: Mapping to read overrides from (defaults to os.environ)

        Returns:
            WebhookSettings instance
        """
        config_path = config_path or DEFAULT_CONFIG_PATH
        environ = os.environ if environ is None else environ

        config = {}
        if os.path.exists(config_path):
            with open(config_path, "r") as f:
                config = yaml.safe_load(f) or {}
        else:
            logger.warning(f"Config file not found at {config_path}, using defaults")

        settings = cls.from_dict(config)
        return settings.with_overrides(environ)

    def with_overrides(self, environ: dict) -> "WebhookSettings":
        """Apply environment variable overrides."""
        values = dict(self.__dict__)

        string_options = {
            "ASANA_TARGET_STATUS": "target_status",
            "ASANA_STATUS_FIELD": "status_field",
            "WEBHOOK_HANDSHAKE_HEADER": "handshake_header",
            "WEBHOOK_SIGNATURE_HEADER": "signature_header",
            "DISPATCH_COLLECTION": "dispatch_collection",
            "PROCESSING_URL": "processing_url",
            "SLACK_BOT_TOKEN": "slack_bot_token",
            "SLACK_CHANNEL_ID": "slack_channel_id",
            "GOOGLE_CLOUD_PROJECT": "project_id",
        }
        for env_name, option in string_options.items():
            if env_name in environ:
                values[option] = environ[env_name] or None

        numeric_options = {
            "WEBHOOK_TIMEOUT_SECONDS": ("request_timeout_seconds", float),
            "PROCESSING_TIMEOUT_SECONDS": ("processing_timeout_seconds", float),
            "DISPATCH_RETENTION_DAYS": ("retention_days", int),
        }
        for env_name, (option, cast) in numeric_options.items():
            if environ.get(env_name):
                values[option] = cast(environ[env_name])

        if not values["target_status"]:
            raise ValueError("A target status must be configured")

        return WebhookSettings(**values)
