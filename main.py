"""
Cloud Functions entry points.
This file exposes the function handlers for Google Cloud Functions deployment.
"""

import logging

# Configure logging
logging.basicConfig(level=logging.INFO)

# Import the HTTP handlers from our functions modules
from src.functions.webhook import asana_webhook
from src.functions.diagnostics import hello_world, test_firestore, health_check

# Export all functions for Cloud Functions
__all__ = [
    'asana_webhook',
    'hello_world',
    'test_firestore',
    'health_check',
]
