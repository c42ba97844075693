"""
Cloud Functions for deployment checks: a hello-world probe, a Firestore
round-trip test and a health check.
"""

import os
import time
import logging
from datetime import datetime, timezone

import functions_framework
from google.cloud import firestore

from src.functions.responses import CORS_HEADERS
from src.integrations.firestore_client import FirestoreClient

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@functions_framework.http
def hello_world(request):
    """HTTP Cloud Function confirming the deployment is reachable."""
    logger.info(f"hello_world called with {request.method}")

    return {
        "message": "Cloud Functions are up and running!",
        "timestamp": _now(),
        "status": "success",
        "version": VERSION,
    }, 200, CORS_HEADERS


@functions_framework.http
def test_firestore(request):
    """
    HTTP Cloud Function testing a Firestore write and read.

    Stores a document describing the request, then reads it back.
    """
    try:
        db = FirestoreClient()

        doc_id, saved = db.add_test_document({
            "message": "Cloud Functions and Firestore integration test",
            "timestamp": firestore.SERVER_TIMESTAMP,
            "environment": os.environ.get("ENVIRONMENT", "development"),
            "request_info": {
                "method": request.method,
                "user_agent": request.headers.get("User-Agent"),
                "ip": request.remote_addr,
            },
        })

        return {
            "message": "Firestore integration succeeded",
            "document_id": doc_id,
            "saved_data": saved,
            "status": "success",
        }, 200, CORS_HEADERS

    except Exception as e:
        logger.exception("Firestore test failed")
        return {"error": "Firestore Error", "message": str(e)}, 500, CORS_HEADERS


@functions_framework.http
def health_check(request):
    """HTTP Cloud Function checking Firestore is writable."""
    try:
        db = FirestoreClient()
        start = time.monotonic()

        db.write_health_probe()

        response_ms = int((time.monotonic() - start) * 1000)

        return {
            "status": "healthy",
            "message": "All systems operational",
            "checks": {
                "functions": "ok",
                "firestore": "ok",
            },
            "performance": {
                "response_time": f"{response_ms}ms",
            },
            "timestamp": _now(),
        }, 200, CORS_HEADERS

    except Exception as e:
        logger.exception("Health check failed")
        return {
            "status": "unhealthy",
            "message": "A system check failed",
            "error": str(e),
            "timestamp": _now(),
        }, 500, CORS_HEADERS
