"""
Firestore client for webhook persistence.
Holds dispatch records for deduplication and backs the diagnostics functions.
"""

import os
import hashlib
import logging
from typing import Optional

from google.api_core import exceptions as google_exceptions
from google.cloud import firestore

from src.core.models import DispatchRecord

logger = logging.getLogger(__name__)


class FirestoreClient:
    """Client for all Firestore database operations."""

    def __init__(
        self,
        project_id: Optional[str] = None,
        dispatch_collection: str = "dispatch_records",
    ):
        """Initialize the Firestore client."""
        self.project_id = project_id or os.environ.get("GOOGLE_CLOUD_PROJECT")
        self.dispatch_collection = dispatch_collection
        self.db = firestore.Client(project=self.project_id)

    # ============ Dispatch Record Operations ============

    @staticmethod
    def document_id(key: str) -> str:
        """Document IDs can't contain slashes, so keys are hashed."""
        return hashlib.sha256(key.encode("utf-8")).hexdigest()

    def insert_if_absent(self, record: DispatchRecord) -> bool:
        """
        Atomically create a dispatch record unless one exists for its key.

        Returns:
            True if the record was created, False if it already existed

        Raises:
            google.api_core.exceptions.GoogleAPICallError: If the write fails
        """
        doc_ref = self.db.collection(self.dispatch_collection).document(
            self.document_id(record.key)
        )
        try:
            doc_ref.create(record.to_dict())
        except google_exceptions.AlreadyExists:
            return False
        return True

    # ============ Diagnostics ============

    def add_test_document(self, data: dict) -> tuple[str, Optional[dict]]:
        """Write a document to the test collection and read it back."""
        _, doc_ref = self.db.collection("test").add(data)
        saved = doc_ref.get()
        logger.info(f"Saved Firestore test document: {doc_ref.id}")
        return doc_ref.id, saved.to_dict()

    def write_health_probe(self) -> None:
        """Overwrite the health probe document with a server timestamp."""
        self.db.collection("health").document("test").set({
            "timestamp": firestore.SERVER_TIMESTAMP,
        })
