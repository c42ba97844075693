from .firestore_client import FirestoreClient
from .processing_trigger import build_processing_trigger

__all__ = ["FirestoreClient", "build_processing_trigger"]
