"""
Firestore-backed DocumentStore.

Uses the firebase-admin SDK with a service-account certificate taken from
the run configuration.
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Sequence

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core import exceptions as google_exceptions

from jobsync.config import SyncConfig
from jobsync.contexts.storage.database import DocumentStore
from jobsync.exceptions import ConfigError, SyncError

APP_NAME = "jobsync"


@contextmanager
def _store_errors(action: str):
    """Re-raise Google API failures as SyncError."""
    try:
        yield
    except google_exceptions.GoogleAPIError as e:
        raise SyncError(f"Firestore {action} failed: {e}") from e


class FirestoreStore(DocumentStore):
    """Firestore implementation of DocumentStore."""

    def __init__(self, client):
        self.client = client

    @classmethod
    def from_config(cls, config: SyncConfig) -> "FirestoreStore":
        """
        Initialize a named firebase app from the configured service account.

        Raises:
            ConfigError: If the service-account data is rejected
        """
        try:
            app = firebase_admin.get_app(APP_NAME)
        except ValueError:
            try:
                certificate = credentials.Certificate(dict(config.credentials))
            except (ValueError, KeyError) as e:
                raise ConfigError(f"Service account credentials are invalid: {e}") from e
            app = firebase_admin.initialize_app(certificate, name=APP_NAME)
        return cls(firestore.client(app))

    def fetch_document_ids(self, collection: str, limit: int) -> List[str]:
        with _store_errors(f"read of {collection}"):
            snapshots = self.client.collection(collection).limit(limit).get()
        return [snapshot.id for snapshot in snapshots]

    def delete_documents(self, collection: str, document_ids: Sequence[str]) -> None:
        collection_ref = self.client.collection(collection)
        batch = self.client.batch()
        for document_id in document_ids:
            batch.delete(collection_ref.document(document_id))
        with _store_errors(f"batch delete in {collection}"):
            batch.commit()

    def insert_documents(self, collection: str, documents: Sequence[Dict[str, Any]]) -> None:
        collection_ref = self.client.collection(collection)
        batch = self.client.batch()
        for document in documents:
            # document() without an id lets Firestore generate one
            batch.set(collection_ref.document(), document)
        with _store_errors(f"batch write to {collection}"):
            batch.commit()

    def merge_document(self, path: str, data: Dict[str, Any]) -> None:
        with _store_errors(f"merge into {path}"):
            self.client.document(path).set(data, merge=True)

    def server_timestamp(self) -> Any:
        return firestore.SERVER_TIMESTAMP
