"""
Generic document store interface for jobsync.

Describes the small slice of a document database the sync needs, so the
synchronizer and reporter never touch a vendor client directly.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Sequence

from jobsync.config import SyncConfig


class DocumentStore(ABC):
    """
    Abstract base class for document store operations.

    Implementations raise SyncError when the backend rejects an operation.
    """

    @abstractmethod
    def fetch_document_ids(self, collection: str, limit: int) -> List[str]:
        """
        Read up to ``limit`` document ids from a collection.

        Returns:
            List of ids; empty when the collection is empty
        """
        pass

    @abstractmethod
    def delete_documents(self, collection: str, document_ids: Sequence[str]) -> None:
        """Delete the given documents as one atomic batch."""
        pass

    @abstractmethod
    def insert_documents(self, collection: str, documents: Sequence[Dict[str, Any]]) -> None:
        """Insert documents as one atomic batch; the store assigns ids."""
        pass

    @abstractmethod
    def merge_document(self, path: str, data: Dict[str, Any]) -> None:
        """Upsert a single named document, merging fields into any existing ones."""
        pass

    @abstractmethod
    def server_timestamp(self) -> Any:
        """Sentinel the store replaces with its own commit time."""
        pass

    @classmethod
    @abstractmethod
    def from_config(cls, config: SyncConfig) -> "DocumentStore":
        pass
