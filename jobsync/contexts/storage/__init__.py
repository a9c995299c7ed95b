"""
Data storage domain.

Handles persistence of postings and run metadata to the document store.

Public API exports only the interfaces needed by other contexts.
Vendor clients remain private to their implementations.
"""

from jobsync.contexts.storage.database import DocumentStore
from jobsync.contexts.storage.getter import get_document_store
from jobsync.contexts.storage.sync import CollectionSynchronizer

__all__ = [
    # Factory function (primary interface)
    "get_document_store",
    # Generic interfaces
    "DocumentStore",
    "CollectionSynchronizer",
]
