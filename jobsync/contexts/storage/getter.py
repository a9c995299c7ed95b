from typing import Dict, Type

from jobsync.config import SyncConfig
from jobsync.contexts.storage.database import DocumentStore
from jobsync.contexts.storage.firestore import FirestoreStore
from jobsync.exceptions import ConfigError

# Supported store backends
backend_class_map: Dict[str, Type[DocumentStore]] = {"firestore": FirestoreStore}
ALLOWED_BACKENDS = list(backend_class_map.keys())


def get_document_store(config: SyncConfig) -> DocumentStore:
    """
    Factory function to create the DocumentStore named by ``config.storage.backend``.

    Args:
        config: Run configuration including credentials

    Returns:
        DocumentStore implementation for the configured backend

    Raises:
        ConfigError: If the backend is unsupported
    """
    backend = config.storage.backend.lower()

    if backend in ALLOWED_BACKENDS:
        return backend_class_map[backend].from_config(config)
    else:
        raise ConfigError(
            f"Unsupported store backend: '{config.storage.backend}'. "
            f"Supported backends: {', '.join(ALLOWED_BACKENDS)}"
        )
