"""
Full-collection replacement, in two explicit phases.

1. delete_all: page through the collection in chunks and batch-delete each page
2. write_all: batch-insert the new documents in chunks of the same size

Neither phase is transactional across chunks. If a run dies between chunks,
the collection keeps whatever mix of old and new documents was committed.
"""

import math
import time
from typing import Callable, Sequence

from loguru import logger
from tqdm import tqdm

from jobsync.config import StorageConfig
from jobsync.contexts.scraping.schema import JobPosting
from jobsync.contexts.storage.database import DocumentStore
from jobsync.utils.helpers import chunked


class CollectionSynchronizer:
    """Replaces the contents of one collection with freshly scraped postings."""

    def __init__(
        self,
        store: DocumentStore,
        config: StorageConfig,
        sleep: Callable[[float], None] = time.sleep,
        show_progress: bool = False,
    ):
        self.store = store
        self.config = config
        self.sleep = sleep
        self.show_progress = show_progress

    @property
    def chunk_size(self) -> int:
        return self.config.batch_chunk

    def delete_all(self, collection: str) -> int:
        """
        Delete every document in ``collection``, one page at a time.

        Stops at the first page read that returns no documents.

        Returns:
            Number of documents deleted
        """
        deleted = 0
        with tqdm(desc=f"Deleting {collection}", unit="doc", disable=not self.show_progress) as progress:
            while True:
                document_ids = self.store.fetch_document_ids(collection, limit=self.chunk_size)
                if not document_ids:
                    break

                self.store.delete_documents(collection, document_ids)
                deleted += len(document_ids)
                progress.update(len(document_ids))
                logger.debug(f"Deleted {len(document_ids)} documents from {collection} ({deleted} total)")

                # Be polite to the store between commits
                self.sleep(self.config.chunk_pause)

        return deleted

    def write_all(self, collection: str, postings: Sequence[JobPosting]) -> int:
        """
        Insert ``postings`` into ``collection`` in chunk-sized atomic batches.

        Returns:
            Number of documents written
        """
        scraped_at = self.store.server_timestamp()
        n_batches = math.ceil(len(postings) / self.chunk_size)

        written = 0
        batches = chunked(postings, self.chunk_size)
        progress = tqdm(batches, total=n_batches, desc=f"Writing {collection}", unit="batch", disable=not self.show_progress)
        for chunk in progress:
            self.store.insert_documents(collection, [posting.to_document(scraped_at) for posting in chunk])
            written += len(chunk)
            logger.debug(f"Wrote {len(chunk)} documents to {collection} ({written}/{len(postings)})")

        return written
