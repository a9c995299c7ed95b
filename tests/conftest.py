"""
Shared fixtures: an in-memory DocumentStore, a canned HTTP session, and
sample listing pages.
"""

import sys
from datetime import datetime, timezone

import pytest
import requests
from loguru import logger

from jobsync.config import StorageConfig, SyncConfig
from jobsync.contexts.storage.database import DocumentStore
from jobsync.exceptions import SyncError


class ServerTimestamp:
    def __repr__(self):
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = ServerTimestamp()


class FakeStore(DocumentStore):
    """
    In-memory DocumentStore that records every call.

    ``fail_on`` maps an operation name ("fetch", "delete", "insert", "merge")
    to the number of calls allowed to succeed before it raises SyncError.
    """

    def __init__(self, fail_on=None):
        self.collections = {}
        self.documents = {}
        self.calls = []
        self.fail_on = dict(fail_on or {})
        self._call_counts = {}
        self._next_id = 0

    @classmethod
    def from_config(cls, config):
        return cls()

    def seed(self, collection, n):
        docs = self.collections.setdefault(collection, {})
        for i in range(n):
            docs[f"old-{i}"] = {"title": f"Old job {i}"}

    def _check(self, op):
        count = self._call_counts.get(op, 0)
        self._call_counts[op] = count + 1
        if op in self.fail_on and count >= self.fail_on[op]:
            raise SyncError(f"simulated {op} failure")

    def fetch_document_ids(self, collection, limit):
        self._check("fetch")
        ids = list(self.collections.get(collection, {}))[:limit]
        self.calls.append(("fetch", collection, len(ids)))
        return ids

    def delete_documents(self, collection, document_ids):
        self._check("delete")
        docs = self.collections.get(collection, {})
        for document_id in document_ids:
            del docs[document_id]
        self.calls.append(("delete", collection, len(document_ids)))

    def insert_documents(self, collection, documents):
        self._check("insert")
        docs = self.collections.setdefault(collection, {})
        for document in documents:
            self._next_id += 1
            docs[f"doc-{self._next_id}"] = dict(document)
        self.calls.append(("insert", collection, len(documents)))

    def merge_document(self, path, data):
        self._check("merge")
        self.documents.setdefault(path, {}).update(data)
        self.calls.append(("merge", path, 1))

    def server_timestamp(self):
        return SERVER_TIMESTAMP

    def commit_sizes(self, op):
        return [size for name, _, size in self.calls if name == op]

    def ops(self):
        return [name for name, _, _ in self.calls]


class FakeSession:
    """Stands in for requests.Session; returns one canned response or raises."""

    def __init__(self, text="", status_code=200, exception=None):
        self.text = text
        self.status_code = status_code
        self.exception = exception
        self.calls = []

    def get(self, url, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers, "timeout": timeout})
        if self.exception is not None:
            raise self.exception
        response = requests.Response()
        response.status_code = self.status_code
        response._content = self.text.encode("utf-8")
        response.encoding = "utf-8"
        response.url = url
        return response


LISTING_PAGE = """
<html><body>
  <div class="results">
    <div class="job-listing-item">
      <a class="job-title" href="/job/1">  Forklift Operator  </a>
      <span class="location">Minneapolis, MN</span>
      <span class="pay">$21.00 / hr</span>
      <p class="description">Operate forklifts on second shift.</p>
    </div>
    <div class="job-listing">
      <a class="title" href="/job/2">Warehouse Associate</a>
    </div>
    <div class="job-item">
      <span class="job-title">Machine Operator</span>
      <span class="job-location">St. Paul, MN</span>
      <span class="salary">$19.50 / hr</span>
      <p class="summary">Run CNC equipment.</p>
    </div>
  </div>
</body></html>
"""

EMPTY_PAGE = """
<html><body><p>No jobs match your search.</p></body></html>
"""


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def config(tmp_path):
    return SyncConfig(
        storage=StorageConfig(chunk_pause=0.0),
        credentials={"type": "service_account", "project_id": "test-project"},
        logs_path=str(tmp_path / "logs"),
    )


@pytest.fixture
def fixed_now():
    return datetime(2024, 1, 2, 21, 4, 5, tzinfo=timezone.utc)


@pytest.fixture
def log_messages():
    messages = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    try:
        logger.remove(handler_id)
    except ValueError:
        pass


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    # The CLI replaces every handler; put the default back
    logger.remove()
    logger.add(sys.stderr)
