"""
CLI exit codes and the no-credentials path.
"""
import json

import pandas as pd
import pytest
from typer.testing import CliRunner

import jobsync.cli as cli
from jobsync.contexts.scraping import PageFetcher
from jobsync.contexts.scraping.orchestration import run_sync

from conftest import LISTING_PAGE, FakeSession, FakeStore

runner = CliRunner()

CREDENTIALS = json.dumps({"type": "service_account", "project_id": "demo"})


@pytest.fixture
def store(monkeypatch):
    store = FakeStore()
    monkeypatch.setattr(cli, "get_document_store", lambda config: store)
    return store


@pytest.fixture
def session(monkeypatch):
    session = FakeSession(text=LISTING_PAGE)
    session.progress_flags = []

    def run_with_fake_session(config, store, show_progress=False):
        session.progress_flags.append(show_progress)
        return run_sync(config, store, fetcher=PageFetcher(config.fetch, session=session), show_progress=show_progress)

    monkeypatch.setattr(cli, "run_sync", run_with_fake_session)
    return session


def test_run_succeeds(store, session, tmp_path):
    result = runner.invoke(
        cli.app,
        ["run", "--log-dir", str(tmp_path)],
        env={"FIREBASE_SERVICE_ACCOUNT": CREDENTIALS, "CONFIG_PATH": None},
    )

    assert result.exit_code == 0, result.output
    assert len(store.collections["jobs"]) == 3
    assert store.documents["metadata/sync"]["status"] == "success"
    assert list(tmp_path.glob("sync_*.txt"))
    assert session.progress_flags == [True]


def test_run_exits_one_on_fetch_failure(store, session, tmp_path):
    session.status_code = 500

    result = runner.invoke(
        cli.app,
        ["run", "--log-dir", str(tmp_path)],
        env={"FIREBASE_SERVICE_ACCOUNT": CREDENTIALS, "CONFIG_PATH": None},
    )

    assert result.exit_code == 1
    assert store.documents["metadata/sync"]["status"] == "failure"


def test_quiet_run_hides_progress_bars(store, session, tmp_path):
    result = runner.invoke(
        cli.app,
        ["run", "--log-dir", str(tmp_path), "--quiet"],
        env={"FIREBASE_SERVICE_ACCOUNT": CREDENTIALS, "CONFIG_PATH": None},
    )

    assert result.exit_code == 0, result.output
    assert session.progress_flags == [False]


def test_missing_credentials_exit_before_any_work(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(cli, "get_document_store", lambda config: calls.append("store"))
    monkeypatch.setattr(cli, "run_sync", lambda config, store, **kwargs: calls.append("run"))

    result = runner.invoke(
        cli.app,
        ["run", "--log-dir", str(tmp_path)],
        env={"FIREBASE_SERVICE_ACCOUNT": None},
    )

    assert result.exit_code == 1
    assert "FIREBASE_SERVICE_ACCOUNT" in result.output
    assert calls == []


def test_malformed_credentials_exit_one(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(cli, "get_document_store", lambda config: calls.append("store"))

    result = runner.invoke(
        cli.app,
        ["run", "--log-dir", str(tmp_path)],
        env={"FIREBASE_SERVICE_ACCOUNT": "{not json"},
    )

    assert result.exit_code == 1
    assert "not valid JSON" in result.output
    assert calls == []


def test_preview_writes_csv(monkeypatch, tmp_path):
    session = FakeSession(text=LISTING_PAGE)
    monkeypatch.setattr(cli, "PageFetcher", lambda config: PageFetcher(config, session=session))
    output = tmp_path / "jobs.csv"

    result = runner.invoke(
        cli.app,
        ["preview", "--url", "https://jobs.example.com/search", "--output", str(output)],
        env={"FIREBASE_SERVICE_ACCOUNT": None, "CONFIG_PATH": None},
    )

    assert result.exit_code == 0, result.output
    assert "Found 3 jobs" in result.output
    assert session.calls[0]["url"] == "https://jobs.example.com/search"

    df = pd.read_csv(output)
    assert list(df["title"]) == ["Forklift Operator", "Warehouse Associate", "Machine Operator"]
    assert df.loc[1, "pay_rate"] == "$18.00 / hr"


def test_preview_fetch_failure(monkeypatch):
    session = FakeSession(status_code=404)
    monkeypatch.setattr(cli, "PageFetcher", lambda config: PageFetcher(config, session=session))

    result = runner.invoke(cli.app, ["preview"], env={"CONFIG_PATH": None})

    assert result.exit_code == 1
    assert "404" in result.output
