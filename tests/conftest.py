"""Shared fixtures for the Finance Tracker tests."""

import pytest

from finance_tracker.audit import AuditLogger
from finance_tracker.config import get_settings
from finance_tracker.controller import FormController
from finance_tracker.services.storage import InMemoryKeyValueStorage
from finance_tracker.store import TransactionStore

from tests.helpers import TODAY, RecordingLogger


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep a developer's .env and environment out of the tests."""
    monkeypatch.chdir(tmp_path)
    for name in (
        "FINANCE_TRACKER_STORAGE_BACKEND",
        "FINANCE_TRACKER_STORAGE_DATA_FILE",
        "FINANCE_TRACKER_STORAGE_TRANSACTIONS_KEY",
        "LOG_LEVEL",
        "DEBUG_MODE",
        "RESTAMP_DATE_ON_EDIT",
        "CURRENCY_SYMBOL",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage() -> InMemoryKeyValueStorage:
    return InMemoryKeyValueStorage()


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def audit_logger(recording_logger) -> AuditLogger:
    return AuditLogger(logger=recording_logger)


@pytest.fixture
def store(storage, audit_logger) -> TransactionStore:
    store = TransactionStore(storage=storage, audit_logger=audit_logger)
    store.load()
    return store


@pytest.fixture
def controller(store, audit_logger) -> FormController:
    return FormController(
        store=store,
        audit_logger=audit_logger,
        today=lambda: TODAY,
    )
