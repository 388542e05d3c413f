"""Test doubles and factories shared across test modules."""

from datetime import date
from decimal import Decimal
from typing import Optional

from finance_tracker.models.transaction import Transaction, TransactionType
from finance_tracker.services.storage import (
    InMemoryKeyValueStorage,
    KeyValueStorageInterface,
    StorageError,
)

TODAY = date(2024, 6, 15)


class RecordingLogger:
    """Stand-in for a structlog logger that remembers each call."""

    def __init__(self):
        self.calls: list[tuple[str, str, dict]] = []

    def _record(self, level: str, event: str, **kwargs) -> None:
        self.calls.append((level, event, kwargs))

    def debug(self, event, **kwargs):
        self._record("debug", event, **kwargs)

    def info(self, event, **kwargs):
        self._record("info", event, **kwargs)

    def warning(self, event, **kwargs):
        self._record("warning", event, **kwargs)

    def error(self, event, **kwargs):
        self._record("error", event, **kwargs)


class FailingStorage(KeyValueStorageInterface):
    """Backend whose reads and/or writes blow up on demand."""

    def __init__(self, fail_get: bool = False, fail_set: bool = False):
        self.inner = InMemoryKeyValueStorage()
        self.fail_get = fail_get
        self.fail_set = fail_set

    def get(self, key: str) -> Optional[str]:
        if self.fail_get:
            raise StorageError("disk unavailable")
        return self.inner.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_set:
            raise StorageError("disk full")
        self.inner.set(key, value)

    def delete(self, key: str) -> bool:
        if self.fail_set:
            raise StorageError("disk full")
        return self.inner.delete(key)


def make_transaction(
    description: str = "Coffee",
    amount: str = "4.50",
    type: TransactionType = TransactionType.EXPENSE,
    category: str = "Food",
    **kwargs,
) -> Transaction:
    return Transaction(
        description=description,
        amount=Decimal(amount),
        type=type,
        category=category,
        date=kwargs.pop("date", TODAY),
        **kwargs,
    )
