"""Services package."""

from finance_tracker.services.storage import (
    CorruptDataError,
    DuplicateError,
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    StorageError,
)

__all__ = [
    # Storage services
    "CorruptDataError",
    "DuplicateError",
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "StorageError",
]
