"""
Storage Services Package

Provides the key/value persistence interface and its implementations.
The transaction store only ever talks to the interface, so backends are
swappable.
"""

from finance_tracker.services.storage.interface import (
    CorruptDataError,
    DuplicateError,
    KeyValueStorageInterface,
    StorageError,
)
from finance_tracker.services.storage.memory import InMemoryKeyValueStorage
from finance_tracker.services.storage.json_file import JsonFileKeyValueStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "CorruptDataError",
    "DuplicateError",
    "StorageError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]
