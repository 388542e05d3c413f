"""
Abstract Storage Interface

DESIGN DECISION: Persistence is a plain key/value surface, the same shape
as browser local storage. This allows us to:
1. Use in-memory storage for testing
2. Keep a local JSON file for everyday use
3. Keep the transaction store decoupled from where bytes end up

Values are opaque strings. Serialization belongs to the caller.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key/value persistence.

    Any storage implementation must implement these methods.
    All operations are synchronous.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: The storage key

        Returns:
            The stored string, or None if the key is absent

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Args:
            key: The storage key
            value: The serialized value

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Remove a key.

        Args:
            key: The storage key

        Returns:
            True if the key existed

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass


class CorruptDataError(StorageError):
    """Stored data exists but cannot be decoded."""
    pass
