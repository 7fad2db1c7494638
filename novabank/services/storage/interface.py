"""
Abstract Storage Interface

DESIGN DECISION: Account state lives in a plain text key-value store,
the same shape as browser local storage. This allows us to:
1. Keep account state in a JSON file for the dashboard
2. Use in-memory storage for testing
3. Swap in another backend without touching the account store

The interface is intentionally tiny - the account store only ever reads
and writes two keys, and writes them together through set_items().
"""

from abc import ABC, abstractmethod
from typing import Mapping, Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for durable key-value storage.

    Keys and values are strings. Encoding structured values is the
    caller's job.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read a value.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if the key is absent
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Write a value, replacing any previous one.

        Raises:
            StorageWriteError: If the value could not be written
        """
        pass

    @abstractmethod
    def set_items(self, items: Mapping[str, str]) -> None:
        """
        Write several values as one change: either all land or none do.

        Raises:
            StorageWriteError: If the values could not be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """Delete a key. Removing an absent key is not an error."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete every key."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageWriteError(StorageError):
    """A value could not be written to the backend."""
    pass
