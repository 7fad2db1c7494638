"""
Storage Services Package

Provides the key-value storage interface and its implementations.
"""

from novabank.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
    StorageWriteError,
)
from novabank.services.storage.json_file import JsonFileKeyValueStorage
from novabank.services.storage.memory import InMemoryKeyValueStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "StorageError",
    "StorageWriteError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]
