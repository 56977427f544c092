"""
Storage Services Package

Provides abstract interfaces and concrete implementations for data storage.
Currently implements an in-memory backend, but designed to be swappable.
"""

from smartwallet.services.storage.interface import (
    AuditStorageInterface,
    CardStorageInterface,
    DuplicateError,
    NotFoundError,
    StorageError,
)
from smartwallet.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryCardStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "CardStorageInterface",
    # Exceptions
    "DuplicateError",
    "NotFoundError",
    "StorageError",
    # In-memory implementation
    "InMemoryAuditStorage",
    "InMemoryCardStorage",
]
