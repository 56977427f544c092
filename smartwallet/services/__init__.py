"""
Services package.

Only the storage layer is re-exported here; import CardStore and
SuggestionEngine from their modules.
"""

from smartwallet.services.storage import (
    AuditStorageInterface,
    CardStorageInterface,
    DuplicateError,
    InMemoryAuditStorage,
    InMemoryCardStorage,
    NotFoundError,
    StorageError,
)

__all__ = [
    # Storage services
    "AuditStorageInterface",
    "CardStorageInterface",
    "DuplicateError",
    "InMemoryAuditStorage",
    "InMemoryCardStorage",
    "NotFoundError",
    "StorageError",
]
