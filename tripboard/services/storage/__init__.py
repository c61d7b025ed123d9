"""
Storage Services Package

Provides the abstract document store interface and its implementations.
The in-memory store is the default; Google Sheets is optional.
"""

from tripboard.services.storage.interface import (
    Change,
    ConnectionError,
    InvalidUpdateError,
    NotFoundError,
    StorageError,
    Subscriber,
    TripDocumentStore,
    encode_value,
    merge_updates,
)
from tripboard.services.storage.memory import InMemoryTripStore

__all__ = [
    # Interface
    "Change",
    "Subscriber",
    "TripDocumentStore",
    "encode_value",
    "merge_updates",
    # Exceptions
    "ConnectionError",
    "InvalidUpdateError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "InMemoryTripStore",
]
