"""
Abstract Document Store Interface

DESIGN DECISION: The trip lives in one shared document. We define an
abstract interface for it so that:
1. The in-memory store can back tests and local runs
2. Google Sheets (or a real document database) can be swapped in
3. Business logic never knows which backend it is talking to

The interface mirrors what a live document database offers:
read the document, replace it, update some top-level fields, and
subscribe to changes. ``modify`` is the read-modify-write for appends
and removals; plain field updates are last-write-wins.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from tripboard.logger import get_logger
from tripboard.models.trip import TripDocument


logger = get_logger(__name__)

Subscriber = Callable[[Optional[TripDocument]], None]
Change = Callable[[TripDocument], Mapping[str, Any]]


def encode_value(value: Any) -> Any:
    """Convert models (and lists/dicts of models) to their stored JSON shape."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, (list, tuple)):
        return [encode_value(v) for v in value]
    if isinstance(value, Mapping):
        return {k: encode_value(v) for k, v in value.items()}
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def merge_updates(
    current: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> TripDocument:
    """
    Apply field-level updates to a stored document.

    Keys are top-level wire names (``title``, ``expenses``, ``playlistUrl``).
    ``updatedAt`` is always stamped with the current time.

    Raises:
        InvalidUpdateError: if the result is not a valid trip document
    """
    merged = dict(current)
    for field, value in updates.items():
        merged[field] = encode_value(value)
    merged["updatedAt"] = datetime.now(timezone.utc).isoformat()

    try:
        return TripDocument.model_validate(merged)
    except ValidationError as e:
        raise InvalidUpdateError(
            f"Update to {sorted(updates)} would corrupt the document: {e}"
        ) from e


class TripDocumentStore(ABC):
    """
    Abstract interface for the shared trip document.

    Any storage implementation (in-memory, Google Sheets, ...)
    must implement these methods.
    """

    def __init__(self):
        self._subscribers: list[Subscriber] = []

    @abstractmethod
    async def get_document(self) -> Optional[TripDocument]:
        """
        Read the current document.

        Returns:
            The document, or None if it has never been written
        """
        pass

    @abstractmethod
    async def set_document(self, document: TripDocument) -> None:
        """
        Replace the whole document (used for seeding).

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def update_fields(self, updates: Mapping[str, Any]) -> TripDocument:
        """
        Update some top-level fields, leaving the rest untouched.

        Args:
            updates: wire field name -> new value

        Returns:
            The document as stored after the update

        Raises:
            NotFoundError: If there is no document yet
            InvalidUpdateError: If the update would produce an invalid document
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def modify(self, change: Change) -> TripDocument:
        """
        Read-modify-write: ``change`` gets the current document and returns
        the field updates to store. No other write lands in between.

        Exceptions raised by ``change`` propagate and nothing is written.

        Raises:
            NotFoundError: If there is no document yet
            InvalidUpdateError: If the update would produce an invalid document
            StorageError: If the write fails
        """
        pass

    async def poll(self) -> bool:
        """
        Pick up changes made by other writers and notify subscribers.

        Stores that see every write themselves have nothing to poll.

        Returns:
            True if a change was seen
        """
        return False

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Call ``callback`` with the new document after every change.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, document: Optional[TripDocument]) -> None:
        """Push a change to every subscriber. One bad subscriber doesn't stop the rest."""
        for callback in list(self._subscribers):
            try:
                callback(document)
            except Exception:
                logger.exception("subscriber_failed", subscriber=repr(callback))


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class InvalidUpdateError(StorageError):
    """An update would leave the document in an invalid state."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass
