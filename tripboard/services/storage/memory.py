"""
In-Memory Document Store

Keeps the trip document in process memory and pushes every change to
subscribers straight away. Used for local runs and tests; one process
shares one document across all browser sessions.
"""

import copy
import threading
from collections.abc import Mapping
from typing import Any, Optional

from tripboard.logger import get_logger
from tripboard.models.trip import TripDocument
from tripboard.services.storage.interface import (
    Change,
    NotFoundError,
    TripDocumentStore,
    merge_updates,
)


logger = get_logger(__name__)


class InMemoryTripStore(TripDocumentStore):
    """
    Document store backed by a dict in the stored (camelCase) shape.

    Reads hand out fresh copies, so callers can never mutate the stored
    document behind the store's back.
    """

    def __init__(self, document: Optional[TripDocument] = None):
        super().__init__()
        self._lock = threading.Lock()
        self._data: Optional[dict] = document.to_wire() if document else None

    async def get_document(self) -> Optional[TripDocument]:
        with self._lock:
            if self._data is None:
                return None
            data = copy.deepcopy(self._data)
        return TripDocument.model_validate(data)

    async def set_document(self, document: TripDocument) -> None:
        with self._lock:
            self._data = document.to_wire()
            snapshot = TripDocument.model_validate(copy.deepcopy(self._data))
        logger.info("document_replaced", title=document.title)
        self._notify(snapshot)

    async def update_fields(self, updates: Mapping[str, Any]) -> TripDocument:
        return await self.modify(lambda current: updates)

    async def modify(self, change: Change) -> TripDocument:
        # Read-modify-write under one lock: Streamlit serves sessions on threads
        with self._lock:
            if self._data is None:
                raise NotFoundError("No trip document to update")
            current = TripDocument.model_validate(copy.deepcopy(self._data))
            updates = change(current)
            document = merge_updates(self._data, updates)
            self._data = document.to_wire()
            snapshot = TripDocument.model_validate(copy.deepcopy(self._data))

        logger.info("document_updated", fields=sorted(updates))
        self._notify(snapshot)
        return snapshot

    async def clear(self) -> None:
        """Forget the document entirely."""
        with self._lock:
            self._data = None
        self._notify(None)
