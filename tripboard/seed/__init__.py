"""Seeding of the initial trip document."""

import copy
from datetime import datetime, timezone

from tripboard.logger import get_logger
from tripboard.models.trip import TripDocument
from tripboard.seed.initial_data import INITIAL_TRIP_DATA
from tripboard.services.storage import TripDocumentStore


logger = get_logger(__name__)


def build_initial_document() -> TripDocument:
    """A fresh copy of the initial trip, stamped with the current time."""
    data = copy.deepcopy(INITIAL_TRIP_DATA)
    data["updatedAt"] = datetime.now(timezone.utc).isoformat()
    return TripDocument.model_validate(data)


async def seed_document(store: TripDocumentStore) -> TripDocument:
    """
    Write the initial trip to the store, replacing whatever is there.

    Returns:
        The document as written
    """
    document = build_initial_document()
    await store.set_document(document)
    logger.info("document_seeded", title=document.title)
    return document


__all__ = ["INITIAL_TRIP_DATA", "build_initial_document", "seed_document"]
