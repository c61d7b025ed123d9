"""
Trip Board Orchestrator

Ties the document store, the expense validator and the settlement engine
together behind the operations the page offers:

1. Expenses: add (validated) / remove, never edit in place
2. Members: register names that expenses may reference
3. Itinerary: edit text fields, tick checklist items
4. Comments and playlist link
5. Settlement view: balances and transfers, re-derived on every call

DESIGN DECISION: Every write is a field-level update of the shared
document. Appends and removals go through the store's read-modify-write
(``modify``), so two people adding expenses at once both land. Plain
field edits are last-write-wins; there is no merge.
Nothing derived (balances, transfers) is ever written back.
"""

from collections.abc import Sequence
from typing import Any, Optional

from tripboard.config import get_settings
from tripboard.logger import get_logger
from tripboard.models.settlement import SettlementView
from tripboard.models.trip import (
    EDITABLE_TEXT_FIELDS,
    Comment,
    Expense,
    ExpenseDraft,
    TripDocument,
)
from tripboard.models.weather import DailyForecast
from tripboard.seed import seed_document
from tripboard.services.storage import (
    InMemoryTripStore,
    NotFoundError,
    TripDocumentStore,
)
from tripboard.services.weather import OpenMeteoWeatherService
from tripboard.settlement import (
    DuplicateMemberError,
    compute_balances,
    compute_settlements,
    per_person_share,
)
from tripboard.validation import ExpenseValidator


logger = get_logger(__name__)


class TripBoard:
    """
    The operations behind the trip page.

    All reads go to the store each time; the board keeps no copy of the
    document between calls.
    """

    def __init__(
        self,
        store: TripDocumentStore,
        validator: Optional[ExpenseValidator] = None,
        weather_service: Optional[OpenMeteoWeatherService] = None,
        tolerance: Optional[float] = None,
    ):
        self._store = store
        self._validator = validator or ExpenseValidator()
        self._weather_service = weather_service
        self._tolerance = tolerance or get_settings().app.settlement_tolerance

    @property
    def store(self) -> TripDocumentStore:
        return self._store

    @property
    def validator(self) -> ExpenseValidator:
        return self._validator

    async def load(self) -> Optional[TripDocument]:
        """Current document, or None before seeding."""
        return await self._store.get_document()

    async def changed_elsewhere(self) -> bool:
        """True if another writer changed the document since this process last looked."""
        return await self._store.poll()

    async def seed_if_empty(self) -> TripDocument:
        """Write the initial trip if the store is empty."""
        document = await self._store.get_document()
        if document is None:
            document = await seed_document(self._store)
        return document

    # -------------------------------------------------------------------------
    # Members and expenses
    # -------------------------------------------------------------------------

    async def add_member(self, name: str) -> TripDocument:
        """
        Register a member.

        Raises:
            ValueError: blank name
            DuplicateMemberError: name already registered
        """
        name = (name or "").strip()
        if not name:
            raise ValueError("Member name must not be blank")

        def change(document: TripDocument) -> dict[str, Any]:
            if name in document.members:
                raise DuplicateMemberError(f"'{name}' is already a member")
            return {"members": [*document.members, name]}

        updated = await self._store.modify(change)
        logger.info("member_added", member=name, member_count=len(updated.members))
        return updated

    async def add_expense(
        self,
        paid_by: str,
        description: str,
        amount: float,
        split_among: Sequence[str],
        register_members: bool = False,
    ) -> Expense:
        """
        Validate and append an expense.

        Args:
            register_members: add any unknown payer/participant to the
                member list instead of rejecting the expense

        Raises:
            InvalidExpenseError: the expense failed validation
        """
        draft = ExpenseDraft(
            paid_by=paid_by,
            description=description,
            amount=amount,
            split_among=list(split_among),
        )
        added = []

        def change(document: TripDocument) -> dict[str, Any]:
            members = list(document.members)
            if register_members:
                for name in [draft.paid_by, *draft.split_among]:
                    if name and name not in members:
                        members.append(name)

            expense = self._validator.ensure_valid(draft, members)
            added.append(expense)

            # Expense and new members go out in the same write
            updates: dict[str, Any] = {"expenses": [*document.expenses, expense]}
            if members != document.members:
                updates["members"] = members
            return updates

        await self._store.modify(change)
        expense = added[-1]

        logger.info(
            "expense_added",
            expense_id=expense.id,
            paid_by=expense.paid_by,
            amount=expense.amount,
            split_count=len(expense.split_among),
        )
        return expense

    async def remove_expense(self, expense_id: str) -> TripDocument:
        """
        Delete an expense.

        Raises:
            NotFoundError: no expense with that id
        """
        def change(document: TripDocument) -> dict[str, Any]:
            if document.find_expense(expense_id) is None:
                raise NotFoundError(f"Expense not found: {expense_id}")
            return {"expenses": [e for e in document.expenses if e.id != expense_id]}

        updated = await self._store.modify(change)
        logger.info("expense_removed", expense_id=expense_id)
        return updated

    def settlement_view(self, document: TripDocument) -> SettlementView:
        """
        Balances, transfers and totals for the expense panel.

        Pure: computed from the document passed in, nothing is stored.
        """
        members = document.members
        balances = compute_balances(members, document.expenses)
        transfers = compute_settlements(members, document.expenses, tolerance=self._tolerance)
        total = sum(e.amount for e in document.expenses)

        return SettlementView(
            balances=balances,
            transfers=transfers,
            total_spent=total,
            per_person=per_person_share(total, len(members)) if members else 0,
        )

    # -------------------------------------------------------------------------
    # Itinerary, comments, playlist
    # -------------------------------------------------------------------------

    async def update_field(self, field: str, value: str) -> TripDocument:
        """
        Edit one top-level text field in place.

        Raises:
            ValueError: field is not editable as text
        """
        if field not in EDITABLE_TEXT_FIELDS:
            raise ValueError(f"'{field}' cannot be edited as text")

        updated = await self._store.update_fields({field: value})
        logger.info("field_updated", field=field)
        return updated

    async def toggle_checklist(self, index: int) -> TripDocument:
        """
        Flip the done flag of one checklist item.

        Raises:
            IndexError: no item at that position
        """
        def change(document: TripDocument) -> dict[str, Any]:
            if not 0 <= index < len(document.checklist):
                raise IndexError(f"No checklist item at position {index}")
            checklist = list(document.checklist)
            checklist[index] = checklist[index].model_copy(update={"done": not checklist[index].done})
            return {"checklist": checklist}

        updated = await self._store.modify(change)
        logger.info("checklist_toggled", index=index, done=updated.checklist[index].done)
        return updated

    async def add_comment(self, author: str, text: str) -> Comment:
        """Append a comment to the board."""
        comment = Comment(author=author, text=text)
        await self._store.modify(lambda document: {"comments": [*document.comments, comment]})
        logger.info("comment_added", comment_id=comment.id, author=comment.author)
        return comment

    async def remove_comment(self, comment_id: str) -> TripDocument:
        """
        Delete a comment.

        Raises:
            NotFoundError: no comment with that id
        """
        def change(document: TripDocument) -> dict[str, Any]:
            remaining = [c for c in document.comments if c.id != comment_id]
            if len(remaining) == len(document.comments):
                raise NotFoundError(f"Comment not found: {comment_id}")
            return {"comments": remaining}

        updated = await self._store.modify(change)
        logger.info("comment_removed", comment_id=comment_id)
        return updated

    async def set_playlist_url(self, url: Optional[str]) -> TripDocument:
        """
        Set or clear the shared playlist link.

        Raises:
            ValueError: not an http(s) URL
        """
        url = (url or "").strip() or None
        if url is not None and not url.startswith(("https://", "http://")):
            raise ValueError("Playlist link must start with http:// or https://")

        updated = await self._store.update_fields({"playlistUrl": url})
        logger.info("playlist_updated", cleared=url is None)
        return updated

    # -------------------------------------------------------------------------
    # Weather
    # -------------------------------------------------------------------------

    async def weather(self) -> dict[str, list[DailyForecast]]:
        """Forecasts for every trip location ({} when weather is off)."""
        if self._weather_service is None:
            return {}
        return await self._weather_service.fetch_multi_location()


def create_app_components(backend: Optional[str] = None) -> TripBoard:
    """
    Factory function to build the board with its configured collaborators.

    Args:
        backend: "memory" or "google_sheets"; defaults to the configured
                 storage backend.

    Falls back to the in-memory store if Google Sheets can't be set up.
    """
    backend = backend or get_settings().app.storage_backend
    store: TripDocumentStore

    if backend == "google_sheets":
        try:
            from tripboard.services.storage.google_sheets import GoogleSheetsTripStore

            store = GoogleSheetsTripStore()
        except Exception as e:
            logger.warning("storage_fallback", backend=backend, error=str(e))
            store = InMemoryTripStore()
    else:
        store = InMemoryTripStore()

    return TripBoard(
        store=store,
        weather_service=OpenMeteoWeatherService(),
    )
