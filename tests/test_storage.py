"""
Tests for the document store interface and the in-memory store.
"""

import pytest

from tripboard.models.trip import Expense, TripDocument
from tripboard.services.storage import (
    InMemoryTripStore,
    InvalidUpdateError,
    NotFoundError,
    encode_value,
    merge_updates,
)


@pytest.fixture
def document():
    return TripDocument(title="北海道旅行", members=["Aki", "Ben"])


@pytest.fixture
def store(document):
    return InMemoryTripStore(document)


class TestEncoding:
    """Tests for encode_value and merge_updates."""

    def test_encodes_models_to_wire_shape(self):
        expense = Expense(id="e1", paid_by="Aki", amount=100, split_among=["Ben"])
        encoded = encode_value([expense])
        assert encoded[0]["paidBy"] == "Aki"
        assert encoded[0]["splitAmong"] == ["Ben"]

    def test_plain_values_untouched(self):
        assert encode_value("title") == "title"
        assert encode_value({"a": [1, 2]}) == {"a": [1, 2]}

    def test_merge_stamps_updated_at(self, document):
        current = document.to_wire()
        merged = merge_updates(current, {"title": "新タイトル"})
        assert merged.title == "新タイトル"
        assert merged.updated_at >= document.updated_at

    def test_merge_rejects_invalid_result(self, document):
        with pytest.raises(InvalidUpdateError):
            merge_updates(document.to_wire(), {"members": ["Aki", "Aki"]})


class TestInMemoryTripStore:
    """Tests for InMemoryTripStore."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_none(self):
        assert await InMemoryTripStore().get_document() is None

    @pytest.mark.asyncio
    async def test_update_without_document(self):
        with pytest.raises(NotFoundError):
            await InMemoryTripStore().update_fields({"title": "x"})

    @pytest.mark.asyncio
    async def test_set_then_get(self, document):
        store = InMemoryTripStore()
        await store.set_document(document)
        stored = await store.get_document()
        assert stored.title == "北海道旅行"
        assert stored.members == ["Aki", "Ben"]

    @pytest.mark.asyncio
    async def test_update_fields_leaves_other_fields(self, store):
        updated = await store.update_fields({"subtitle": "雪と温泉"})
        assert updated.subtitle == "雪と温泉"
        assert updated.title == "北海道旅行"
        assert updated.members == ["Aki", "Ben"]

    @pytest.mark.asyncio
    async def test_update_with_models(self, store):
        expense = Expense(paid_by="Aki", amount=3000, split_among=["Aki", "Ben"])
        updated = await store.update_fields({"expenses": [expense]})
        assert updated.expenses[0].id == expense.id
        assert (await store.get_document()).expenses[0].amount == 3000

    @pytest.mark.asyncio
    async def test_invalid_update_leaves_document_untouched(self, store):
        with pytest.raises(InvalidUpdateError):
            await store.update_fields({"members": ["Aki", "Aki"]})
        assert (await store.get_document()).members == ["Aki", "Ben"]

    @pytest.mark.asyncio
    async def test_reads_are_copies(self, store):
        first = await store.get_document()
        first.members.append("Zed")
        second = await store.get_document()
        assert second.members == ["Aki", "Ben"]

    @pytest.mark.asyncio
    async def test_unknown_fields_survive_updates(self, store):
        await store.update_fields({"packingList": ["ゴーグル"]})
        await store.update_fields({"title": "別タイトル"})
        wire = (await store.get_document()).to_wire()
        assert wire["packingList"] == ["ゴーグル"]

    @pytest.mark.asyncio
    async def test_subscribers_see_every_change(self, store):
        seen = []
        store.subscribe(seen.append)

        await store.update_fields({"title": "一"})
        await store.update_fields({"title": "二"})

        assert [d.title for d in seen] == ["一", "二"]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, store):
        seen = []
        unsubscribe = store.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        await store.update_fields({"title": "一"})
        assert seen == []

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_block_others(self, store):
        seen = []

        def broken(document):
            raise RuntimeError("boom")

        store.subscribe(broken)
        store.subscribe(seen.append)

        await store.update_fields({"title": "一"})
        assert len(seen) == 1

    @pytest.mark.asyncio
    async def test_clear_notifies_none(self, store):
        seen = []
        store.subscribe(seen.append)
        await store.clear()
        assert seen == [None]
        assert await store.get_document() is None

    @pytest.mark.asyncio
    async def test_modify_sees_current_document(self, store):
        await store.update_fields({"members": ["Aki", "Ben", "Chie"]})

        updated = await store.modify(lambda current: {"members": [*current.members, "Dai"]})

        assert updated.members == ["Aki", "Ben", "Chie", "Dai"]

    @pytest.mark.asyncio
    async def test_modify_error_writes_nothing(self, store):
        seen = []
        store.subscribe(seen.append)

        def change(current):
            raise LookupError("nothing to remove")

        with pytest.raises(LookupError):
            await store.modify(change)

        assert seen == []
        # The lock was released
        assert (await store.update_fields({"title": "一"})).title == "一"

    @pytest.mark.asyncio
    async def test_modify_without_document(self):
        with pytest.raises(NotFoundError):
            await InMemoryTripStore().modify(lambda current: {"title": "x"})

    @pytest.mark.asyncio
    async def test_memory_store_has_nothing_to_poll(self, store):
        assert await store.poll() is False
