"""Tests for the Motor DocumentCollection against a mocked driver collection."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from taskboard.domain.exceptions import InvalidArgumentError, StoreFailureError
from taskboard.integration.repositories import MotorDocumentCollection


class AsyncCursor:
    """Minimal stand-in for an AsyncIOMotorCursor."""

    def __init__(self, documents: list[dict]):
        self.documents = documents
        self.calls: list[tuple[str, object]] = []

    def sort(self, spec):
        self.calls.append(("sort", spec))
        return self

    def skip(self, count):
        self.calls.append(("skip", count))
        return self

    def limit(self, count):
        self.calls.append(("limit", count))
        return self

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self.documents:
            yield document


@pytest.fixture
def motor_collection() -> MagicMock:
    mock = MagicMock()
    mock.name = "tasks"
    mock.count_documents = AsyncMock(return_value=3)
    mock.find_one = AsyncMock(return_value=None)
    mock.insert_one = AsyncMock()
    mock.find_one_and_update = AsyncMock(return_value=None)
    mock.find_one_and_delete = AsyncMock(return_value=None)
    mock.update_many = AsyncMock()
    mock.update_one = AsyncMock()
    return mock


class TestMotorDocumentCollection:
    """Test query construction and error translation."""

    @pytest.mark.asyncio
    async def test_find_applies_only_requested_cursor_options(self, motor_collection: MagicMock) -> None:
        # Arrange
        cursor = AsyncCursor([{"name": "a"}])
        motor_collection.find = MagicMock(return_value=cursor)
        collection = MotorDocumentCollection(motor_collection)

        # Act
        documents = await collection.find_async({"completed": True}, None, [("name", 1)], skip=0, limit=5)

        # Assert
        assert documents == [{"name": "a"}]
        motor_collection.find.assert_called_once_with({"completed": True}, None)
        assert cursor.calls == [("sort", [("name", 1)]), ("limit", 5)]

    @pytest.mark.asyncio
    async def test_get_converts_id(self, motor_collection: MagicMock) -> None:
        oid = ObjectId()
        collection = MotorDocumentCollection(motor_collection)

        await collection.get_async(str(oid), {"name": 1})

        motor_collection.find_one.assert_awaited_once_with({"_id": oid}, {"name": 1})

    @pytest.mark.asyncio
    async def test_invalid_id_skips_driver(self, motor_collection: MagicMock) -> None:
        collection = MotorDocumentCollection(motor_collection)

        assert await collection.get_async("bad") is None
        assert await collection.remove_async("bad") is None

        motor_collection.find_one.assert_not_called()
        motor_collection.find_one_and_delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_insert_returns_document_with_id(self, motor_collection: MagicMock) -> None:
        oid = ObjectId()
        motor_collection.insert_one.return_value = MagicMock(inserted_id=oid)
        collection = MotorDocumentCollection(motor_collection)

        document = await collection.insert_async({"name": "Fix bug"})

        assert document == {"name": "Fix bug", "_id": oid}

    @pytest.mark.asyncio
    async def test_update_uses_set_and_returns_after(self, motor_collection: MagicMock) -> None:
        oid = ObjectId()
        collection = MotorDocumentCollection(motor_collection)

        await collection.update_async(str(oid), {"completed": True})

        motor_collection.find_one_and_update.assert_awaited_once_with({"_id": oid}, {"$set": {"completed": True}}, return_document=ReturnDocument.AFTER)

    @pytest.mark.asyncio
    async def test_array_operators(self, motor_collection: MagicMock) -> None:
        oid = ObjectId()
        motor_collection.update_one.return_value = MagicMock(matched_count=1)
        collection = MotorDocumentCollection(motor_collection)

        assert await collection.add_to_set_async(str(oid), "pendingTasks", "t1")
        assert await collection.pull_async(str(oid), "pendingTasks", "t1")

        motor_collection.update_one.assert_any_await({"_id": oid}, {"$addToSet": {"pendingTasks": "t1"}})
        motor_collection.update_one.assert_any_await({"_id": oid}, {"$pull": {"pendingTasks": "t1"}})

    @pytest.mark.asyncio
    async def test_update_many_returns_modified_count(self, motor_collection: MagicMock) -> None:
        motor_collection.update_many.return_value = MagicMock(modified_count=4)
        collection = MotorDocumentCollection(motor_collection)

        assert await collection.update_many_async({"assignedUser": "u1"}, {"assignedUser": ""}) == 4

    @pytest.mark.asyncio
    async def test_driver_failure_becomes_store_failure(self, motor_collection: MagicMock) -> None:
        motor_collection.count_documents.side_effect = ServerSelectionTimeoutError("no servers")
        collection = MotorDocumentCollection(motor_collection)

        with pytest.raises(StoreFailureError) as exc_info:
            await collection.count_async()

        assert "no servers" in exc_info.value.detail

    @pytest.mark.asyncio
    async def test_duplicate_key_becomes_invalid_argument(self, motor_collection: MagicMock) -> None:
        motor_collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key", 11000, {"keyValue": {"email": "a@x.com"}})
        collection = MotorDocumentCollection(motor_collection)

        with pytest.raises(InvalidArgumentError) as exc_info:
            await collection.insert_async({"email": "a@x.com"})

        assert exc_info.value.details == {"email": "a@x.com"}
