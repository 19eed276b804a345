"""MongoDB implementation of DocumentCollection (Motor async driver)."""

from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from taskboard.domain.identifiers import to_object_id
from taskboard.domain.repositories import DocumentCollection
from taskboard.domain.repositories.document_collection import Document, SortSpec
from taskboard.integration.repositories.store_errors import translate_store_errors


class MotorDocumentCollection(DocumentCollection):
    """DocumentCollection over an ``AsyncIOMotorCollection``."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @property
    def name(self) -> str:
        return self.collection.name

    async def find_async(
        self,
        filter: Document | None = None,
        projection: Document | None = None,
        sort: SortSpec | None = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        with translate_store_errors(self.name, "find"):
            cursor = self.collection.find(filter or {}, projection or None)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return [doc async for doc in cursor]

    async def count_async(self, filter: Document | None = None) -> int:
        with translate_store_errors(self.name, "count"):
            return await self.collection.count_documents(filter or {})

    async def get_async(self, id: str, projection: Document | None = None) -> Document | None:
        oid = to_object_id(id)
        if oid is None:
            return None
        with translate_store_errors(self.name, "get"):
            return await self.collection.find_one({"_id": oid}, projection or None)

    async def find_one_async(self, filter: Document) -> Document | None:
        with translate_store_errors(self.name, "find"):
            return await self.collection.find_one(filter)

    async def insert_async(self, document: Document) -> Document:
        document = dict(document)
        with translate_store_errors(self.name, "insert"):
            result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        return document

    async def update_async(self, id: str, changes: Document) -> Document | None:
        oid = to_object_id(id)
        if oid is None:
            return None
        with translate_store_errors(self.name, "update"):
            if not changes:
                return await self.collection.find_one({"_id": oid})
            return await self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": changes},
                return_document=ReturnDocument.AFTER,
            )

    async def remove_async(self, id: str) -> Document | None:
        oid = to_object_id(id)
        if oid is None:
            return None
        with translate_store_errors(self.name, "delete"):
            return await self.collection.find_one_and_delete({"_id": oid})

    async def update_many_async(self, filter: Document, changes: Document) -> int:
        with translate_store_errors(self.name, "update"):
            result = await self.collection.update_many(filter, {"$set": changes})
        return result.modified_count

    async def add_to_set_async(self, id: str, field: str, value: Any) -> bool:
        oid = to_object_id(id)
        if oid is None:
            return False
        with translate_store_errors(self.name, "update"):
            result = await self.collection.update_one({"_id": oid}, {"$addToSet": {field: value}})
        return result.matched_count > 0

    async def pull_async(self, id: str, field: str, value: Any) -> bool:
        oid = to_object_id(id)
        if oid is None:
            return False
        with translate_store_errors(self.name, "update"):
            result = await self.collection.update_one({"_id": oid}, {"$pull": {field: value}})
        return result.matched_count > 0
