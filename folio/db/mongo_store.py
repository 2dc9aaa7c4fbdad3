"""MongoDB document store backed by the pymongo async client."""

import logging
from typing import List, Optional

from bson import ObjectId
from pymongo import AsyncMongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError

from folio.db.store import UNIQUE_FIELDS, Document, DocumentStore, Filters, Sort
from folio.errors import ConcurrentUpdate, DuplicateKey
from folio.utils.identifiers import is_valid_id

logger = logging.getLogger(__name__)


def _to_mongo_filter(filters: Filters) -> Optional[dict]:
    """Translate ``id`` into ``_id``. Returns None when the id is malformed."""
    query = dict(filters)
    if "id" in query:
        doc_id = query.pop("id")
        if not is_valid_id(doc_id):
            return None
        query["_id"] = ObjectId(doc_id)
    return query


def _from_mongo(raw: Optional[dict]) -> Optional[Document]:
    if raw is None:
        return None
    document = dict(raw)
    document["id"] = str(document.pop("_id"))
    return document


def _to_mongo(document: Document) -> dict:
    return {key: value for key, value in document.items() if key != "id"}


class MongoStore(DocumentStore):
    """Stores each collection in a MongoDB collection of the same name."""

    def __init__(self, database_url: str, database_name: str):
        self.client = AsyncMongoClient(database_url, tz_aware=True)
        self.db = self.client[database_name]
        logger.info("Using MongoDB database %s", database_name)

    async def find_one(self, collection: str, filters: Filters) -> Optional[Document]:
        query = _to_mongo_filter(filters)
        if query is None:
            return None
        return _from_mongo(await self.db[collection].find_one(query))

    async def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None
    ) -> List[Document]:
        query = _to_mongo_filter(filters or {})
        if query is None:
            return []
        cursor = self.db[collection].find(query)
        if sort:
            cursor = cursor.sort(list(sort))
        return [_from_mongo(raw) async for raw in cursor]

    async def insert(self, collection: str, document: Document) -> Document:
        body = _to_mongo(document)
        body["version"] = 0
        try:
            result = await self.db[collection].insert_one(body)
        except DuplicateKeyError:
            raise DuplicateKey()
        body["_id"] = result.inserted_id
        return _from_mongo(body)

    async def save(self, collection: str, document: Document) -> Document:
        version = document.get("version", 0)
        body = _to_mongo(document)
        body["version"] = version + 1
        result = await self.db[collection].replace_one(
            {"_id": ObjectId(document["id"]), "version": version},
            body,
        )
        if result.matched_count == 0:
            logger.warning("Stale write rejected for %s %s", collection, document["id"])
            raise ConcurrentUpdate()
        document["version"] = body["version"]
        body["_id"] = ObjectId(document["id"])
        return _from_mongo(body)

    async def find_one_and_update(
        self,
        collection: str,
        filters: Filters,
        fields: Document
    ) -> Optional[Document]:
        query = _to_mongo_filter(filters)
        if query is None:
            return None
        raw = await self.db[collection].find_one_and_update(
            query,
            {"$set": _to_mongo(fields), "$inc": {"version": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return _from_mongo(raw)

    async def find_one_and_remove(self, collection: str, filters: Filters) -> Optional[Document]:
        query = _to_mongo_filter(filters)
        if query is None:
            return None
        return _from_mongo(await self.db[collection].find_one_and_delete(query))

    async def delete_many(self, collection: str, filters: Filters) -> int:
        query = _to_mongo_filter(filters)
        if query is None:
            return 0
        result = await self.db[collection].delete_many(query)
        return result.deleted_count

    async def open(self) -> None:
        for collection, fields in UNIQUE_FIELDS.items():
            for field in fields:
                await self.db[collection].create_index(field, unique=True)
        logger.info("Ensured unique indexes on %s", ", ".join(UNIQUE_FIELDS))

    async def close(self) -> None:
        await self.client.close()
