"""In-memory document store for local development and tests."""

import copy
import logging
from typing import Dict, List, Optional

from folio.db.store import DESCENDING, UNIQUE_FIELDS, Document, DocumentStore, Filters, Sort
from folio.errors import ConcurrentUpdate, DuplicateKey
from folio.utils.identifiers import new_id

logger = logging.getLogger(__name__)


class MemoryStore(DocumentStore):
    """Keeps collections in process memory. Documents are copied in and out."""

    def __init__(self):
        self._collections: Dict[str, Dict[str, Document]] = {}
        logger.info("Using in-memory document store")

    def _collection(self, name: str) -> Dict[str, Document]:
        return self._collections.setdefault(name, {})

    @staticmethod
    def _matches(document: Document, filters: Filters) -> bool:
        for key, value in filters.items():
            if key == "id":
                if str(document.get("id")) != str(value):
                    return False
            elif document.get(key) != value:
                return False
        return True

    def _first(self, collection: str, filters: Filters) -> Optional[Document]:
        doc_id = filters.get("id")
        if doc_id is not None:
            document = self._collection(collection).get(str(doc_id))
            return document if document is not None and self._matches(document, filters) else None
        for document in self._collection(collection).values():
            if self._matches(document, filters):
                return document
        return None

    async def find_one(self, collection: str, filters: Filters) -> Optional[Document]:
        document = self._first(collection, filters)
        return copy.deepcopy(document) if document is not None else None

    async def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None
    ) -> List[Document]:
        documents = [
            copy.deepcopy(document)
            for document in self._collection(collection).values()
            if self._matches(document, filters or {})
        ]
        # Apply sort keys last to first so the first key wins
        for field, direction in reversed(list(sort or [])):
            documents.sort(key=lambda doc: doc.get(field), reverse=direction == DESCENDING)
        return documents

    async def insert(self, collection: str, document: Document) -> Document:
        for field in UNIQUE_FIELDS.get(collection, ()):
            if field in document and self._first(collection, {field: document[field]}) is not None:
                raise DuplicateKey()
        stored = copy.deepcopy(document)
        stored["id"] = stored.get("id") or new_id()
        stored["version"] = 0
        self._collection(collection)[stored["id"]] = stored
        return copy.deepcopy(stored)

    async def save(self, collection: str, document: Document) -> Document:
        current = self._collection(collection).get(document["id"])
        if current is None or current["version"] != document.get("version"):
            raise ConcurrentUpdate()
        stored = copy.deepcopy(document)
        stored["version"] = current["version"] + 1
        self._collection(collection)[stored["id"]] = stored
        document["version"] = stored["version"]
        return copy.deepcopy(stored)

    async def find_one_and_update(
        self,
        collection: str,
        filters: Filters,
        fields: Document
    ) -> Optional[Document]:
        document = self._first(collection, filters)
        if document is None:
            return None
        document.update(copy.deepcopy(fields))
        document["version"] += 1
        return copy.deepcopy(document)

    async def find_one_and_remove(self, collection: str, filters: Filters) -> Optional[Document]:
        document = self._first(collection, filters)
        if document is None:
            return None
        return copy.deepcopy(self._collection(collection).pop(document["id"]))

    async def delete_many(self, collection: str, filters: Filters) -> int:
        docs = self._collection(collection)
        doomed = [doc_id for doc_id, document in docs.items() if self._matches(document, filters)]
        for doc_id in doomed:
            del docs[doc_id]
        return len(doomed)
