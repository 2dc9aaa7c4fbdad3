"""Document store interface used by the services.

Documents travel as plain dicts keyed by a string ``id``. Each stored
document also carries an integer ``version`` that :meth:`DocumentStore.save`
uses to refuse writes based on a stale read.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

USERS = "users"
PROFILES = "profiles"
POSTS = "posts"
PROJECTS = "projects"
CHARTS = "charts"

Document = Dict[str, Any]
Filters = Dict[str, Any]
Sort = Sequence[Tuple[str, int]]

# Fields that must be unique across a collection
UNIQUE_FIELDS = {
    USERS: ("email",),
    PROFILES: ("user",),
}

ASCENDING = 1
DESCENDING = -1


class DocumentStore:
    """Persistence collaborator.

    Filters are equality matches on top-level fields; ``id`` matches the
    document identifier. A malformed identifier matches nothing.
    """

    async def find_by_id(self, collection: str, doc_id: str) -> Optional[Document]:
        return await self.find_one(collection, {"id": doc_id})

    async def find_one(self, collection: str, filters: Filters) -> Optional[Document]:
        raise NotImplementedError

    async def find(
        self,
        collection: str,
        filters: Optional[Filters] = None,
        sort: Optional[Sort] = None
    ) -> List[Document]:
        raise NotImplementedError

    async def insert(self, collection: str, document: Document) -> Document:
        """Store a new document and return it with ``id`` and ``version`` set.

        Raises:
            DuplicateKey: If a field listed in UNIQUE_FIELDS is already taken
        """
        raise NotImplementedError

    async def save(self, collection: str, document: Document) -> Document:
        """
        Write back a document previously read from the store.

        Raises:
            ConcurrentUpdate: If the stored version moved on since the read
        """
        raise NotImplementedError

    async def find_one_and_update(
        self,
        collection: str,
        filters: Filters,
        fields: Document
    ) -> Optional[Document]:
        """Set ``fields`` on the first match and return the updated document."""
        raise NotImplementedError

    async def find_one_and_remove(self, collection: str, filters: Filters) -> Optional[Document]:
        raise NotImplementedError

    async def delete_many(self, collection: str, filters: Filters) -> int:
        raise NotImplementedError

    async def open(self) -> None:
        """Prepare the store (indexes, connections) before serving requests."""
        return None

    async def close(self) -> None:
        return None
