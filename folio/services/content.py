"""Posts and projects: create, read, delete, like and comment."""

import logging
from typing import Any, Dict, List

from folio.db.store import DESCENDING, USERS, DocumentStore
from folio.errors import NotAuthorized, UserNotFound
from folio.models.content_kinds import ContentKind
from folio.services.comments import CommentLedger
from folio.services.likes import LikeToggleEngine

logger = logging.getLogger(__name__)


class ContentService:
    """Operations on one kind of content item (posts or projects)."""

    def __init__(self, store: DocumentStore, kind: ContentKind):
        self.store = store
        self.kind = kind
        self.likes = LikeToggleEngine(store, kind)
        self.comments = CommentLedger(store, kind)

    async def create(self, caller_id: str, fields: Dict[str, Any]) -> dict:
        """
        Create an item authored by the caller.

        Args:
            caller_id: Authenticated user id
            fields: Body fields of the item (text, or title and description)

        Returns:
            dict: The stored item

        Raises:
            UserNotFound: If the caller's account no longer exists
        """
        author = await self.store.find_by_id(USERS, caller_id)
        if author is None:
            raise UserNotFound()

        document = self.kind.document(
            user=caller_id,
            name=author["name"],
            avatar=author.get("avatar"),
            **fields,
        )
        item = await self.store.insert(self.kind.collection, document.model_dump())
        logger.info("User %s created %s %s", caller_id, self.kind.label.lower(), item["id"])
        return item

    async def list(self) -> List[dict]:
        """All items, most recent first."""
        return await self.store.find(self.kind.collection, sort=[("date", DESCENDING)])

    async def get(self, item_id: str) -> dict:
        """
        Fetch one item.

        Raises:
            NotFound: The kind's not-found error for unknown or malformed ids
        """
        item = await self.store.find_by_id(self.kind.collection, item_id)
        if item is None:
            raise self.kind.not_found()
        return item

    async def delete(self, item_id: str, caller_id: str) -> None:
        item = await self.get(item_id)
        if str(item["user"]) != caller_id:
            raise NotAuthorized()
        await self.store.find_one_and_remove(self.kind.collection, {"id": item_id})
        logger.info("User %s removed %s %s", caller_id, self.kind.label.lower(), item_id)

    async def like(self, item_id: str, caller_id: str) -> List[dict]:
        return await self.likes.like(await self.get(item_id), caller_id)

    async def unlike(self, item_id: str, caller_id: str) -> List[dict]:
        return await self.likes.unlike(await self.get(item_id), caller_id)

    async def add_comment(self, item_id: str, caller_id: str, text: str) -> List[dict]:
        return await self.comments.add_comment(await self.get(item_id), caller_id, text)

    async def delete_comment(self, item_id: str, comment_id: str, caller_id: str) -> List[dict]:
        return await self.comments.delete_comment(await self.get(item_id), comment_id, caller_id)
