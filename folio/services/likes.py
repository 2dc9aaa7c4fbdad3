"""Like toggle engine: at most one like per user on a content item."""

import logging
from typing import List

from folio.db.store import DocumentStore
from folio.errors import AlreadyLiked, NotYetLiked
from folio.models.content_kinds import ContentKind
from folio.models.documents import Like
from folio.services.subcollection import SubCollection

logger = logging.getLogger(__name__)


class LikeToggleEngine:
    """Add and remove the caller's like on an already fetched content item."""

    def __init__(self, store: DocumentStore, kind: ContentKind):
        self.store = store
        self.kind = kind

    def _likes(self, item: dict) -> SubCollection:
        return SubCollection(item, "likes", key="user")

    async def like(self, item: dict, caller_id: str) -> List[dict]:
        """
        Like an item.

        Args:
            item: Content item document
            caller_id: Authenticated user id

        Returns:
            List[dict]: The item's likes, newest first

        Raises:
            AlreadyLiked: If the caller already likes the item
        """
        likes = self._likes(item)
        if likes.contains(caller_id):
            raise AlreadyLiked(self.kind.label)

        likes.prepend(Like(user=caller_id).model_dump())
        await self.store.save(self.kind.collection, item)
        logger.info("User %s liked %s %s", caller_id, self.kind.label.lower(), item["id"])
        return likes.entries

    async def unlike(self, item: dict, caller_id: str) -> List[dict]:
        """
        Remove the caller's like.

        Raises:
            NotYetLiked: If the caller has not liked the item
        """
        likes = self._likes(item)
        if not likes.contains(caller_id):
            raise NotYetLiked(self.kind.label)

        likes.remove(caller_id)
        await self.store.save(self.kind.collection, item)
        logger.info("User %s unliked %s %s", caller_id, self.kind.label.lower(), item["id"])
        return likes.entries
