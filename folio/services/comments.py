"""Comment ledger: author-owned comments on a content item."""

import logging
from typing import List

from folio.db.store import USERS, DocumentStore
from folio.errors import CommentNotFound, NotAuthorized, UserNotFound
from folio.models.content_kinds import ContentKind
from folio.models.documents import Comment
from folio.services.subcollection import SubCollection

logger = logging.getLogger(__name__)


class CommentLedger:
    """Append and remove comments on an already fetched content item."""

    def __init__(self, store: DocumentStore, kind: ContentKind):
        self.store = store
        self.kind = kind

    def _comments(self, item: dict) -> SubCollection:
        return SubCollection(item, "comments", not_found=CommentNotFound)

    async def add_comment(self, item: dict, caller_id: str, text: str) -> List[dict]:
        """
        Add a comment at the front of the item's comments.

        The author's current name and avatar are copied into the comment and
        are not refreshed by later profile edits.

        Args:
            item: Content item document
            caller_id: Authenticated user id
            text: Comment text (already validated as non-empty)

        Returns:
            List[dict]: The item's comments, newest first

        Raises:
            UserNotFound: If the caller's account no longer exists
        """
        author = await self.store.find_by_id(USERS, caller_id)
        if author is None:
            raise UserNotFound()

        comment = Comment(
            user=caller_id,
            text=text,
            name=author["name"],
            avatar=author.get("avatar"),
        )
        comments = self._comments(item)
        comments.prepend(comment.model_dump())
        await self.store.save(self.kind.collection, item)
        logger.info("User %s commented on %s %s", caller_id, self.kind.label.lower(), item["id"])
        return comments.entries

    async def delete_comment(self, item: dict, comment_id: str, caller_id: str) -> List[dict]:
        """
        Delete a comment. Only its author may do so.

        Raises:
            CommentNotFound: If no comment has that id
            NotAuthorized: If the caller did not write the comment
        """
        comments = self._comments(item)
        comment = comments.get(comment_id)
        if comment is None:
            raise CommentNotFound()
        if str(comment["user"]) != caller_id:
            raise NotAuthorized()

        comments.remove(comment_id)
        await self.store.save(self.kind.collection, item)
        logger.info("User %s deleted comment %s", caller_id, comment_id)
        return comments.entries
