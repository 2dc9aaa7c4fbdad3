"""Locate and mutate ordered sub-collections embedded in a parent document.

Likes, comments, experience and education entries are all lists of dicts
stored inside their parent. New entries go to the front so the most
recent one comes first.
"""

from typing import Any, Dict, List, Optional, Type

from folio.errors import NotFound
from folio.utils.identifiers import new_id

NOT_FOUND = -1

Entry = Dict[str, Any]


def locate(entries: List[Entry], target: Any, key: str = "id") -> int:
    """
    Find the position of the first entry whose ``key`` matches ``target``.

    Identifiers are compared as strings.

    Args:
        entries: Ordered sub-collection
        target: Identifier to look for
        key: Entry field holding the identifier

    Returns:
        int: Position of the match, or NOT_FOUND (-1)
    """
    wanted = str(target)
    for position, entry in enumerate(entries):
        if str(entry.get(key)) == wanted:
            return position
    return NOT_FOUND


class SubCollection:
    """One ordered list embedded in a parent document, keyed by ``key``."""

    def __init__(
        self,
        document: Dict[str, Any],
        field: str,
        key: str = "id",
        not_found: Type[NotFound] = NotFound
    ):
        self.document = document
        self.field = field
        self.key = key
        self.not_found = not_found

    @property
    def entries(self) -> List[Entry]:
        return self.document.setdefault(self.field, [])

    def position(self, target: Any) -> int:
        return locate(self.entries, target, self.key)

    def get(self, target: Any) -> Optional[Entry]:
        position = self.position(target)
        if position == NOT_FOUND:
            return None
        return self.entries[position]

    def contains(self, target: Any) -> bool:
        return self.position(target) != NOT_FOUND

    def prepend(self, entry: Entry) -> Entry:
        """Insert an entry at the front, generating its id when keyed by id."""
        if self.key == "id" and not entry.get("id"):
            entry = {"id": new_id(), **entry}
        self.entries.insert(0, entry)
        return entry

    def remove(self, target: Any) -> Entry:
        """
        Remove the entry matching ``target``.

        Raises:
            NotFound: The collection's not-found error when nothing matches
        """
        position = self.position(target)
        if position == NOT_FOUND:
            raise self.not_found()
        return self.entries.pop(position)

    def update(self, target: Any, fields: Entry) -> Entry:
        """Patch fields of the matching entry. The entry's key never changes."""
        entry = self.get(target)
        if entry is None:
            raise self.not_found()
        entry.update({name: value for name, value in fields.items() if name != self.key})
        return entry
