"""Document persistence."""

from folio.db.store import (
    CHARTS,
    POSTS,
    PROFILES,
    PROJECTS,
    USERS,
    DocumentStore,
)

__all__ = ["CHARTS", "POSTS", "PROFILES", "PROJECTS", "USERS", "DocumentStore", "build_store"]


def build_store(settings) -> DocumentStore:
    """
    Create the document store described by the settings.

    Args:
        settings: Application settings

    Returns:
        DocumentStore: MongoDB store when ``database_url`` is set, otherwise in-memory
    """
    if settings.database_url:
        from folio.db.mongo_store import MongoStore

        return MongoStore(settings.database_url, settings.database_name)

    from folio.db.memory_store import MemoryStore

    return MemoryStore()
