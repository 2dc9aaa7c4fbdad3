"""Shape stored documents for API responses."""

from typing import Any

HIDDEN_FIELDS = ("password", "version", "_id")


def public(value: Any) -> Any:
    """Strip storage-only fields from a document or a list of documents."""
    if isinstance(value, list):
        return [public(item) for item in value]
    if isinstance(value, dict):
        return {key: item for key, item in value.items() if key not in HIDDEN_FIELDS}
    return value
