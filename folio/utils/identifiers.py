"""Identifier and timestamp helpers for stored documents."""

from datetime import datetime, timezone
from bson import ObjectId


def new_id() -> str:
    """Generate a new document or sub-entry identifier."""
    return str(ObjectId())


def is_valid_id(value: object) -> bool:
    return isinstance(value, str) and ObjectId.is_valid(value)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
