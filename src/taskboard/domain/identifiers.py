"""Document identifier helpers."""

from typing import Any

from bson import ObjectId


def is_valid_id(value: Any) -> bool:
    """Whether ``value`` is a structurally valid store identifier (24-hex ObjectId)."""
    if isinstance(value, ObjectId):
        return True
    return isinstance(value, str) and len(value) == 24 and ObjectId.is_valid(value)


def to_object_id(value: Any) -> ObjectId | None:
    """Convert ``value`` to an ObjectId, or None when it is not a valid identifier."""
    if isinstance(value, ObjectId):
        return value
    if not is_valid_id(value):
        return None
    return ObjectId(value)
