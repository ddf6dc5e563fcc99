"""
Helpers for moving identifiers between MongoDB documents and API models
"""

from typing import Any, Iterable, List

from bson import ObjectId


def to_object_id(value: Any) -> Any:
    """Convert a string id to ObjectId when it is a valid one, otherwise return it unchanged"""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return value


def to_object_ids(values: Iterable[Any]) -> List[Any]:
    """Convert a list of ids for storage"""
    return [to_object_id(value) for value in values]


def stringify_id(value: Any) -> Any:
    """Convert ObjectId (or a populated document with _id) to its string form"""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict) and "_id" in value:
        return str(value["_id"])
    return value
