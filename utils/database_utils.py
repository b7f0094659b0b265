"""
Utility functions for database operations with MongoDB.
"""
from bson.objectid import ObjectId
from bson.errors import InvalidId

def safe_object_id(value):
    """
    Convert a string to an ObjectId.

    Args:
        value (str | ObjectId): Identifier from a URL or document

    Returns:
        ObjectId: Converted id, or None if the value is not a valid ObjectId
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        return None
