from bson import ObjectId
from fastapi import HTTPException, status


def parse_object_id(value: str, detail: str = "Invalid ID") -> ObjectId:
    """Parse a path or body identifier, raising 400 when it is malformed."""
    if not ObjectId.is_valid(value):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail
        )
    return ObjectId(value)
