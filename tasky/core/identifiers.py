"""
Identifier parsing for path parameters.
"""
import logging

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, status

logger = logging.getLogger(__name__)


def parse_object_id(value: str, kind: str = "resource") -> ObjectId:
    """
    Convert a 24-character hex string into an ObjectId.

    Args:
        value: Identifier text from the request path
        kind: Entity name used in the error message

    Returns:
        ObjectId: The parsed identifier

    Raises:
        HTTPException: 400 if ``value`` is not a valid identifier
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        logger.warning(f"Rejected malformed {kind} ID: {value!r}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {kind} ID: {value}"
        )
