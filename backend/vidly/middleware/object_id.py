"""
Vidly Backend — Identifier Format Guard
========================================

What:  Rejects path identifiers that cannot be MongoDB ObjectIds.
Why:   "abc" can never match a document, so it is answered as 404 before
       any lookup happens. It also keeps ObjectId() conversion errors out
       of handlers, which would otherwise surface as 500s.
How:   A FastAPI dependency reading the `{id}` path parameter. Valid values
       pass through unchanged; routes list it in `dependencies=[...]` or take
       its return value.
"""

from vidly.database import is_valid_object_id
from vidly.exceptions import NotFoundError


async def validate_object_id(id: str) -> str:
    if not is_valid_object_id(id):
        raise NotFoundError(resource="document", resource_id=id, message="Invalid ID.")
    return id
