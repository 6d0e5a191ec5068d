"""
Vidly Backend — Base Repository
================================

What:  CRUD over one MongoDB collection: list, get, create, replace, delete.
Who:   Subclassed once per entity; instantiated per call with the database
       handle taken from the AppContext.

Semantics:
    - get / replace / delete return None when nothing matches; turning that
      into a 404 is the service's decision, not the repository's.
    - replace is a FULL replacement (PUT semantics): fields missing from the
      new document are gone afterwards. Only `_id` survives.
    - Every driver exception except the ones a subclass handles explicitly
      is wrapped in DatabaseError, so raw pymongo errors never reach routes.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pymongo import ReturnDocument
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from vidly.database import to_object_id
from vidly.exceptions import DatabaseError

logger = logging.getLogger(__name__)

Document = Dict[str, Any]
SortSpec = Sequence[Tuple[str, int]]


class MongoRepository:
    """Shared CRUD for a single collection."""

    collection_name: str = ""
    # Default order for list(); subclasses override
    default_sort: SortSpec = (("_id", 1),)

    def __init__(self, db: AsyncDatabase):
        self.db = db

    @property
    def collection(self) -> AsyncCollection:
        return self.db[self.collection_name]

    def _wrap(self, operation: str, exc: PyMongoError) -> DatabaseError:
        logger.error(
            "Database error during %s on %s: %s",
            operation, self.collection_name, str(exc),
        )
        return DatabaseError(
            context={
                "collection": self.collection_name,
                "operation": operation,
                "error_type": type(exc).__name__,
            }
        )

    async def list(self, sort: Optional[SortSpec] = None) -> List[Document]:
        """All documents of the collection in the given order. No pagination."""
        try:
            cursor = self.collection.find({}).sort(list(sort or self.default_sort))
            return await cursor.to_list(None)
        except PyMongoError as e:
            raise self._wrap("list", e)

    async def get(self, document_id: Any, projection: Optional[Document] = None) -> Optional[Document]:
        try:
            return await self.collection.find_one(
                {"_id": to_object_id(document_id)}, projection
            )
        except PyMongoError as e:
            raise self._wrap("get", e)

    async def create(self, document: Document) -> Document:
        """Insert and return the document with its generated `_id`."""
        document = dict(document)
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise self._wrap("create", e)
        document["_id"] = result.inserted_id
        return document

    async def replace(self, document_id: Any, document: Document) -> Optional[Document]:
        """Full replace; returns the stored document after the write, or None."""
        try:
            return await self.collection.find_one_and_replace(
                {"_id": to_object_id(document_id)},
                document,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._wrap("replace", e)

    async def delete(self, document_id: Any) -> Optional[Document]:
        """Remove and return the deleted document, or None if absent."""
        try:
            return await self.collection.find_one_and_delete(
                {"_id": to_object_id(document_id)}
            )
        except PyMongoError as e:
            raise self._wrap("delete", e)
