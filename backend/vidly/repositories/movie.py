"""
Vidly Backend — Movie Repository
=================================

Stock Invariant:
    numberInStock never goes below zero.

    Taking a copy is ONE conditional update: "decrement numberInStock where
    _id matches AND numberInStock > 0". MongoDB applies it atomically per
    document, so when N requests race for the last copy exactly one update
    matches and the rest get None back. A read-check-then-write sequence
    would let all of them see "1 in stock" before anyone decrements.
"""

from typing import Any, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from vidly.database import MOVIES, to_object_id
from vidly.repositories.base import Document, MongoRepository


class MovieRepository(MongoRepository):
    collection_name = MOVIES
    default_sort = (("title", 1),)

    async def take_one_from_stock(self, movie_id: Any) -> Optional[Document]:
        """
        Atomically decrement stock if at least one copy is left.

        Returns:
            The movie after the decrement, or None when the movie is out of
            stock (or no longer exists).
        """
        try:
            return await self.collection.find_one_and_update(
                {"_id": to_object_id(movie_id), "numberInStock": {"$gt": 0}},
                {"$inc": {"numberInStock": -1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._wrap("take_one_from_stock", e)

    async def return_one_to_stock(self, movie_id: Any) -> Optional[Document]:
        """Increment stock by one; None if the movie was deleted meanwhile."""
        try:
            return await self.collection.find_one_and_update(
                {"_id": to_object_id(movie_id)},
                {"$inc": {"numberInStock": 1}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._wrap("return_one_to_stock", e)
