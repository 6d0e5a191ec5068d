"""
Vidly Backend — Rental Repository
"""

from datetime import datetime
from typing import Any, Optional

from pymongo import ReturnDocument
from pymongo.errors import PyMongoError

from vidly.database import RENTALS, to_object_id
from vidly.repositories.base import Document, MongoRepository


class RentalRepository(MongoRepository):
    collection_name = RENTALS
    # Newest first
    default_sort = (("dateOut", -1),)

    async def lookup(self, customer_id: Any, movie_id: Any) -> Optional[Document]:
        """
        Rental for this customer/movie pair, preferring one still out.

        A customer can rent the same title again after returning it, so an
        open rental wins over older returned ones; otherwise the most recent.
        """
        query = {
            "customer._id": to_object_id(customer_id),
            "movie._id": to_object_id(movie_id),
        }
        try:
            open_rental = await self.collection.find_one(
                {**query, "dateReturned": None}, sort=[("dateOut", -1)]
            )
            if open_rental is not None:
                return open_rental
            return await self.collection.find_one(query, sort=[("dateOut", -1)])
        except PyMongoError as e:
            raise self._wrap("lookup", e)

    async def mark_returned(
        self, rental_id: Any, date_returned: datetime, rental_fee: float
    ) -> Optional[Document]:
        """
        Set the return date and fee, only if the rental is still open.

        Returns None when another request already processed the return.
        """
        try:
            return await self.collection.find_one_and_update(
                {"_id": to_object_id(rental_id), "dateReturned": None},
                {"$set": {"dateReturned": date_returned, "rentalFee": rental_fee}},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._wrap("mark_returned", e)
