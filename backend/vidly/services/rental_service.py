"""
Vidly Backend — Rental Service (Rentals & Returns)
===================================================

What:  Creates rentals, lists/fetches them, and processes returns.
Who:   Called by the /api/rentals and /api/returns route handlers.

Rental Creation (POST /api/rentals):
    ┌──────────┐   ┌───────────┐   ┌──────────┐   ┌─────────────┐   ┌────────┐
    │ Validate │──▶│ Customer? │──▶│  Movie?  │──▶│ Take 1 copy │──▶│ Insert │
    └──────────┘   └───────────┘   └──────────┘   │  (atomic)   │   │ rental │
         400            400             400       └─────────────┘   └────────┘
                 "Invalid customer." "Invalid movie."   400 "Movie not in stock."

    The stock decrement happens BEFORE the insert and is a single
    conditional update (see MovieRepository.take_one_from_stock). Two
    requests racing for the last copy cannot both pass it. If the insert
    then fails, the copy is put back before the error propagates, so a
    failed request never leaks stock.

Returns (POST /api/returns):
    lookup rental (404 "Rental not found.") → already returned? (400)
    → set dateReturned + rentalFee, conditional on still being open (400 if
    another request won) → put one copy back in stock → 200 with the rental.

Fee:
    whole days elapsed since dateOut × the dailyRentalRate captured in the
    rental's movie snapshot (not the movie's current rate).
"""

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

from pymongo.asynchronous.database import AsyncDatabase

from vidly.exceptions import NotFoundError, ValidationError
from vidly.repositories import CustomerRepository, MovieRepository, RentalRepository
from vidly.schemas.rental import RentalIn, RentalOut, ReturnIn
from vidly.validation import parse_payload

logger = logging.getLogger(__name__)


def calculate_rental_fee(
    date_out: datetime, daily_rental_rate: float, now: Optional[datetime] = None
) -> float:
    """Whole days between date_out and now, times the daily rate."""
    now = now or datetime.now(timezone.utc)
    if date_out.tzinfo is None:
        date_out = date_out.replace(tzinfo=timezone.utc)
    days = max((now - date_out).days, 0)
    return days * daily_rental_rate


class RentalService:

    async def list_rentals(self, db: AsyncDatabase) -> List[RentalOut]:
        """All rentals, newest dateOut first."""
        rentals = await RentalRepository(db).list()
        return [RentalOut.model_validate(r) for r in rentals]

    async def get_rental(self, db: AsyncDatabase, rental_id: str) -> RentalOut:
        rental = await RentalRepository(db).get(rental_id)
        if rental is None:
            raise NotFoundError(resource="rental", resource_id=rental_id)
        return RentalOut.model_validate(rental)

    async def create_rental(self, db: AsyncDatabase, payload: Any) -> RentalOut:
        """
        Rent one copy of a movie to a customer.

        Raises:
            ValidationError: invalid payload, unknown customer or movie, or
                             no copy left (→ 400)
            DatabaseError:   persistence failure (→ 500)
        """
        data = parse_payload(RentalIn, payload)
        movies = MovieRepository(db)

        customer = await CustomerRepository(db).get(data.customer_id)
        if customer is None:
            raise ValidationError(message="Invalid customer.", field="customerId")

        movie = await movies.get(data.movie_id)
        if movie is None:
            raise ValidationError(message="Invalid movie.", field="movieId")

        if await movies.take_one_from_stock(movie["_id"]) is None:
            raise ValidationError(message="Movie not in stock.", field="movieId")

        document = {
            "customer": {
                "_id": customer["_id"],
                "name": customer["name"],
                "isGold": customer.get("isGold", False),
                "phone": customer["phone"],
            },
            "movie": {
                "_id": movie["_id"],
                "title": movie["title"],
                "dailyRentalRate": movie["dailyRentalRate"],
            },
            "dateOut": datetime.now(timezone.utc),
            "dateReturned": None,
            "rentalFee": None,
        }

        try:
            rental = await RentalRepository(db).create(document)
        except Exception:
            logger.error("Rental insert failed; restoring stock for movie %s", movie["_id"])
            await movies.return_one_to_stock(movie["_id"])
            raise

        logger.info(
            "Rental %s created: customer=%s movie=%s",
            rental["_id"], customer["_id"], movie["_id"],
        )
        return RentalOut.model_validate(rental)

    async def process_return(self, db: AsyncDatabase, payload: Any) -> RentalOut:
        """
        Close the rental for a customer/movie pair.

        Raises:
            ValidationError: invalid payload or return already processed (→ 400)
            NotFoundError:   no rental for this customer/movie (→ 404)
        """
        data = parse_payload(ReturnIn, payload)
        rentals = RentalRepository(db)

        rental = await rentals.lookup(data.customer_id, data.movie_id)
        if rental is None:
            raise NotFoundError(resource="rental", message="Rental not found.")
        if rental.get("dateReturned") is not None:
            raise ValidationError(message="Return already processed.")

        now = datetime.now(timezone.utc)
        fee = calculate_rental_fee(rental["dateOut"], rental["movie"]["dailyRentalRate"], now)

        returned = await rentals.mark_returned(rental["_id"], now, fee)
        if returned is None:
            # Another request closed it between lookup and update
            raise ValidationError(message="Return already processed.")

        await MovieRepository(db).return_one_to_stock(rental["movie"]["_id"])
        logger.info("Rental %s returned: fee=%.2f", rental["_id"], fee)
        return RentalOut.model_validate(returned)


rental_service = RentalService()
