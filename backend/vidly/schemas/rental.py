"""
Vidly Backend — Rental Schemas
===============================

A rental carries value copies of the customer and the movie as they were when
the rental was created. They have no live link back to the source documents:
a later rename, price change or deletion leaves the rental untouched, which is
what keeps historical fees correct.
"""

from datetime import datetime
from typing import Optional

from vidly.schemas.common import DocumentModel, InputModel, ObjectIdStr


class RentalIn(InputModel):
    """Payload for POST /api/rentals."""
    customer_id: ObjectIdStr
    movie_id: ObjectIdStr


class ReturnIn(InputModel):
    """Payload for POST /api/returns."""
    customer_id: ObjectIdStr
    movie_id: ObjectIdStr


class CustomerSnapshot(DocumentModel):
    name: str
    is_gold: bool = False
    phone: str


class MovieSnapshot(DocumentModel):
    title: str
    daily_rental_rate: float


class RentalOut(DocumentModel):
    customer: CustomerSnapshot
    movie: MovieSnapshot
    date_out: datetime
    date_returned: Optional[datetime] = None
    rental_fee: Optional[float] = None
