"""
Vidly Backend — Movie Schemas
==============================

A movie embeds a snapshot of its genre ({_id, name}) taken when the movie is
created or replaced. Renaming the genre later does not touch existing movies.
"""

from typing import Annotated, Any

from pydantic import BeforeValidator, Field
from pydantic_core import PydanticCustomError

from vidly.schemas.common import DocumentModel, InputModel, ObjectIdStr
from vidly.schemas.genre import GenreSnapshot


def _reject_bool_integer(value: Any) -> Any:
    # bool is an int subclass; lax mode would read true as 1
    if isinstance(value, bool):
        raise PydanticCustomError("int_bool", "must be an integer")
    return value


def _reject_bool_number(value: Any) -> Any:
    if isinstance(value, bool):
        raise PydanticCustomError("float_bool", "must be a number")
    return value


StockCount = Annotated[int, Field(ge=0, le=255), BeforeValidator(_reject_bool_integer)]
DailyRate = Annotated[float, Field(ge=0, le=255), BeforeValidator(_reject_bool_number)]


class MovieIn(InputModel):
    """Payload for POST/PUT /api/movies."""
    title: str = Field(min_length=5, max_length=50)
    genre_id: ObjectIdStr
    number_in_stock: StockCount
    daily_rental_rate: DailyRate


class MovieOut(DocumentModel):
    title: str
    genre: GenreSnapshot
    number_in_stock: int
    daily_rental_rate: float
