"""
Vidly Backend — Rental & Return Route Handlers
===============================================

Routes:
    GET  /api/rentals        list, newest dateOut first     (public)
    GET  /api/rentals/{id}   single rental                  (public)
    POST /api/rentals        rent one copy                  (public)
    POST /api/returns        return a rented copy           (authenticated)

Stock accounting lives in rental_service; see its module docstring for why
the decrement is a single conditional update.
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from vidly.context import AppContext, get_context
from vidly.middleware.auth import require_authenticated
from vidly.middleware.object_id import validate_object_id
from vidly.schemas.common import ErrorResponse
from vidly.schemas.rental import RentalOut
from vidly.services.rental_service import rental_service

router = APIRouter(prefix="/api/rentals", tags=["Rentals"])
returns_router = APIRouter(prefix="/api/returns", tags=["Rentals"])


@router.get("", response_model=List[RentalOut], summary="List all rentals")
async def list_rentals(ctx: AppContext = Depends(get_context)) -> List[RentalOut]:
    return await rental_service.list_rentals(ctx.db)


@router.get(
    "/{id}",
    response_model=RentalOut,
    responses={404: {"description": "Invalid ID or rental not found", "model": ErrorResponse}},
    summary="Get a rental by ID",
)
async def get_rental(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> RentalOut:
    return await rental_service.get_rental(ctx.db, id)


@router.post(
    "",
    response_model=RentalOut,
    responses={
        400: {
            "description": "Invalid payload, unknown customer or movie, or movie not in stock",
            "model": ErrorResponse,
        },
    },
    summary="Rent a movie",
)
async def create_rental(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> RentalOut:
    return await rental_service.create_rental(ctx.db, payload)


@returns_router.post(
    "",
    response_model=RentalOut,
    dependencies=[Depends(require_authenticated)],
    responses={
        400: {"description": "Invalid payload or return already processed", "model": ErrorResponse},
        401: {"description": "No token provided", "model": ErrorResponse},
        404: {"description": "No rental for this customer/movie", "model": ErrorResponse},
    },
    summary="Return a rented movie",
)
async def create_return(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> RentalOut:
    return await rental_service.process_return(ctx.db, payload)
