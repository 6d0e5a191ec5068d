"""
Vidly Backend — Genre Route Handlers
=====================================

Routes:
    GET    /api/genres        list, name ascending         (public)
    GET    /api/genres/{id}   single genre                 (public)
    POST   /api/genres        create                       (authenticated)
    PUT    /api/genres/{id}   full replace                 (public)
    DELETE /api/genres/{id}   delete                       (authenticated + admin)

Routes stay thin: gates run as dependencies, everything else is
genre_service. Errors are raised, never returned; the global handlers in
main.py produce the status codes.
"""

import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends

from vidly.context import AppContext, get_context
from vidly.middleware.auth import require_admin, require_authenticated
from vidly.middleware.object_id import validate_object_id
from vidly.schemas.common import ErrorResponse
from vidly.schemas.genre import GenreOut
from vidly.services.genre_service import genre_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/genres", tags=["Genres"])


@router.get("", response_model=List[GenreOut], summary="List all genres")
async def list_genres(ctx: AppContext = Depends(get_context)) -> List[GenreOut]:
    return await genre_service.list_genres(ctx.db)


@router.get(
    "/{id}",
    response_model=GenreOut,
    responses={404: {"description": "Invalid ID or genre not found", "model": ErrorResponse}},
    summary="Get a genre by ID",
)
async def get_genre(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> GenreOut:
    return await genre_service.get_genre(ctx.db, id)


@router.post(
    "",
    response_model=GenreOut,
    dependencies=[Depends(require_authenticated)],
    responses={
        400: {"description": "Invalid payload or malformed token", "model": ErrorResponse},
        401: {"description": "No token provided", "model": ErrorResponse},
    },
    summary="Create a genre",
)
async def create_genre(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> GenreOut:
    return await genre_service.create_genre(ctx.db, payload)


@router.put(
    "/{id}",
    response_model=GenreOut,
    responses={
        400: {"description": "Invalid payload", "model": ErrorResponse},
        404: {"description": "Genre not found", "model": ErrorResponse},
    },
    summary="Replace a genre",
)
async def replace_genre(
    id: str = Depends(validate_object_id),
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> GenreOut:
    return await genre_service.replace_genre(ctx.db, id, payload)


@router.delete(
    "/{id}",
    response_model=GenreOut,
    dependencies=[Depends(require_admin)],
    responses={
        400: {"description": "Malformed token", "model": ErrorResponse},
        401: {"description": "No token provided", "model": ErrorResponse},
        403: {"description": "Not an admin", "model": ErrorResponse},
        404: {"description": "Genre not found", "model": ErrorResponse},
    },
    summary="Delete a genre",
)
async def delete_genre(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> GenreOut:
    return await genre_service.delete_genre(ctx.db, id)
