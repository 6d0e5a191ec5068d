"""
Vidly Backend — Movie Route Handlers
=====================================

Routes (all public):
    GET    /api/movies        list, title ascending
    GET    /api/movies/{id}   single movie
    POST   /api/movies        create  (400 "Invalid genre." for unknown genreId)
    PUT    /api/movies/{id}   full replace
    DELETE /api/movies/{id}   delete
"""

from typing import Any, List

from fastapi import APIRouter, Body, Depends

from vidly.context import AppContext, get_context
from vidly.middleware.object_id import validate_object_id
from vidly.schemas.common import ErrorResponse
from vidly.schemas.movie import MovieOut
from vidly.services.movie_service import movie_service

router = APIRouter(prefix="/api/movies", tags=["Movies"])

_NOT_FOUND = {404: {"description": "Invalid ID or movie not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Invalid payload or genre", "model": ErrorResponse}}


@router.get("", response_model=List[MovieOut], summary="List all movies")
async def list_movies(ctx: AppContext = Depends(get_context)) -> List[MovieOut]:
    return await movie_service.list_movies(ctx.db)


@router.get("/{id}", response_model=MovieOut, responses=_NOT_FOUND, summary="Get a movie by ID")
async def get_movie(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> MovieOut:
    return await movie_service.get_movie(ctx.db, id)


@router.post("", response_model=MovieOut, responses=_BAD_REQUEST, summary="Create a movie")
async def create_movie(
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> MovieOut:
    return await movie_service.create_movie(ctx.db, payload)


@router.put(
    "/{id}",
    response_model=MovieOut,
    responses={**_BAD_REQUEST, **_NOT_FOUND},
    summary="Replace a movie",
)
async def replace_movie(
    id: str = Depends(validate_object_id),
    payload: Any = Body(default=None),
    ctx: AppContext = Depends(get_context),
) -> MovieOut:
    return await movie_service.replace_movie(ctx.db, id, payload)


@router.delete("/{id}", response_model=MovieOut, responses=_NOT_FOUND, summary="Delete a movie")
async def delete_movie(
    id: str = Depends(validate_object_id),
    ctx: AppContext = Depends(get_context),
) -> MovieOut:
    return await movie_service.delete_movie(ctx.db, id)
