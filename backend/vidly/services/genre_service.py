"""
Vidly Backend — Genre Service
==============================

What:  Business logic for genres: list, get, create, replace, delete.
Who:   Called by the /api/genres route handlers with the request's database.

Flow per mutating call:
    validate payload (→ 400) → persistence call → None means 404 → GenreOut
"""

import logging
from typing import Any, List

from pymongo.asynchronous.database import AsyncDatabase

from vidly.exceptions import NotFoundError
from vidly.repositories import GenreRepository
from vidly.schemas.genre import GenreIn, GenreOut
from vidly.validation import parse_payload

logger = logging.getLogger(__name__)


class GenreService:

    async def list_genres(self, db: AsyncDatabase) -> List[GenreOut]:
        """All genres, name ascending."""
        genres = await GenreRepository(db).list()
        return [GenreOut.model_validate(g) for g in genres]

    async def get_genre(self, db: AsyncDatabase, genre_id: str) -> GenreOut:
        genre = await GenreRepository(db).get(genre_id)
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        return GenreOut.model_validate(genre)

    async def create_genre(self, db: AsyncDatabase, payload: Any) -> GenreOut:
        data = parse_payload(GenreIn, payload)
        genre = await GenreRepository(db).create({"name": data.name})
        logger.info("Genre created: %s", genre["_id"])
        return GenreOut.model_validate(genre)

    async def replace_genre(self, db: AsyncDatabase, genre_id: str, payload: Any) -> GenreOut:
        data = parse_payload(GenreIn, payload)
        genre = await GenreRepository(db).replace(genre_id, {"name": data.name})
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        return GenreOut.model_validate(genre)

    async def delete_genre(self, db: AsyncDatabase, genre_id: str) -> GenreOut:
        genre = await GenreRepository(db).delete(genre_id)
        if genre is None:
            raise NotFoundError(resource="genre", resource_id=genre_id)
        logger.info("Genre deleted: %s", genre_id)
        return GenreOut.model_validate(genre)


genre_service = GenreService()
