"""
Vidly Backend — Movie Service
==============================

What:  Business logic for movies, including the genre reference check.

Genre Reference:
    The payload names a genre by id (genreId). The genre is fetched and its
    {_id, name} copied into the movie. A genreId that matches nothing is a
    bad payload, so it is a 400 "Invalid genre." and never a 404: the movie
    route itself exists, the reference inside the body is what's wrong.
"""

from typing import Any, List

from pymongo.asynchronous.database import AsyncDatabase

from vidly.exceptions import NotFoundError, ValidationError
from vidly.repositories import GenreRepository, MovieRepository
from vidly.schemas.movie import MovieIn, MovieOut
from vidly.validation import parse_payload


class MovieService:

    async def _build_document(self, db: AsyncDatabase, data: MovieIn) -> dict:
        genre = await GenreRepository(db).get(data.genre_id)
        if genre is None:
            raise ValidationError(message="Invalid genre.", field="genreId")
        return {
            "title": data.title,
            "genre": {"_id": genre["_id"], "name": genre["name"]},
            "numberInStock": data.number_in_stock,
            "dailyRentalRate": data.daily_rental_rate,
        }

    async def list_movies(self, db: AsyncDatabase) -> List[MovieOut]:
        """All movies, title ascending."""
        movies = await MovieRepository(db).list()
        return [MovieOut.model_validate(m) for m in movies]

    async def get_movie(self, db: AsyncDatabase, movie_id: str) -> MovieOut:
        movie = await MovieRepository(db).get(movie_id)
        if movie is None:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        return MovieOut.model_validate(movie)

    async def create_movie(self, db: AsyncDatabase, payload: Any) -> MovieOut:
        data = parse_payload(MovieIn, payload)
        document = await self._build_document(db, data)
        movie = await MovieRepository(db).create(document)
        return MovieOut.model_validate(movie)

    async def replace_movie(self, db: AsyncDatabase, movie_id: str, payload: Any) -> MovieOut:
        data = parse_payload(MovieIn, payload)
        document = await self._build_document(db, data)
        movie = await MovieRepository(db).replace(movie_id, document)
        if movie is None:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        return MovieOut.model_validate(movie)

    async def delete_movie(self, db: AsyncDatabase, movie_id: str) -> MovieOut:
        movie = await MovieRepository(db).delete(movie_id)
        if movie is None:
            raise NotFoundError(resource="movie", resource_id=movie_id)
        return MovieOut.model_validate(movie)


movie_service = MovieService()
