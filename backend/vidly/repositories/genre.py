"""Genre persistence."""

from vidly.database import GENRES
from vidly.repositories.base import MongoRepository


class GenreRepository(MongoRepository):
    collection_name = GENRES
    default_sort = (("name", 1),)
