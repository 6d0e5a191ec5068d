"""Customer persistence."""

from vidly.database import CUSTOMERS
from vidly.repositories.base import MongoRepository


class CustomerRepository(MongoRepository):
    collection_name = CUSTOMERS
    default_sort = (("name", 1),)
