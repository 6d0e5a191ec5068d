# Repositories package init
"""
Vidly Backend — Persistence Accessors
======================================

What:  One repository per entity, each wrapping a single MongoDB collection.
Why:   Services never build queries themselves; they ask for "the movie with
       this id" or "take one copy out of stock" and get documents back.
How:   `MongoRepository` implements the CRUD shared by every entity and maps
       driver failures to DatabaseError. Subclasses add entity-specific
       queries (atomic stock updates, lookups by email, rental lookups).

Repository Inventory:
    - GenreRepository     → genres
    - MovieRepository     → movies    (+ take_one_from_stock / return_one_to_stock)
    - CustomerRepository  → customers
    - RentalRepository    → rentals   (+ lookup / mark_returned)
    - UserRepository      → users     (+ get_by_email / get_profile)
"""

from vidly.repositories.base import MongoRepository
from vidly.repositories.customer import CustomerRepository
from vidly.repositories.genre import GenreRepository
from vidly.repositories.movie import MovieRepository
from vidly.repositories.rental import RentalRepository
from vidly.repositories.user import UserRepository

__all__ = [
    "MongoRepository",
    "CustomerRepository",
    "GenreRepository",
    "MovieRepository",
    "RentalRepository",
    "UserRepository",
]
