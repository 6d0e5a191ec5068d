"""
Vidly Backend — Application Package
====================================

What:  REST backend for a movie rental shop: genres, movies, customers,
       rentals/returns, users and authentication.

Architecture Note:
    The backend follows a layered architecture:

    ┌─────────────────────────────────────┐
    │   Routes + Gates (API Layer)        │  ← HTTP, auth and id-format checks
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← validate → reference checks → persist
    ├─────────────────────────────────────┤
    │     Schemas + Validation (Data)     │  ← pydantic contracts, first-error messages
    ├─────────────────────────────────────┤
    │     Repositories (Persistence)      │  ← one MongoDB collection each
    └─────────────────────────────────────┘

    Process-wide state (settings, database handle, signing key) lives in one
    AppContext built at startup and injected into handlers.
"""

__version__ = "1.0.0"
