# Services package init
"""
Vidly Backend — Services Layer
===============================

What:  Business logic between routes (HTTP) and repositories (MongoDB).

Service Inventory:
    - AuthService:      tokens and passwords; one instance per AppContext
    - genre_service, movie_service, customer_service: entity CRUD
    - rental_service:   rentals with atomic stock accounting, and returns
    - user_service:     registration and profile

Entity services are stateless singletons; the database handle is passed in
on every call, taken from the request's AppContext.
"""
