# Routes package init
"""
Vidly Backend — API Routes Package
===================================

Route Inventory:
    - genres.py:     /api/genres[/{id}]
    - movies.py:     /api/movies[/{id}]
    - customers.py:  /api/customers[/{id}]
    - rentals.py:    /api/rentals[/{id}], /api/returns
    - users.py:      /api/users, /api/users/me, /api/auth
    - health.py:     /health

Design Principle:
    Routes are THIN. They declare gates (auth, id format) as dependencies,
    hand the raw body to a service, and return what it gives back. Every
    failure is an exception mapped to a status code in main.py.
"""
