# Schemas package init
"""
Vidly Backend — API Contracts
==============================

What:  Pydantic models for request payloads and response documents.
How:   One module per entity. `*In` models declare payload constraints and are
       consumed by vidly.validation; `*Out` models shape stored documents into
       responses (camelCase keys, identifier exposed as `_id`).

Module Inventory:
    - common.py:    shared base classes, identifier types, error/health models
    - genre.py, movie.py, customer.py, rental.py, user.py
"""
