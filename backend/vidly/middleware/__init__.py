# Middleware package init
"""
Vidly Backend — Middleware Package
===================================

What:  Cross-cutting concerns applied to every request, plus the route-level
       gates that individual endpoints opt into.

Middleware Chain (every request, order matters!):
    Request → [Request ID] → [Logging] → [CORS] → Route

    1. Request ID FIRST: correlation ID exists before anything logs
    2. Logging: method, path, status and duration with that ID
    3. CORS: Applied by FastAPI's CORSMiddleware (handles preflight)

Route Gates (per endpoint, as FastAPI dependencies):
    - object_id.validate_object_id   → 404 "Invalid ID." for malformed {id}
    - auth.require_authenticated     → 401 no token / 400 bad token
    - auth.require_admin             → 403 unless claims.isAdmin
"""
