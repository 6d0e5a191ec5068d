"""
Vidly Backend — User & Auth Schemas
====================================

Security:
    No output model declares a password field. Stored documents carry the
    bcrypt hash under `password`; pydantic drops undeclared keys when these
    models are built, so a hash can never reach a response body.
"""

from pydantic import Field, StrictBool

from vidly.schemas.common import DocumentModel, EmailStr, InputModel, Password


class UserIn(InputModel):
    """Payload for POST /api/users (registration)."""
    name: str = Field(min_length=2, max_length=50)
    email: EmailStr
    password: Password


class AuthIn(InputModel):
    """Payload for POST /api/auth (login)."""
    email: EmailStr
    password: Password


class UserOut(DocumentModel):
    """Sanitized user returned on registration."""
    name: str
    email: str


class UserProfile(UserOut):
    """Sanitized user returned by GET /api/users/me."""
    is_admin: bool = False


class TokenClaims(DocumentModel):
    """
    Decoded payload of a verified auth token: {"_id": <user id>, "isAdmin": bool}.

    Any extra registered claims (iat, exp) are ignored.
    """
    is_admin: StrictBool = False
