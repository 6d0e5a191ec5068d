"""
Vidly Backend — User Service
=============================

What:  Registration and profile lookup.

Registration Flow (POST /api/users):
    1. Validate payload                              → 400 first message
    2. Email already taken?                          → 400 "User already registered."
    3. Hash the password (bcrypt, off the event loop)
    4. Insert; the unique email index catches a concurrent duplicate → same 400
    5. Issue a token for the new user
    6. Return (sanitized user, token); the route puts the token in x-auth-token

The plaintext password exists only in the validated payload object and is
never stored, logged, or returned.
"""

import logging
from typing import Any, Tuple

from pymongo.asynchronous.database import AsyncDatabase

from vidly.database import is_valid_object_id
from vidly.exceptions import NotFoundError, ValidationError
from vidly.repositories import UserRepository
from vidly.repositories.user import DUPLICATE_EMAIL_MESSAGE
from vidly.schemas.user import TokenClaims, UserIn, UserOut, UserProfile
from vidly.services.auth_service import AuthService
from vidly.validation import parse_payload

logger = logging.getLogger(__name__)


class UserService:

    async def register(
        self, db: AsyncDatabase, auth: AuthService, payload: Any
    ) -> Tuple[UserOut, str]:
        data = parse_payload(UserIn, payload)
        users = UserRepository(db)

        if await users.get_by_email(data.email) is not None:
            raise ValidationError(message=DUPLICATE_EMAIL_MESSAGE, field="email")

        user = await users.create({
            "name": data.name,
            "email": data.email,
            "password": await auth.hash_password(data.password),
            "isAdmin": False,
        })
        logger.info("User registered: %s", user["_id"])

        token = auth.issue_token(user)
        return UserOut.model_validate(user), token

    async def get_current_user(self, db: AsyncDatabase, claims: TokenClaims) -> UserProfile:
        """
        Profile of the token's subject, password excluded.

        A token can outlive its user (tokens carry no expiry); that case is
        a 404 rather than an authentication failure.
        """
        if not is_valid_object_id(claims.id):
            raise NotFoundError(resource="user", resource_id=claims.id)
        user = await UserRepository(db).get_profile(claims.id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=claims.id)
        return UserProfile.model_validate(user)


user_service = UserService()
