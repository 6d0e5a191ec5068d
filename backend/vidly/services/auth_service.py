"""
Vidly Backend — Authentication Service
=======================================

What:  Password hashing/verification, token issuance and token verification.
Why:   Keeps every use of the signing key and the bcrypt context behind one
       object, constructed once at startup and owned by the AppContext.
How:   python-jose signs HS256 tokens carrying {"_id", "isAdmin"};
       passlib's bcrypt context hashes and verifies passwords.

Token Contract:
    issue_token(user)  → signed token, no expiry set by this service
    verify_token(tok)  → TokenClaims, or raises one of two DIFFERENT errors:
        - token missing           → AuthenticationError (401)
        - token present, invalid  → InvalidTokenError   (400)
    Callers must not collapse these; clients rely on the distinction.

Password Handling:
    bcrypt is deliberately slow (~50-250ms at cost 10), so hash and verify run
    in Starlette's threadpool and the event loop keeps serving other requests.
    passlib's verify compares in constant time; hashes are never compared
    with ==.
"""

import logging
from typing import Any, Mapping, Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from pymongo.asynchronous.database import AsyncDatabase
from starlette.concurrency import run_in_threadpool

from vidly.exceptions import AuthenticationError, InvalidTokenError, ValidationError
from vidly.repositories import UserRepository
from vidly.schemas.user import AuthIn, TokenClaims
from vidly.validation import parse_payload

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password."


class AuthService:
    """
    Token and password operations bound to one signing key.

    Raises ValueError at construction when the key is empty: a process
    without a key must not start, rather than fail on the first login.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        bcrypt_rounds: int = 10,
    ):
        if not secret_key:
            raise ValueError("A token signing key is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._pwd_context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=bcrypt_rounds,
        )

    # ── Tokens ────────────────────────────────────────────────────────────

    def issue_token(self, user: Mapping[str, Any]) -> str:
        """Sign {"_id", "isAdmin"} for a stored user document."""
        claims = {
            "_id": str(user["_id"]),
            "isAdmin": bool(user.get("isAdmin", False)),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: Optional[str]) -> TokenClaims:
        """
        Verify the signature and decode the claims.

        Raises:
            AuthenticationError: no token supplied (→ 401)
            InvalidTokenError:   bad signature, malformed token, or claims
                                 without a user id (→ 400)
        """
        if not token:
            raise AuthenticationError()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as e:
            logger.warning("Rejected auth token: %s", type(e).__name__)
            raise InvalidTokenError()
        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Rejected auth token: claims missing user id")
            raise InvalidTokenError()

    # ── Passwords ─────────────────────────────────────────────────────────

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(self._pwd_context.hash, password)

    async def verify_password(self, password: str, hashed: str) -> bool:
        """
        Constant-time check of `password` against a stored bcrypt hash.

        A stored value passlib cannot identify counts as a mismatch.
        """
        if not hashed:
            return False
        try:
            return await run_in_threadpool(self._pwd_context.verify, password, hashed)
        except ValueError:
            logger.error("Stored password hash could not be identified")
            return False

    # ── Login ─────────────────────────────────────────────────────────────

    async def login(self, db: AsyncDatabase, payload: Any) -> str:
        """
        POST /api/auth workflow: validate → find user → verify password → token.

        Unknown email and wrong password give the same message, so the
        endpoint cannot be used to discover which addresses are registered.

        Raises:
            ValidationError: invalid payload or invalid credentials (→ 400)
        """
        credentials = parse_payload(AuthIn, payload)
        user = await UserRepository(db).get_by_email(credentials.email)
        if user is None:
            raise ValidationError(message=INVALID_CREDENTIALS_MESSAGE)
        if not await self.verify_password(credentials.password, user.get("password", "")):
            raise ValidationError(message=INVALID_CREDENTIALS_MESSAGE)
        return self.issue_token(user)
