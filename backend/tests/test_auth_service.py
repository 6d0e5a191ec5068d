"""
Vidly Backend — Auth Service Unit Tests
========================================

What:  Tests for token issuance/verification, password hashing and login.
Why:   The missing-token vs. invalid-token distinction (401 vs. 400) and the
       indistinguishable bad-credentials message are client-visible contracts.
How:   A real AuthService (bcrypt cost 4) and the in-memory database.

What we test:
    ✅ Issued tokens verify and carry {"_id", "isAdmin"}
    ✅ Missing token → AuthenticationError; garbage or foreign key → InvalidTokenError
    ✅ Tokens without a user id are rejected
    ✅ Hash/verify round trip; unknown hash format counts as mismatch
    ✅ Login: success, unknown email, wrong password (same message)
"""

import pytest
from bson import ObjectId
from jose import jwt

from vidly.exceptions import AuthenticationError, InvalidTokenError, ValidationError
from vidly.services.auth_service import INVALID_CREDENTIALS_MESSAGE, AuthService

from conftest import TEST_SIGNING_KEY, insert


@pytest.fixture
def auth() -> AuthService:
    return AuthService(secret_key=TEST_SIGNING_KEY, bcrypt_rounds=4)


class TestTokens:

    def test_empty_key_refused(self):
        with pytest.raises(ValueError):
            AuthService(secret_key="")

    def test_issue_and_verify(self, auth):
        user_id = ObjectId()
        token = auth.issue_token({"_id": user_id, "isAdmin": True})

        claims = auth.verify_token(token)

        assert claims.id == str(user_id)
        assert claims.is_admin is True

    def test_claims_shape(self, auth):
        user_id = ObjectId()
        token = auth.issue_token({"_id": user_id, "name": "Jane", "password": "hash"})
        payload = jwt.decode(token, TEST_SIGNING_KEY, algorithms=["HS256"])
        assert payload == {"_id": str(user_id), "isAdmin": False}

    @pytest.mark.parametrize("token", [None, ""])
    def test_missing_token(self, auth, token):
        with pytest.raises(AuthenticationError):
            auth.verify_token(token)

    def test_malformed_token(self, auth):
        with pytest.raises(InvalidTokenError):
            auth.verify_token("a")

    def test_token_signed_with_other_key(self, auth):
        token = jwt.encode({"_id": str(ObjectId()), "isAdmin": True}, "other-key", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            auth.verify_token(token)

    def test_token_without_user_id(self, auth):
        token = jwt.encode({"isAdmin": True}, TEST_SIGNING_KEY, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            auth.verify_token(token)

    def test_non_boolean_admin_claim_rejected(self, auth):
        token = jwt.encode({"_id": str(ObjectId()), "isAdmin": "yes"}, TEST_SIGNING_KEY, algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            auth.verify_token(token)


class TestPasswords:

    @pytest.mark.asyncio
    async def test_hash_is_not_plaintext_and_verifies(self, auth):
        hashed = await auth.hash_password("12345")

        assert hashed != "12345"
        assert hashed.startswith("$2")
        assert await auth.verify_password("12345", hashed) is True
        assert await auth.verify_password("54321", hashed) is False

    @pytest.mark.asyncio
    async def test_unrecognized_hash_is_a_mismatch(self, auth):
        assert await auth.verify_password("12345", "plain-text-password") is False
        assert await auth.verify_password("12345", "") is False


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token(self, auth, fake_db):
        user = insert(fake_db, "users", {
            "name": "Jane",
            "email": "jane@vidly.com",
            "password": await auth.hash_password("12345"),
            "isAdmin": False,
        })

        token = await auth.login(fake_db, {"email": "jane@vidly.com", "password": "12345"})

        assert auth.verify_token(token).id == str(user["_id"])

    @pytest.mark.asyncio
    async def test_unknown_email_and_wrong_password_look_the_same(self, auth, fake_db):
        insert(fake_db, "users", {
            "name": "Jane",
            "email": "jane@vidly.com",
            "password": await auth.hash_password("12345"),
        })

        with pytest.raises(ValidationError) as unknown:
            await auth.login(fake_db, {"email": "nobody@vidly.com", "password": "12345"})
        with pytest.raises(ValidationError) as wrong:
            await auth.login(fake_db, {"email": "jane@vidly.com", "password": "99999"})

        assert unknown.value.message == INVALID_CREDENTIALS_MESSAGE
        assert wrong.value.message == INVALID_CREDENTIALS_MESSAGE

    @pytest.mark.asyncio
    async def test_invalid_payload(self, auth, fake_db):
        with pytest.raises(ValidationError) as exc_info:
            await auth.login(fake_db, {"email": "jane@vidly.com"})
        assert exc_info.value.message == '"password" is required'
