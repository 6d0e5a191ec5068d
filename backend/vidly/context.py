"""
Vidly Backend — Application Context
====================================

What:  The process-wide state every request needs: settings, the database
       handle, and the AuthService holding the signing key.
Why:   Built exactly once (by the lifespan, or explicitly by tests) and
       injected into handlers. Nothing reads the key or the database from a
       module global at request time, so a test can hand the app a context
       backed by an in-memory collection without patching imports.
How:   Stored on `app.state.context`; routes receive it via Depends(get_context).
       Read-only after construction.
"""

from dataclasses import dataclass, field
from typing import Optional

from fastapi import Request
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from vidly.config import Settings
from vidly.services.auth_service import AuthService


@dataclass(frozen=True)
class AppContext:
    settings: Settings
    db: AsyncDatabase
    auth: AuthService
    # Owned client, closed on shutdown; None when the caller manages the db
    client: Optional[AsyncMongoClient] = field(default=None, compare=False)

    @classmethod
    def build(
        cls,
        settings: Settings,
        db: AsyncDatabase,
        client: Optional[AsyncMongoClient] = None,
    ) -> "AppContext":
        """Construct the context and its AuthService from settings."""
        auth = AuthService(
            secret_key=settings.jwt_private_key,
            algorithm=settings.jwt_algorithm,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        return cls(settings=settings, db=db, auth=auth, client=client)

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()


def get_context(request: Request) -> AppContext:
    """FastAPI dependency: the context installed on the running app."""
    return request.app.state.context
