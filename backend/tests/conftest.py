"""
Vidly Backend — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests run without a MongoDB server. FakeDatabase implements the part
       of pymongo's asyncio API the repositories use, over plain dicts.
How:   Every fake collection operation yields to the event loop once before
       touching data, then runs to completion without yielding again. That
       mirrors MongoDB's per-document atomicity: concurrent requests can
       interleave between operations, never inside one.

Fixture Hierarchy (all function-scoped):
    ├── fake_db:        empty FakeDatabase
    ├── test_settings:  Settings with a signing key and bcrypt cost 4
    ├── app_context:    AppContext over fake_db
    ├── test_client:    HTTPX AsyncClient bound to create_app(app_context)
    ├── user_token / admin_token: signed tokens for the auth gates
    └── genre / customer / movie: seeded documents
"""

import asyncio
import copy
import os
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from bson import ObjectId
from httpx import ASGITransport, AsyncClient
from pymongo.errors import ConnectionFailure, DuplicateKeyError

# Keep import-time settings away from any real deployment values
os.environ.setdefault("LOG_LEVEL", "WARNING")

from vidly.config import Settings  # noqa: E402
from vidly.context import AppContext  # noqa: E402

TEST_SIGNING_KEY = "test-private-key"


# ══════════════════════════════════════════════════════════════════════════
# In-memory pymongo stand-in
# ══════════════════════════════════════════════════════════════════════════

_MISSING = object()


def _get(doc: Dict[str, Any], dotted: str) -> Any:
    value: Any = doc
    for part in dotted.split("."):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def _matches(doc: Dict[str, Any], query: Dict[str, Any]) -> bool:
    for key, cond in query.items():
        value = _get(doc, key)
        if isinstance(cond, dict) and any(k.startswith("$") for k in cond):
            for op, arg in cond.items():
                if op != "$gt":
                    raise NotImplementedError(op)
                if value is _MISSING or value is None or not value > arg:
                    return False
        elif cond is None:
            # MongoDB: {field: null} matches null and missing
            if value is not _MISSING and value is not None:
                return False
        elif value is _MISSING or value != cond:
            return False
    return True


def _sort_key(value: Any):
    return (value is _MISSING or value is None, value if value not in (_MISSING, None) else 0)


def _sorted(docs: List[Dict[str, Any]], spec) -> List[Dict[str, Any]]:
    docs = list(docs)
    for key, direction in reversed(list(spec or [])):
        docs.sort(key=lambda d: _sort_key(_get(d, key)), reverse=direction < 0)
    return docs


def _project(doc: Optional[Dict[str, Any]], projection: Optional[Dict[str, int]]):
    if doc is None:
        return None
    doc = copy.deepcopy(doc)
    for key, include in (projection or {}).items():
        if not include:
            doc.pop(key, None)
    return doc


class FakeInsertOneResult:
    def __init__(self, inserted_id: ObjectId):
        self.inserted_id = inserted_id


class FakeCursor:
    def __init__(self, docs: List[Dict[str, Any]]):
        self._docs = docs

    def sort(self, key_or_list, direction: Optional[int] = None) -> "FakeCursor":
        spec = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction or 1)]
        self._docs = _sorted(self._docs, spec)
        return self

    async def to_list(self, length: Optional[int] = None) -> List[Dict[str, Any]]:
        await asyncio.sleep(0)
        docs = self._docs if length is None else self._docs[:length]
        return [copy.deepcopy(d) for d in docs]


class FakeCollection:
    """
    Subset of pymongo AsyncCollection used by vidly.repositories.

    `fail_next[operation] = exc` makes the next call of that operation raise.
    """

    def __init__(self, name: str):
        self.name = name
        self.docs: List[Dict[str, Any]] = []
        self.unique_fields: List[str] = []
        self.indexes: List[Any] = []
        self.fail_next: Dict[str, Exception] = {}

    async def _enter(self, operation: str) -> None:
        await asyncio.sleep(0)
        exc = self.fail_next.pop(operation, None)
        if exc is not None:
            raise exc

    def _first(self, query: Dict[str, Any], sort=None) -> Optional[Dict[str, Any]]:
        for doc in _sorted(self.docs, sort):
            if _matches(doc, query):
                return doc
        return None

    async def create_index(self, keys, unique: bool = False, **kwargs) -> str:
        self.indexes.append(keys)
        if unique and isinstance(keys, str):
            self.unique_fields.append(keys)
        return str(keys)

    def find(self, query: Optional[Dict[str, Any]] = None, projection=None) -> FakeCursor:
        query = query or {}
        return FakeCursor([_project(d, projection) for d in self.docs if _matches(d, query)])

    async def find_one(self, query=None, projection=None, sort=None):
        await self._enter("find_one")
        return _project(self._first(query or {}, sort), projection)

    async def insert_one(self, document: Dict[str, Any]) -> FakeInsertOneResult:
        await self._enter("insert_one")
        document.setdefault("_id", ObjectId())
        for field in self.unique_fields:
            if any(_get(d, field) == _get(document, field) for d in self.docs):
                raise DuplicateKeyError(f"E11000 duplicate key error collection: {self.name}")
        self.docs.append(copy.deepcopy(document))
        return FakeInsertOneResult(document["_id"])

    async def find_one_and_update(self, query, update, return_document=False, **kwargs):
        await self._enter("find_one_and_update")
        doc = self._first(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        for op, fields in update.items():
            for key, value in fields.items():
                if op == "$set":
                    doc[key] = value
                elif op == "$inc":
                    doc[key] = doc.get(key, 0) + value
                else:
                    raise NotImplementedError(op)
        return copy.deepcopy(doc) if return_document else before

    async def find_one_and_replace(self, query, replacement, return_document=False, **kwargs):
        await self._enter("find_one_and_replace")
        doc = self._first(query)
        if doc is None:
            return None
        before = copy.deepcopy(doc)
        new_doc = {"_id": doc["_id"], **copy.deepcopy(replacement)}
        self.docs[self.docs.index(doc)] = new_doc
        return copy.deepcopy(new_doc) if return_document else before

    async def find_one_and_delete(self, query, **kwargs):
        await self._enter("find_one_and_delete")
        doc = self._first(query)
        if doc is None:
            return None
        self.docs.remove(doc)
        return copy.deepcopy(doc)


class FakeDatabase:
    """Dict of FakeCollections, created on first access like pymongo."""

    def __init__(self):
        self.collections: Dict[str, FakeCollection] = {}
        self.reachable = True

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def command(self, name: str) -> Dict[str, Any]:
        await asyncio.sleep(0)
        if not self.reachable:
            raise ConnectionFailure("connection refused")
        return {"ok": 1.0}


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        mongodb_uri="mongodb://localhost:27017/vidly_test",
        jwt_private_key=TEST_SIGNING_KEY,
        bcrypt_rounds=4,  # passlib minimum; keeps hashing fast in tests
        log_level="WARNING",
    )


@pytest.fixture
def app_context(test_settings, fake_db) -> AppContext:
    return AppContext.build(test_settings, fake_db)


@pytest_asyncio.fixture
async def test_client(app_context):
    """
    HTTPX AsyncClient wired straight into the ASGI app (no server, no lifespan).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/api/genres")
    """
    from vidly.main import create_app

    app = create_app(context=app_context)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def user_token(app_context) -> str:
    return app_context.auth.issue_token({"_id": ObjectId(), "isAdmin": False})


@pytest.fixture
def admin_token(app_context) -> str:
    return app_context.auth.issue_token({"_id": ObjectId(), "isAdmin": True})


def insert(db: FakeDatabase, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
    """Seed a document directly, bypassing the API."""
    document = {"_id": ObjectId(), **document}
    db[collection].docs.append(copy.deepcopy(document))
    return document


@pytest.fixture
def genre(fake_db) -> Dict[str, Any]:
    return insert(fake_db, "genres", {"name": "Action"})


@pytest.fixture
def customer(fake_db) -> Dict[str, Any]:
    return insert(fake_db, "customers", {"name": "Jane Doe", "isGold": True, "phone": "5551234"})


@pytest.fixture
def movie(fake_db, genre) -> Dict[str, Any]:
    return insert(fake_db, "movies", {
        "title": "Terminator",
        "genre": {"_id": genre["_id"], "name": genre["name"]},
        "numberInStock": 3,
        "dailyRentalRate": 2.0,
    })


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
