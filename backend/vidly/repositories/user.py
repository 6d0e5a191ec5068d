"""
Vidly Backend — User Repository
================================

Email uniqueness is enforced by the unique index on users.email (see
vidly.database.ensure_indexes). `create` turns the index violation into
the same 400 the service's pre-check produces, so two simultaneous
registrations with one address cannot both succeed.
"""

from typing import Any, Optional

from pymongo.errors import DuplicateKeyError, PyMongoError

from vidly.database import USERS, to_object_id
from vidly.exceptions import ValidationError
from vidly.repositories.base import Document, MongoRepository

DUPLICATE_EMAIL_MESSAGE = "User already registered."


class UserRepository(MongoRepository):
    collection_name = USERS
    default_sort = (("name", 1),)

    async def get_by_email(self, email: str) -> Optional[Document]:
        try:
            return await self.collection.find_one({"email": email})
        except PyMongoError as e:
            raise self._wrap("get_by_email", e)

    async def get_profile(self, user_id: Any) -> Optional[Document]:
        """User document with the password hash projected out."""
        try:
            return await self.collection.find_one(
                {"_id": to_object_id(user_id)}, {"password": 0}
            )
        except PyMongoError as e:
            raise self._wrap("get_profile", e)

    async def create(self, document: Document) -> Document:
        document = dict(document)
        try:
            result = await self.collection.insert_one(document)
        except DuplicateKeyError:
            raise ValidationError(message=DUPLICATE_EMAIL_MESSAGE, field="email")
        except PyMongoError as e:
            raise self._wrap("create", e)
        document["_id"] = result.inserted_id
        return document
