"""
Vidly Backend — Shared Schema Building Blocks
==============================================

What:  Base classes and annotated types reused by every entity schema.
Why:   Keeps the wire conventions in one place:
       - payload and response keys are camelCase (numberInStock, isGold)
       - stored documents expose their identifier as `_id` (hex string)
       - payloads reject keys they do not declare
"""

from typing import Annotated, Any, Optional

from bson import ObjectId
from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from vidly.database import is_valid_object_id


def _check_object_id(value: str) -> str:
    if not is_valid_object_id(value):
        raise PydanticCustomError("object_id", "must be a valid ID")
    return value


def _check_email(value: str) -> str:
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        raise PydanticCustomError("email", "must be a valid email")
    return value


def _stringify_object_id(value: Any) -> Any:
    return str(value) if isinstance(value, ObjectId) else value


# Payload reference to another document, e.g. genreId
ObjectIdStr = Annotated[str, AfterValidator(_check_object_id)]

# Identifier read back from a stored document
DocumentId = Annotated[str, BeforeValidator(_stringify_object_id)]

EmailStr = Annotated[str, Field(min_length=5, max_length=255), AfterValidator(_check_email)]

Password = Annotated[str, Field(min_length=5, max_length=1024)]


class InputModel(BaseModel):
    """Base for request payloads: camelCase keys only, unknown keys rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=False,
        extra="forbid",
    )


class DocumentModel(BaseModel):
    """Base for response documents built from stored records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: DocumentId = Field(alias="_id", description="24-character hex identifier")


class ErrorResponse(BaseModel):
    """
    Standardized error body for every non-2xx JSON response.

    Example:
        {
            "error": "validation_error",
            "message": "\\"name\\" length must be at least 5 characters long",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
