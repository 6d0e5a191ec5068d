"""
Vidly Backend — Payload Validation
===================================

What:  Pure functions mapping a candidate payload to (valid, error_message).
Why:   Every mutating endpoint answers 400 with ONE human-readable message,
       the first constraint that failed, in field-declaration order.
How:   The constraints live on the pydantic `*In` models. Pydantic reports
       field errors in declaration order (unknown keys after declared ones),
       so the first error is the one to report. It is rephrased into the
       '"<field>" ...' form clients already match on.

Public API:
    validate_genre ... validate_credentials and check_payload return the
    (valid, message) pair without raising. parse_payload shares that check
    (_validate) and raises ValidationError with the same message on failure.
    Services call parse_payload because they need the typed model back.

No side effects: nothing here touches the database or the request.
"""

from typing import Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from vidly.exceptions import ValidationError
from vidly.schemas.customer import CustomerIn
from vidly.schemas.genre import GenreIn
from vidly.schemas.movie import MovieIn
from vidly.schemas.rental import RentalIn, ReturnIn
from vidly.schemas.user import AuthIn, UserIn

ModelT = TypeVar("ModelT", bound=BaseModel)


# Pydantic error type → message template. `{label}` is the quoted field name;
# other placeholders come from the error's ctx.
_MESSAGES: Dict[str, str] = {
    "missing": "{label} is required",
    "extra_forbidden": "{label} is not allowed",
    "string_type": "{label} must be a string",
    "string_too_short": "{label} length must be at least {min_length} characters long",
    "string_too_long": "{label} length must be less than or equal to {max_length} characters long",
    "too_short": "{label} length must be at least {min_length} characters long",
    "too_long": "{label} length must be less than or equal to {max_length} characters long",
    "int_type": "{label} must be an integer",
    "int_parsing": "{label} must be an integer",
    "int_from_float": "{label} must be an integer",
    "float_type": "{label} must be a number",
    "float_parsing": "{label} must be a number",
    "bool_type": "{label} must be a boolean",
    "bool_parsing": "{label} must be a boolean",
    "greater_than_equal": "{label} must be greater than or equal to {ge}",
    "less_than_equal": "{label} must be less than or equal to {le}",
    "model_type": "{label} must be an object",
    "model_attributes_type": "{label} must be an object",
    "dict_type": "{label} must be an object",
}


def format_error(error: Dict[str, Any]) -> str:
    """
    Render one pydantic error dict as a single sentence.

    Unknown error types fall back to pydantic's own text prefixed with the
    field label; custom errors (object ids, emails, digits) are written so
    that this reads naturally, e.g. '"genreId" must be a valid ID'.
    """
    loc = ".".join(str(part) for part in error.get("loc", ()))
    label = f'"{loc or "value"}"'
    template = _MESSAGES.get(error.get("type", ""))
    if template is None:
        return f"{label} {error.get('msg', 'is invalid')}"
    ctx = error.get("ctx") or {}
    try:
        return template.format(label=label, **ctx)
    except (KeyError, IndexError):
        return f"{label} {error.get('msg', 'is invalid')}"


def _validate(schema: Type[ModelT], payload: Any) -> Tuple[Optional[ModelT], Optional[str]]:
    try:
        return schema.model_validate(payload), None
    except PydanticValidationError as e:
        return None, format_error(e.errors()[0])


def check_payload(schema: Type[BaseModel], payload: Any) -> Tuple[bool, Optional[str]]:
    """(True, None) when `payload` satisfies `schema`, else (False, first message)."""
    _, message = _validate(schema, payload)
    return message is None, message


def parse_payload(schema: Type[ModelT], payload: Any) -> ModelT:
    """
    Validate and return the typed model.

    Raises:
        ValidationError: with the first failing constraint as its message (→ 400)
    """
    model, message = _validate(schema, payload)
    if model is None:
        raise ValidationError(message=message or "Validation failed")
    return model


# ── Per-entity validators ─────────────────────────────────────────────────

def validate_genre(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(GenreIn, payload)


def validate_movie(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(MovieIn, payload)


def validate_customer(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(CustomerIn, payload)


def validate_rental(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(RentalIn, payload)


def validate_return(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(ReturnIn, payload)


def validate_user(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(UserIn, payload)


def validate_credentials(payload: Any) -> Tuple[bool, Optional[str]]:
    return check_payload(AuthIn, payload)
