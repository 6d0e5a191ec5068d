"""
Vidly Backend — Customer Schemas
"""

from typing import Annotated, Any

from pydantic import AfterValidator, BeforeValidator, Field, StrictBool
from pydantic_core import PydanticCustomError

from vidly.schemas.common import DocumentModel, InputModel


def _number_to_str(value: Any) -> Any:
    # Clients historically send the phone as a JSON number
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


def _digits_only(value: str) -> str:
    if not value.isdigit():
        raise PydanticCustomError("digits", "must contain only digits")
    return value


Phone = Annotated[
    str,
    Field(min_length=5, max_length=15),
    BeforeValidator(_number_to_str),
    AfterValidator(_digits_only),
]


class CustomerIn(InputModel):
    """Payload for POST/PUT /api/customers. PUT replaces, so isGold resets when omitted."""
    name: str = Field(min_length=5, max_length=50)
    is_gold: StrictBool = False
    phone: Phone


class CustomerOut(DocumentModel):
    name: str
    is_gold: bool = False
    phone: str
