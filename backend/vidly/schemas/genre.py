"""
Vidly Backend — Genre Schemas
"""

from pydantic import Field

from vidly.schemas.common import DocumentModel, InputModel


class GenreIn(InputModel):
    """Payload for POST/PUT /api/genres."""
    name: str = Field(min_length=5, max_length=50)


class GenreOut(DocumentModel):
    name: str


class GenreSnapshot(DocumentModel):
    """Genre copied by value into a movie at write time."""
    name: str
