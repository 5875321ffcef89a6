"""
Pydantic schema definitions for the catalog module.

The ``Book`` model is the entity returned by the catalog service and
serialised as-is by the gateway. Field names follow the public wire
format (``titulo``, ``autor``, ``disponible``...). ``BookId`` is the
typed identifier built from each request's path parameter.
"""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class BookId:
    """Opaque identifier of a catalog entry.

    Any non-empty string is accepted verbatim; whether it names an
    existing book is for the catalog service to decide.
    """

    value: str

    def __post_init__(self) -> None:
        if self.value is None or self.value == "":
            raise ValueError("Book identifier must be a non-empty string")

    def __str__(self) -> str:
        return self.value


class Book(BaseModel):
    """A single book entry as stored by the catalog."""

    id: str = Field(..., min_length=1, examples=["LIB123"])
    titulo: str
    autor: str = ""
    categoria: str = ""
    # Whether the book can currently be borrowed
    disponible: bool = True
