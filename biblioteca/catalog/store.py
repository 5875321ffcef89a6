"""
Simple in-process catalog used as the default ``CatalogService``.

Books are loaded at startup from a JSON seed file (by default the
bundled ``data/libros.json``). Each entry is converted into a ``Book``
instance from ``schemas``. A real deployment can swap this for a client
of the library's own catalog service; the routes only rely on the
``CatalogService`` protocol.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from pydantic import ValidationError

from .schemas import Book, BookId

logger = logging.getLogger(__name__)

DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "libros.json"


def load_seed_books(path: Optional[Path] = None) -> List[Book]:
    """Load books from a JSON seed file.

    Parameters
    ----------
    path : Optional[Path]
        File holding a JSON list of book objects. ``DATA_FILE`` is used
        when omitted.

    Returns
    -------
    List[Book]
        The books in file order. Entries that do not validate are
        skipped. A missing or malformed file yields an empty list.
    """
    source = Path(path) if path is not None else DATA_FILE
    try:
        with source.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        logger.warning("Catalog seed file %s not found; starting empty", source)
        return []
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not read catalog seed file %s: %s", source, exc)
        return []

    if not isinstance(raw, list):
        logger.warning("Catalog seed file %s does not hold a list; starting empty", source)
        return []

    books: List[Book] = []
    for entry in raw:
        try:
            books.append(Book.model_validate(entry))
        except ValidationError as exc:
            logger.warning("Skipping invalid catalog entry %r: %s", entry, exc)
    return books


def _norm(s: Optional[str]) -> str:
    return (s or "").strip().lower()


class InMemoryCatalog:
    """Dictionary-backed catalog keyed by book identifier.

    Iteration order is insertion order, so search results come back in
    the order the books were seeded.
    """

    def __init__(self, books: Iterable[Book] = ()) -> None:
        self._books: Dict[str, Book] = {}
        for book in books:
            self._books[book.id] = book

    @classmethod
    def from_seed_file(cls, path: Optional[Path] = None) -> "InMemoryCatalog":
        books = load_seed_books(path)
        logger.info("Loaded %d books into the catalog", len(books))
        return cls(books)

    def __len__(self) -> int:
        return len(self._books)

    def get(self, book_id: BookId) -> Optional[Book]:
        return self._books.get(book_id.value)

    def set_availability(self, book_id: BookId, available: bool) -> None:
        book = self._books.get(book_id.value)
        if book is None:
            logger.debug("Ignoring availability update for unknown book %s", book_id)
            return
        self._books[book_id.value] = book.model_copy(update={"disponible": available})

    def search(self, criterion: str) -> List[Book]:
        """Case-insensitive substring match on title, author and category."""
        needle = _norm(criterion)
        if not needle:
            return []
        return [
            b
            for b in self._books.values()
            if needle in _norm(b.titulo) or needle in _norm(b.autor) or needle in _norm(b.categoria)
        ]
