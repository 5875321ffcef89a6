"""
Protocols for the catalog module.

The gateway routes depend on ``CatalogService`` only; the bundled
``InMemoryCatalog`` in ``store.py`` is one implementation of it.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from .schemas import Book, BookId


class CatalogService(Protocol):
    """Protocol for the catalog service the gateway delegates to."""

    def get(self, book_id: BookId) -> Optional[Book]:
        """Return the book for ``book_id``, or ``None`` when absent."""
        ...

    def set_availability(self, book_id: BookId, available: bool) -> None:
        """Record the new availability flag for ``book_id``."""
        ...

    def search(self, criterion: str) -> List[Book]:
        """Return the books matching ``criterion``, in catalog order."""
        ...
