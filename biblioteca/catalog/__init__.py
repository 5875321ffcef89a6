"""
Catalog package for the library catalog gateway.

This package holds the schemas, the catalog service protocol with its
in-process implementation, and the role-gated routes under
``/libros`` that let librarians and users look up, search and update
the availability of books.
"""

from .router import router as catalog_router  # noqa: F401
