"""
Route definitions for the catalogue API.

Endpoints under /libros:
- GET  /buscar?criterio=...   : search the catalog (librarian, user)
- GET  /{id}                  : get one book (librarian, user)
- GET  /{id}/disponible       : availability flag (librarian)
- PUT  /{id}/disponibilidad   : set availability (librarian)

Every route checks the caller's roles against ``ACCESS_POLICY`` before
anything is sent to the catalog service.
"""

from __future__ import annotations

import logging
from typing import Dict, FrozenSet, List

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Request, Response, status

from ..auth import Principal, Role, require_roles
from .protocols import CatalogService
from .schemas import Book, BookId

logger = logging.getLogger(__name__)

ACCESS_POLICY: Dict[str, FrozenSet[Role]] = {
    "get_book": frozenset({Role.LIBRARIAN, Role.USER}),
    "is_available": frozenset({Role.LIBRARIAN}),
    "set_availability": frozenset({Role.LIBRARIAN}),
    "search_books": frozenset({Role.LIBRARIAN, Role.USER}),
}

_DENIED = {403: {"description": "Acceso denegado"}}

router = APIRouter(prefix="/libros", tags=["catalogo"])


def get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


def _guard(operation: str):
    return Depends(require_roles(operation, ACCESS_POLICY[operation]))


# Declared before /{id} so "buscar" is never read as an identifier.
@router.get(
    "/buscar",
    response_model=List[Book],
    summary="Buscar libros por criterio",
    description="Busca libros en el catálogo por título, autor o género.",
    responses=_DENIED,
)
def search_books(
    criterio: str = Query(..., description="Texto a buscar en el catálogo", examples=["Cien años de soledad"]),
    principal: Principal = _guard("search_books"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> List[Book]:
    books = catalog.search(criterio)
    logger.debug("Search %r by %r returned %d books", criterio, principal.subject, len(books))
    return books


@router.get(
    "/{id}",
    response_model=Book,
    summary="Obtener un libro por ID",
    description="Devuelve la información de un libro específico. Disponible para usuarios y bibliotecarios.",
    responses={404: {"description": "No se encontró el libro"}, **_DENIED},
)
def get_book(
    id: str = Path(..., description="ID del libro a consultar", examples=["LIB123"]),
    principal: Principal = _guard("get_book"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Book:
    book = catalog.get(BookId(id))
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Libro no encontrado")
    return book


@router.get(
    "/{id}/disponible",
    response_model=bool,
    summary="Verificar disponibilidad de un libro",
    description="Permite a un bibliotecario verificar si un libro está disponible para préstamo.",
    responses=_DENIED,
)
def is_book_available(
    id: str = Path(..., description="ID del libro a verificar", examples=["LIB123"]),
    principal: Principal = _guard("is_available"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> bool:
    # An unknown book is reported as unavailable rather than 404.
    book = catalog.get(BookId(id))
    return book is not None and book.disponible


@router.put(
    "/{id}/disponibilidad",
    response_class=Response,
    summary="Actualizar disponibilidad de un libro",
    description="Permite a un bibliotecario actualizar el estado de disponibilidad de un libro.",
    responses={400: {"description": "Solicitud inválida"}, **_DENIED},
)
def update_availability(
    id: str = Path(..., description="ID del libro a actualizar", examples=["LIB123"]),
    disponible: bool = Body(
        ...,
        strict=True,
        description="Nuevo estado de disponibilidad (true = disponible, false = no disponible)",
        examples=[True, False],
    ),
    principal: Principal = _guard("set_availability"),
    catalog: CatalogService = Depends(get_catalog_service),
) -> Response:
    catalog.set_availability(BookId(id), disponible)
    logger.debug("Book %s availability set to %s by %r", id, disponible, principal.subject)
    return Response(status_code=status.HTTP_200_OK)
