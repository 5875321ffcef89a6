"""
Shared fixtures for the catalog gateway tests.

Each test gets its own application built around a small in-memory
catalog, so availability updates never leak between tests.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Iterable, Optional

import jwt
import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr

from biblioteca.catalog.schemas import Book
from biblioteca.catalog.store import InMemoryCatalog
from biblioteca.config import Settings
from biblioteca.main import create_app

TEST_SECRET = "test-secret-for-the-catalog-gateway-0123"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(JWT_SECRET_KEY=SecretStr(TEST_SECRET), JWT_ALGORITHM="HS256", LOG_LEVEL="DEBUG")


@pytest.fixture
def books() -> list:
    return [
        Book(id="LIB123", titulo="Cien años de soledad", autor="Gabriel García Márquez",
             categoria="Novela", disponible=True),
        Book(id="LIB200", titulo="El laberinto de la soledad", autor="Octavio Paz",
             categoria="Ensayo", disponible=False),
        Book(id="LIB300", titulo="Ficciones", autor="Jorge Luis Borges",
             categoria="Cuento", disponible=True),
    ]


@pytest.fixture
def catalog(books) -> InMemoryCatalog:
    return InMemoryCatalog(books)


@pytest.fixture
def client(test_settings, catalog) -> TestClient:
    app = create_app(settings=test_settings, catalog_service=catalog)
    return TestClient(app)


@pytest.fixture
def make_token(test_settings) -> Callable[..., str]:
    def _make(
        roles: Optional[Iterable[str]] = None,
        sub: str = "tester",
        exp_delta: timedelta = timedelta(hours=1),
        extra_claims: Optional[Dict] = None,
        secret: str = TEST_SECRET,
    ) -> str:
        payload: Dict = {"sub": sub, "exp": datetime.now(timezone.utc) + exp_delta}
        if roles is not None:
            payload["roles"] = list(roles)
        payload.update(extra_claims or {})
        return jwt.encode(payload, secret, algorithm=test_settings.JWT_ALGORITHM)

    return _make


@pytest.fixture
def librarian_headers(make_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(['ROLE_LIBRARIAN'], sub='bibliotecaria')}"}


@pytest.fixture
def user_headers(make_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(['ROLE_USER'], sub='lector')}"}


@pytest.fixture
def no_role_headers(make_token) -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token([], sub='nadie')}"}
