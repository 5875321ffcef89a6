"""
End-to-end scenarios against an app seeded from a catalog file,
the way the service runs when deployed.
"""

from __future__ import annotations

import json

import pytest
from fastapi.testclient import TestClient

from biblioteca.main import create_app


@pytest.fixture
def seeded_client(test_settings, tmp_path) -> TestClient:
    seed = tmp_path / "libros.json"
    seed.write_text(
        json.dumps([
            {"id": "LIB123", "titulo": "Cien años de soledad", "autor": "Gabriel García Márquez",
             "categoria": "Novela", "disponible": True},
            {"id": "LIB124", "titulo": "Pedro Páramo", "autor": "Juan Rulfo",
             "categoria": "Novela", "disponible": True},
        ]),
        encoding="utf-8",
    )
    settings = test_settings.model_copy(update={"CATALOG_SEED_FILE": seed})
    return TestClient(create_app(settings=settings))


def test_user_reads_available_book(seeded_client, user_headers):
    resp = seeded_client.get("/libros/LIB123", headers=user_headers)

    assert resp.status_code == 200
    assert resp.json()["disponible"] is True


def test_anonymous_reader_is_forbidden(seeded_client):
    assert seeded_client.get("/libros/LIB123").status_code == 403


def test_absent_book_availability_is_false(seeded_client, librarian_headers):
    resp = seeded_client.get("/libros/LIB999/disponible", headers=librarian_headers)

    assert resp.status_code == 200
    assert resp.json() is False


def test_librarian_marks_book_unavailable(seeded_client, librarian_headers):
    resp = seeded_client.put("/libros/LIB123/disponibilidad", json=False, headers=librarian_headers)
    assert resp.status_code == 200

    resp = seeded_client.get("/libros/LIB123/disponible", headers=librarian_headers)
    assert resp.json() is False


def test_user_searches_by_title_word(seeded_client, user_headers):
    resp = seeded_client.get("/libros/buscar", params={"criterio": "soledad"}, headers=user_headers)

    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()] == ["LIB123"]


def test_default_app_serves_bundled_catalog(test_settings, user_headers):
    client = TestClient(create_app(settings=test_settings))

    resp = client.get("/libros/LIB123", headers=user_headers)

    assert resp.status_code == 200
    assert resp.json()["titulo"] == "Cien años de soledad"


def test_openapi_lists_catalog_routes(seeded_client):
    paths = seeded_client.get("/openapi.json").json()["paths"]

    assert set(paths) >= {
        "/libros/{id}",
        "/libros/{id}/disponible",
        "/libros/{id}/disponibilidad",
        "/libros/buscar",
    }
    assert paths["/libros/{id}"]["get"]["summary"] == "Obtener un libro por ID"
