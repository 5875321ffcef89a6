# biblioteca/main.py
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .catalog import catalog_router
from .catalog.protocols import CatalogService
from .catalog.store import InMemoryCatalog
from .config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


async def _bad_request_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed bodies and missing parameters are reported as 400, not 422.
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app(
    settings: Optional[Settings] = None,
    catalog_service: Optional[CatalogService] = None,
) -> FastAPI:
    """Build the gateway application.

    ``catalog_service`` defaults to an ``InMemoryCatalog`` seeded from
    ``settings.CATALOG_SEED_FILE`` (or the bundled sample data).
    """
    settings = settings or default_settings
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(process)s %(levelname)s %(name)s %(message)s",
    )
    # basicConfig is a no-op once handlers exist, e.g. after the module-level app
    logging.getLogger().setLevel(settings.LOG_LEVEL.upper())

    app = FastAPI(
        title="Catálogo de la biblioteca",
        description=(
            "Consulta y actualización del catálogo de libros. "
            "Acceso restringido por rol (bibliotecario, usuario)."
        ),
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.catalog_service = (
        catalog_service
        if catalog_service is not None
        else InMemoryCatalog.from_seed_file(settings.CATALOG_SEED_FILE)
    )

    app.add_exception_handler(RequestValidationError, _bad_request_handler)
    app.include_router(catalog_router)

    @app.get("/")
    def health_check():
        return {"status": "ok", "service": settings.SERVICE_NAME}

    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "biblioteca.main:app",
        host=default_settings.HTTP_HOST,
        port=default_settings.HTTP_PORT,
    )


if __name__ == "__main__":
    run()
