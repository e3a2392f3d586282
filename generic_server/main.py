"""
Generic server main application.
Entry point for the FastAPI REST server.
"""

from fastapi import FastAPI

from crud_shared.config.settings import settings
from crud_shared.infrastructure.correlation import CorrelationIdMiddleware
from generic_server import __version__
from generic_server.core.cors import configure_cors
from generic_server.core.errors import configure_exception_handlers
from generic_server.core.lifespan import lifespan
from generic_server.models import Author, Book
from generic_server.routers import health_router, register_crud_controller
from generic_server.schemas import AuthorDTO, BookDTO


def create_app() -> FastAPI:
    """Build the application with every entity endpoint group registered."""
    app = FastAPI(
        title="Generic Server",
        description="Generic CRUD endpoints for registered entities",
        version=__version__,
        lifespan=lifespan,
    )

    configure_exception_handlers(app)
    configure_cors(app)
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(health_router)

    # =========================================================================
    # Registered entities
    # =========================================================================

    register_crud_controller(app, Author, AuthorDTO)
    register_crud_controller(app, Book, BookDTO)

    return app


app = create_app()


# =============================================================================
# Development entry point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "generic_server.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )
