import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from typeahead.config import Settings, settings
from typeahead.middleware.request_logging import RequestLoggingMiddleware
from typeahead.services.query_engine import QueryEngine
from typeahead.utils.store import KeyValueStore

# Configure structured logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s %(message)s",
)


def create_app(
    app_settings: Settings = settings,
    store: KeyValueStore | None = None,
) -> FastAPI:
    """Build the API. ``store`` overrides the backend named in settings."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Startup: connect to the store and load query frequencies
        app.state.engine = QueryEngine.create(app_settings, store=store)
        yield
        # Shutdown: close the store connection
        app.state.engine.store.close()

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        description="Typeahead - prefix search suggestions ranked by query popularity.",
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware, slow_request_ms=app_settings.slow_request_ms)

    from typeahead.api.v1 import autocomplete

    app.include_router(autocomplete.router, prefix="/api/v1", tags=["Autocomplete"])

    @app.get("/api/v1/health", tags=["Health"])
    def health_check():
        store_ok = app.state.engine.store.ping()
        return {
            "status": "healthy" if store_ok else "degraded",
            "version": app_settings.app_version,
            "services": {
                "store": "up" if store_ok else "down",
            },
        }

    return app


app = create_app()
