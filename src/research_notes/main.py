from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.research_notes.api.v1.router import api_router
from src.research_notes.core.config import get_settings
from src.research_notes.core.exceptions import setup_exception_handlers
from src.research_notes.core.health import setup_health_endpoint, setup_metrics
from src.research_notes.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.research_notes.store import NotesStore

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - build the store at startup, dispose it at shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}", app_env=settings.app_env)

    owns_store = app.state.store is None
    if owns_store:
        app.state.store = NotesStore.from_settings(settings)
    if settings.auto_create_schema:
        await app.state.store.create_schema()

    yield

    if owns_store:
        logger.info("Closing store connections...")
        await app.state.store.close()
        app.state.store = None
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Projects and the notes they contain"},
    {"name": "notes", "description": "Note editing, deletion and reordering"},
    {"name": "health", "description": "Service health"},
]


def create_app(store: NotesStore | None = None) -> FastAPI:
    """Build the application.

    Args:
        store: Persistence client to use. If None, one is built from settings
               when the app starts and disposed when it stops.
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Research notes organized into projects",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        openapi_url="/openapi.json" if settings.openapi_enabled else None,
    )
    app.state.store = store

    setup_exception_handlers(app)

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(
            correlation_id.get(),
            method=request.method,
            path=request.url.path,
        )
        try:
            return await call_next(request)
        finally:
            clear_request_context()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    # Added last so it is the outermost middleware and the id is set for the others
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)
    setup_health_endpoint(app)
    setup_metrics(app)

    return app


app = create_app()
