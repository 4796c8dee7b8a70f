"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, kbchat.api, kbchat.application.container, kbchat.observability, kbchat.configs
System role: Application initialization and configuration
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from kbchat.api import api_router
from kbchat.api.routers.router_utils import error_response
from kbchat.application.container import ServiceContainer, build_container
from kbchat.boundary.db.create_tables import create_tables
from kbchat.configs import get_settings
from kbchat.observability.logger import configure_logging
from kbchat.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    Builds the service container once unless one was supplied to create_app.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    owns_container = getattr(app.state, "container", None) is None
    try:
        if owns_container:
            container = build_container(settings)
            if settings.database.create_tables_on_startup and container.engine is not None:
                await create_tables(container.engine)
            app.state.container = container
        app.state.session_factory = app.state.container.session_factory
        logger.info(
            "Application startup complete: all resources initialized",
            extra={
                "provider": type(app.state.container.provider).__name__,
                "vector_store": type(app.state.container.vector_store).__name__,
            },
        )
    except Exception as e:
        logger.exception(
            "Failed to initialize application resources",
            extra={"error_type": type(e).__name__},
        )
        raise

    yield

    # Shutdown
    if owns_container:
        await app.state.container.aclose()
    logger.info("Application shutdown")


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests with the standard error envelope."""
    fields = sorted({".".join(str(part) for part in err["loc"][1:]) or "body" for err in exc.errors()})
    return error_response(400, f"Invalid request: {', '.join(fields)}")


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        container: Pre-built services (tests); built in the lifespan if None

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Knowledge Base Chat API",
        description="Multi-tenant knowledge-base chat widget backend",
        version="0.1.0",
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container
        app.state.session_factory = container.session_factory

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware; the widget is embedded on arbitrary tenant sites
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "kbchat.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,
    )
