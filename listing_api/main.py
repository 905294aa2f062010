"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from starlette.exceptions import HTTPException as StarletteHTTPException
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
import logging

from listing_api.config import Settings, get_settings
from listing_api.database import Database
from listing_api.routers import (
    auth_router,
    users_router,
    properties_router,
    events_router,
    watchlists_router,
)
from listing_api.utils.auth import TokenCodec
from listing_api.utils.exceptions import APIException
from listing_api.services.error_handler import ErrorHandlerService
from listing_api.middleware import RequestContextMiddleware

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    database: Database = app.state.database

    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}")

    db_connected = await database.check_connection()
    if not db_connected:
        logger.error("Failed to connect to database on startup")
    elif settings.auto_create_tables:
        await database.create_tables()

    yield

    # Shutdown
    logger.info("Shutting down application")
    await database.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to build with; defaults to the cached environment settings

    Returns:
        Configured FastAPI application owning its own database engine
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
    JSON API for browsing residential property listings and keeping a personal watchlist.

    ## Features

    * **Listings**: Cursor-paginated browsing filtered by type, bedrooms and price
    * **Property Events**: Price changes and sales for each property, newest first
    * **Watchlists**: Save properties to a per-user watchlist
    * **Authentication**: Stateless JWT bearer tokens valid for 24 hours

    ## Authentication

    Register with `POST /api/v1/users`, then log in with `/api/v1/auth/login` to obtain a token
    and include it in the Authorization header as `Bearer <token>`.
    """,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "Authentication",
                "description": "Login and logout"
            },
            {
                "name": "Users",
                "description": "Account registration"
            },
            {
                "name": "Properties",
                "description": "Property listing, details and maintenance"
            },
            {
                "name": "Property Events",
                "description": "Price change and sale history"
            },
            {
                "name": "Watchlists",
                "description": "Per-user saved properties"
            },
            {
                "name": "Health",
                "description": "System health endpoints"
            }
        ],
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.database = Database(settings)
    app.state.token_codec = TokenCodec.from_settings(settings)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )

    app.add_middleware(
        RequestContextMiddleware,
        max_request_size=settings.max_request_size,
        enable_request_logging=settings.enable_request_logging,
    )

    # Include API routers
    app.include_router(auth_router, prefix=settings.api_v1_prefix)
    app.include_router(users_router, prefix=settings.api_v1_prefix)
    app.include_router(properties_router, prefix=settings.api_v1_prefix)
    app.include_router(events_router, prefix=settings.api_v1_prefix)
    app.include_router(watchlists_router, prefix=settings.api_v1_prefix)

    _register_exception_handlers(app)
    _register_health_routes(app)

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Global exception handlers using ErrorHandlerService."""

    @app.exception_handler(APIException)
    async def api_exception_handler(request: Request, exc: APIException):
        """Handle custom API exceptions with structured error responses."""
        return ErrorHandlerService.handle_api_exception(exc, request)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors."""
        return ErrorHandlerService.handle_validation_error(exc, request)

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """Handle database errors with appropriate error responses."""
        return ErrorHandlerService.handle_database_error(exc, request)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions, including unknown routes, with structured error responses."""
        return ErrorHandlerService.handle_http_exception(exc, request)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions with secure error responses."""
        return ErrorHandlerService.handle_unexpected_error(exc, request)


def _register_health_routes(app: FastAPI) -> None:

    @app.get("/", tags=["Health"])
    async def root():
        """
        Root endpoint providing basic API information.
        """
        settings: Settings = app.state.settings
        return {
            "message": f"Welcome to {settings.app_name}",
            "version": settings.app_version,
            "environment": settings.environment,
            "status": "healthy",
            "documentation": {
                "swagger_ui": "/docs",
                "redoc": "/redoc",
                "openapi_json": "/openapi.json"
            },
        }

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint.

        Reports 503 when the database cannot be reached.
        """
        database: Database = app.state.database
        if not await database.check_connection():
            raise HTTPException(
                status_code=503,
                detail="Database connection failed"
            )

        return {
            "status": "healthy",
            "database": "connected",
        }


app = create_app()


if __name__ == "__main__":
    import uvicorn
    settings = get_settings()
    uvicorn.run(
        "listing_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
