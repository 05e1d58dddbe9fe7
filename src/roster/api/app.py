"""
Main FastAPI application for Roster backend
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from ..auth.credentials import CredentialCodec
from ..config import settings
from ..database import MongoGateway, ensure_indexes, init_database, reset_database
from ..graphql.context import build_services
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware
from ..storage import LocalPhotoStore

# Configure logging before creating logger
configure_logging(debug=settings.debug, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logger.info("Starting Roster API...")
    db = init_database()

    from ..validation import (
        ValidationError,
        get_startup_recommendations,
        validate_startup_configuration,
    )

    validation_results = await validate_startup_configuration()
    if not validation_results["overall_valid"]:
        logger.error(
            "Application configuration validation failed - some features may not work properly",
            database_errors=validation_results["database"]["errors"],
            auth_errors=validation_results["auth"]["errors"],
        )
        if settings.environment.lower() in ("production", "prod"):
            raise ValidationError("Critical configuration validation failed in production")

    recommendations = get_startup_recommendations(validation_results)
    if recommendations:
        logger.info("Configuration recommendations", recommendations=recommendations)

    if validation_results["database"]["valid"]:
        await ensure_indexes(db)

    # Immutable after startup; shared by every request
    app.state.codec = CredentialCodec.from_settings(settings)
    app.state.services = build_services(MongoGateway(db), app.state.codec)

    yield

    logger.info("Shutting down Roster API...")
    reset_database()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Roster API",
        description="Account registration and employee records over GraphQL",
        version="0.1.0",
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        """Health check endpoint."""
        return {"status": "healthy", "version": "0.1.0"}

    # GraphQL endpoint (allow disabling for tests)
    if not os.getenv("ROSTER_DISABLE_GRAPHQL"):
        try:
            from ..graphql.schema import create_graphql_router, validate_schema

            logger.info("Validating GraphQL schema...")
            validate_schema()

            app.include_router(create_graphql_router(), prefix="")
            logger.info("GraphQL endpoint initialized successfully", endpoint="/graphql")
        except Exception as e:  # pragma: no cover
            logger.error("Failed to initialize GraphQL endpoint", error=str(e))
            raise

    # Employee photo uploads, served back from the same store
    app.state.photo_store = LocalPhotoStore(settings.upload_dir, settings.upload_url_base)
    app.mount(
        settings.upload_url_base,
        StaticFiles(directory=str(app.state.photo_store.base_path)),
        name="uploads",
    )

    from .endpoints import uploads

    app.include_router(uploads.router, prefix="/api")

    return app


# Create the main application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "roster.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
        log_level=settings.log_level.lower(),
    )
