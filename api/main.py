"""
HR Console Onboarding API - FastAPI Application

Main entry point for the API server.
Run with: uvicorn api.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from api.config.settings import settings
from api.config.database import engine as default_engine, init_db
from api.endpoints import api_router
from api.middleware.error_handler import setup_exception_handlers
from api.middleware.logging import LoggingMiddleware, configure_logging
from api.services.onboarding_service import OnboardingService

# Configure structured logging
configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)
logger = structlog.get_logger()


def create_app(
    engine: Optional[Engine] = None,
    service: Optional[OnboardingService] = None,
) -> FastAPI:
    """Build the API application.

    Args:
        engine: Database engine (defaults to the configured one)
        service: Pre-built onboarding service (defaults to SQL-backed)
    """
    engine = engine or default_engine
    if service is None:
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
        service = OnboardingService.from_session_factory(session_factory)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        logger.info(
            "Starting HR console onboarding API",
            version=settings.APP_VERSION,
            debug=settings.DEBUG,
        )

        if settings.INIT_DB_ON_STARTUP:
            logger.info("Initializing database tables")
            init_db(bind=engine)

        yield

        logger.info("Shutting down HR console onboarding API")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Candidate onboarding pipeline for the HR administration console",
        docs_url="/api/docs" if settings.DEBUG else None,
        redoc_url="/api/redoc" if settings.DEBUG else None,
        openapi_url="/api/openapi.json" if settings.DEBUG else None,
        lifespan=lifespan,
    )
    app.state.onboarding = service

    # Setup exception handlers
    setup_exception_handlers(app)

    # Add CORS middleware (outermost)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add logging middleware (innermost)
    app.add_middleware(LoggingMiddleware)

    # Include API routes
    app.include_router(api_router, prefix="/api/v1")

    # Root health endpoint (for load balancer)
    @app.get("/health")
    async def root_health():
        """Simple health check for load balancer."""
        return {"status": "ok", "version": settings.APP_VERSION}

    @app.get("/")
    async def root():
        """Root endpoint with API info."""
        return {
            "name": settings.APP_NAME,
            "version": settings.APP_VERSION,
            "docs": "/api/docs" if settings.DEBUG else None,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
