"""
Main FastAPI application entry point.
Configures the app, middleware, routers, and startup/shutdown events.
"""

from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
import logging
from typing import Dict, Any, Optional

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from app.config import settings
from app.domain.events.base import get_event_dispatcher
from app.infrastructure.auth import require_admin, require_manager
from app.infrastructure.db.database import create_tables
from app.infrastructure.events.event_setup import initialize_event_system
from app.infrastructure.jobs.runner import WorkerPool, build_job_queue
from app.infrastructure.queue.backend import JobQueue
from app.infrastructure.web.middleware.error_handler import ErrorHandlerMiddleware
from app.infrastructure.web.routers import (
    email_logs,
    jobs_admin,
    lifecycle,
    notifications,
    proposals,
    verification,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def init_sentry() -> None:
    if not settings.sentry_dsn:
        return
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        traces_sample_rate=settings.sentry_traces_sample_rate,
        environment=settings.environment,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            SqlalchemyIntegration(),
        ],
    )
    logger.info("Sentry initialized")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.
    Creates the job queue, wires the event system and starts the workers.
    """
    # Startup
    logger.info(f"Starting {settings.api_title} v{settings.api_version}")
    logger.info(f"Environment: {settings.environment}")

    init_sentry()
    create_tables()

    queue: JobQueue = getattr(app.state, "job_queue", None) or build_job_queue()
    app.state.job_queue = queue

    dispatcher = initialize_event_system(queue, get_event_dispatcher())
    if settings.event_bus_mode == "channel":
        dispatcher.start()
    logger.info(f"Event system initialized ({settings.event_bus_mode} mode, {settings.queue_backend} queue)")

    workers: Optional[WorkerPool] = None
    if settings.run_workers_in_process:
        workers = WorkerPool(queue)
        workers.start()

    yield

    # Shutdown
    logger.info("Shutting down application")
    if workers:
        await workers.stop()
    await dispatcher.stop()


def create_application() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """
    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        debug=settings.debug,
        docs_url=f"{settings.api_prefix}/docs" if settings.debug else None,
        redoc_url=f"{settings.api_prefix}/redoc" if settings.debug else None,
        openapi_url=f"{settings.api_prefix}/openapi.json" if settings.debug else None,
        lifespan=lifespan
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    # Add trusted host middleware for production
    if settings.is_production:
        app.add_middleware(
            TrustedHostMiddleware,
            allowed_hosts=["*"]
        )

    # Add custom error handler middleware
    app.add_middleware(ErrorHandlerMiddleware)

    # Include routers
    for role, guard in (("manager", require_manager), ("admin", require_admin)):
        app.include_router(
            lifecycle.router,
            prefix=f"{settings.api_prefix}/{role}",
            tags=["Lifecycle"],
            dependencies=[Depends(guard)]
        )
        app.include_router(
            verification.router,
            prefix=f"{settings.api_prefix}/{role}",
            tags=["Verification"],
            dependencies=[Depends(guard)]
        )
    app.include_router(
        proposals.router,
        prefix=f"{settings.api_prefix}/proposals",
        tags=["Proposals"]
    )
    app.include_router(
        notifications.router,
        prefix=f"{settings.api_prefix}/notifications",
        tags=["Notifications"]
    )
    app.include_router(
        email_logs.router,
        prefix=f"{settings.api_prefix}/manager/email-logs",
        tags=["Email Logs"],
        dependencies=[Depends(require_manager)]
    )
    app.include_router(
        jobs_admin.router,
        prefix=f"{settings.api_prefix}/admin/jobs",
        tags=["Jobs"],
        dependencies=[Depends(require_admin)]
    )

    # Root endpoint
    @app.get("/")
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": settings.api_title,
            "version": settings.api_version,
            "environment": settings.environment,
            "docs": f"{settings.api_prefix}/docs" if settings.debug else None,
            "health": f"{settings.api_prefix}/health"
        }

    # Health check endpoint
    @app.get(f"{settings.api_prefix}/health")
    async def health_check() -> Dict[str, Any]:
        """Health check endpoint for monitoring."""
        return {
            "status": "healthy",
            "environment": settings.environment,
            "version": settings.api_version
        }

    return app


# Create the FastAPI app instance
app = create_application()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level="debug" if settings.debug else "info",
    )
