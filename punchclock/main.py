"""
Punch Ledger Service - Main Application Entry Point.

This service records and retrieves time-clock punches:
- Punch creation, restricted to the terminal of the employee's department
  or the administrative terminal
- Punch lookup by id and by calendar day
- Badge, department, shift and employee reference lookups
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from punchclock.api.dependencies import DatabaseDep
from punchclock.api.routes.punches import router as punches_router
from punchclock.api.routes.reference import router as reference_router
from punchclock.core.config import settings
from punchclock.core.database import create_db_and_tables, get_database
from punchclock.core.exceptions import DataAccessError
from punchclock.core.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("Starting Punch Ledger Service...")

    logger.info("Creating database and tables...")
    create_db_and_tables()
    logger.info("Database and tables created successfully")

    logger.info("Punch Ledger Service startup complete")

    yield

    # Shutdown
    logger.info("Punch Ledger Service shutting down...")
    get_database().engine.dispose()
    logger.info("Punch Ledger Service shutdown complete")


# Initialize FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Punch Ledger Service - Records badge punches and enforces department terminal authorization",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)


# Configure CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=settings.CORS_ALLOW_CREDENTIALS,
    allow_methods=settings.CORS_ALLOW_METHODS,
    allow_headers=settings.CORS_ALLOW_HEADERS,
)


@app.exception_handler(DataAccessError)
async def data_access_error_handler(_: Request, exc: DataAccessError):
    logger.error(f"Data access error: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable"})


# Include routers
app.include_router(punches_router, prefix="/api/v1")
app.include_router(reference_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint for container orchestration and monitoring.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/ready", tags=["health"])
async def readiness_check(database: DatabaseDep):
    """
    Readiness check endpoint for Kubernetes.
    Verifies that the database accepts connections.
    """
    database_ready = database.ping()

    return {
        "status": "ready" if database_ready else "not_ready",
        "checks": {
            "database": "ok" if database_ready else "error",
        },
    }


@app.get("/", tags=["root"])
async def root():
    """
    Root endpoint with service information.
    """
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
    }
