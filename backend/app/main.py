"""
FastAPI application entry point for the Business In Rwanda API.

This is the main app that:
- Initializes FastAPI with CORS
- Registers exception handlers and all API routers
- Creates tables and seeds default categories on startup
- Provides health check endpoint
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from app.config import settings
from app import database
from app.errors import (
    ListingValidationError,
    listing_validation_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
# Import API routers
from app.api import admin, auth, browse, categories, companies, employer, forms, jobs, jobseeker, notifications
from app.services.categories import seed_default_categories
from app.services.sessions import purge_expired_sessions

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Business In Rwanda API"
VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.

    On startup: create missing tables, seed categories into an empty table,
    drop expired login sessions
    On shutdown: close database connections
    """
    logger.info(f"Starting {SERVICE_NAME}...")
    logger.info(f"Database: {settings.database_url.split('@')[1] if '@' in settings.database_url else 'configured'}")
    logger.info(f"Debug mode: {settings.debug}")

    await database.create_tables()
    async with database.AsyncSessionLocal() as db:
        await seed_default_categories(db)
        purged = await purge_expired_sessions(db)
        logger.info(f"Removed {purged} expired session(s)")

    yield

    logger.info(f"Shutting down {SERVICE_NAME}...")
    await database.engine.dispose()


# Initialize FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Jobs, tenders, auctions and announcements marketplace",
    version=VERSION,
    debug=settings.debug,
    lifespan=lifespan,
)

# Configure CORS
# Set ALLOWED_ORIGINS environment variable with comma-separated domains
allowed_origins = [settings.get_frontend_url()]
if settings.allowed_origins:
    allowed_origins.extend(origin.strip() for origin in settings.allowed_origins.split(',') if origin.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(ListingValidationError, listing_validation_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# Health check endpoint
@app.get("/health")
async def health_check():
    """Simple health check endpoint."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": VERSION,
    }


# Register API routers
app.include_router(auth.router, prefix="/api/auth", tags=["auth"])
app.include_router(jobs.router, prefix="/api/jobs", tags=["jobs"])
app.include_router(browse.router, prefix="/api", tags=["browse"])
app.include_router(forms.router, prefix="/api/forms", tags=["forms"])
app.include_router(categories.router, prefix="/api/categories", tags=["categories"])
app.include_router(companies.router, prefix="/api/companies", tags=["companies"])
app.include_router(notifications.router, prefix="/api/notifications", tags=["notifications"])
app.include_router(employer.router, prefix="/api/employer", tags=["employer"])
app.include_router(jobseeker.router, prefix="/api/jobseeker", tags=["jobseeker"])
app.include_router(admin.router, prefix="/api/admin", tags=["admin"])
