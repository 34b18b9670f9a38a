"""
Sales Reports API - Main Application

This module serves as the entry point for the Sales Reports API,
configuring the FastAPI application with all routes, middleware,
and exception handlers.

Version: 1.0.0
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

# Import API routers
from app.api.routers import health, sales_reports

from app.api.middlewares.logging_middleware import RequestLoggingMiddleware
from app.api.middlewares.error_handler import add_exception_handlers
from app.config.settings import settings
from app.db.session import create_mongo_client

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger("api")


# Lifespan manager for startup/shutdown tasks
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the MongoDB client on startup and close it on shutdown
    """
    client = create_mongo_client()
    app.state.database = client[settings.MONGO_DB_NAME]
    logger.info(f"Connected to MongoDB database '{settings.MONGO_DB_NAME}'")

    yield

    client.close()
    logger.info("Closed MongoDB client")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Read-only sales reports over the sales collection",
    version=settings.APP_VERSION,
    docs_url=f"{settings.API_PREFIX}/docs",
    redoc_url=f"{settings.API_PREFIX}/redoc",
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
origins = settings.CORS_ORIGINS.split(",")
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Add request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Add exception handlers
add_exception_handlers(app)

# Include routers
app.include_router(health.router, prefix=settings.API_PREFIX, tags=["Health"])
app.include_router(
    sales_reports.router,
    prefix=f"{settings.API_PREFIX}/reports/sales",
    tags=["Sales Reports"]
)


@app.get(settings.API_PREFIX, tags=["Root"])
async def root():
    """API root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs_url": f"{settings.API_PREFIX}/docs",
        "database_type": "MongoDB"
    }
