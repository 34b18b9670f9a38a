from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from fastapi import Request
import logging

from app.config.settings import settings

# Set up logging
logger = logging.getLogger(__name__)


def create_mongo_client() -> AsyncIOMotorClient:
    """Create the MongoDB client used for the lifetime of the application."""
    client = AsyncIOMotorClient(
        settings.MONGO_URI,
        serverSelectionTimeoutMS=settings.MONGO_TIMEOUT_MS,
        tz_aware=True,
    )
    logger.info(f"MongoDB client created for database '{settings.MONGO_DB_NAME}'")
    return client


def get_database(request: Request) -> AsyncIOMotorDatabase:
    """Get the application database for use with FastAPI dependencies."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise RuntimeError("Database not initialized")
    return database


def get_sales_collection(request: Request) -> AsyncIOMotorCollection:
    """Get the read-only sales collection for use with FastAPI dependencies."""
    return get_database(request)[settings.SALES_COLLECTION]


async def check_database_connection(database) -> bool:
    """
    Check if database connection works

    Args:
        database: Database handle to ping

    Returns:
        bool: True if connection is working
    """
    try:
        await database.command("ping")
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {str(e)}")
        return False
