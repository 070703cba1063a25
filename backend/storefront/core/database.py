import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from storefront.core.config import settings

logger = logging.getLogger(__name__)

# Global MongoDB client
_client: AsyncIOMotorClient = None
_database: AsyncIOMotorDatabase = None


async def connect_to_mongo():
    """Connect to MongoDB and make sure the indexes the API relies on exist."""
    global _client, _database
    _client = AsyncIOMotorClient(settings.MONGODB_URI)
    _database = _client[settings.MONGODB_DB_NAME]

    # One cart per user, one review per user and product
    await _database.carts.create_index("user", unique=True)
    await _database.users.create_index("email", unique=True)
    await _database.reviews.create_index([("product", 1), ("user", 1)], unique=True)

    logger.info(f"Connected to MongoDB: {settings.MONGODB_DB_NAME}")


async def close_mongo_connection():
    """Close MongoDB connection."""
    global _client
    if _client:
        _client.close()
        logger.info("Closed MongoDB connection")


def get_database() -> AsyncIOMotorDatabase:
    """Get MongoDB database instance."""
    return _database
