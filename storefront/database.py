"""
MongoDB database connection
Using motor (async MongoDB driver)
"""
import logging
from motor.motor_asyncio import AsyncIOMotorClient
from storefront.config import settings
from typing import Optional

logger = logging.getLogger(__name__)

# Global database client
mongodb_client: Optional[AsyncIOMotorClient] = None
database = None

async def connect_db():
    """Connect to MongoDB"""
    global mongodb_client, database

    try:
        mongodb_client = AsyncIOMotorClient(settings.MONGODB_URL)
        database = mongodb_client[settings.DATABASE_NAME]

        # Test connection
        await mongodb_client.admin.command('ping')
        logger.info(f"✅ Connected to MongoDB: {settings.DATABASE_NAME}")

        await create_indexes(database)

    except Exception as e:
        logger.error(f"❌ MongoDB connection failed: {e}")
        raise

async def close_db():
    """Close MongoDB connection"""
    global mongodb_client

    if mongodb_client:
        mongodb_client.close()
        logger.info("❌ MongoDB connection closed")

async def get_database():
    """Get database instance"""
    return database

async def create_indexes(db):
    """Create database indexes for better performance"""

    await db.api_keys.create_index("key", unique=True)

    await db.products.create_index("created_at")
    await db.products.create_index("category")

    await db.product_offers.create_index("product_id")

    await db.posts.create_index("slug", unique=True)
    await db.posts.create_index([("published", 1), ("created_at", -1)])

    await db.order_clicks.create_index("created_at")
    await db.order_clicks.create_index("product_id")

    await db.notifications.create_index("created_at")
    await db.notifications.create_index([("type", 1), ("created_at", -1)])
    # One quota notification per tier per day, even with overlapping checks
    await db.notifications.create_index("dedup_key", unique=True, sparse=True)

    await db.app_settings.create_index("key", unique=True)

    logger.info("✅ Database indexes created")
