"""MongoDB database connection using Motor (async driver)."""
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING

from fitgoals.config import settings

logger = logging.getLogger(__name__)


async def ensure_indexes(db) -> None:
    """Create the indexes the services rely on.

    The unique indexes on ``users.username`` and ``users.email`` are what
    rejects the losing writer when two signups race for the same identity.
    """
    await db["users"].create_index([("username", ASCENDING)], unique=True)
    await db["users"].create_index([("email", ASCENDING)], unique=True)
    await db["goals"].create_index([("user_id", ASCENDING)])
    await db["progress"].create_index(
        [("user_id", ASCENDING), ("goal_id", ASCENDING)]
    )


class Database:
    """MongoDB database connection manager."""

    client: AsyncIOMotorClient | None = None
    db: AsyncIOMotorDatabase | None = None

    async def connect(self) -> None:
        """Connect to MongoDB and make sure indexes exist."""
        self.client = AsyncIOMotorClient(settings.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        await ensure_indexes(self.db)
        logger.info("Connected to MongoDB: %s", settings.mongodb_db_name)

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client is not None:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")


# Global database instance
database = Database()


async def get_database() -> AsyncIOMotorDatabase:
    """Dependency to get database instance."""
    if database.db is None:
        raise RuntimeError("Database not connected")
    return database.db
