"""Create the MongoDB indexes the API relies on."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from fitgoals.config import settings
from fitgoals.database import ensure_indexes


async def create_indexes(mongodb_url: str, db_name: str):
    """Create unique user indexes and owner lookup indexes."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[db_name]

    await ensure_indexes(db)
    for collection_name in ["users", "goals", "progress"]:
        indexes = await db[collection_name].index_information()
        print(f"{collection_name}: {', '.join(sorted(indexes))}")

    client.close()
    print("Done!")


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else settings.mongodb_url
    asyncio.run(create_indexes(url, settings.mongodb_db_name))
