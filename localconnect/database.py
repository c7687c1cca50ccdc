import logging
from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING, GEOSPHERE, IndexModel

from localconnect.config import settings

LOGGER = logging.getLogger(__name__)

_client: Optional[AsyncIOMotorClient] = None
_database: Optional[AsyncIOMotorDatabase] = None
_indexes_ready = False

INDEXES: dict[str, list[IndexModel]] = {
    "users": [
        IndexModel([("email", ASCENDING)], unique=True, name="uniq_email"),
        IndexModel([("home_location", GEOSPHERE)], name="home_location_2dsphere"),
        IndexModel([("created_at", DESCENDING)], name="created_at_desc"),
    ],
    "businesses": [
        IndexModel([("location", GEOSPHERE)], name="location_2dsphere"),
        IndexModel([("owner_id", ASCENDING)], name="owner_id"),
        IndexModel([("created_at", DESCENDING)], name="created_at_desc"),
        IndexModel([("average_rating", DESCENDING)], name="average_rating_desc"),
    ],
    "reviews": [
        IndexModel([("user_id", ASCENDING), ("business_id", ASCENDING)], unique=True, name="uniq_user_business"),
        IndexModel([("business_id", ASCENDING)], name="business_id"),
        IndexModel([("created_at", DESCENDING)], name="created_at_desc"),
    ],
    "follows": [
        IndexModel([("user_id", ASCENDING), ("business_id", ASCENDING)], unique=True, name="uniq_user_business"),
        IndexModel([("business_id", ASCENDING)], name="business_id"),
    ],
    "offers": [
        IndexModel([("business_id", ASCENDING)], name="business_id"),
        IndexModel(
            [("is_active", ASCENDING), ("valid_from", ASCENDING), ("valid_to", ASCENDING)],
            name="active_window",
        ),
    ],
    "categories": [
        IndexModel([("name", ASCENDING)], unique=True, name="uniq_name"),
    ],
    "visits": [
        IndexModel([("created_at", DESCENDING), ("business_id", ASCENDING)], name="created_at_business"),
    ],
}


async def connect_to_mongo() -> None:
    global _client, _database

    if _client is not None:
        return

    _client = AsyncIOMotorClient(settings.mongo_uri, tz_aware=True)
    await _client.admin.command("ping")
    _database = _client[settings.db_name]
    LOGGER.info("Connected to MongoDB database=%s", settings.db_name)


async def close_mongo_connection() -> None:
    global _client, _database, _indexes_ready

    if _client is not None:
        _client.close()
        LOGGER.info("MongoDB connection closed")

    _client = None
    _database = None
    _indexes_ready = False


async def ensure_indexes(database: AsyncIOMotorDatabase) -> None:
    global _indexes_ready

    for collection_name, indexes in INDEXES.items():
        names = await database[collection_name].create_indexes(indexes)
        LOGGER.info("Indexes ready collection=%s indexes=%s", collection_name, ",".join(names))
    _indexes_ready = True


def indexes_ready() -> bool:
    return _indexes_ready


async def ping_mongo_detailed() -> tuple[bool, str | None]:
    if _client is None:
        return False, "MongoDB client is not initialized."

    try:
        await _client.admin.command("ping")
    except Exception as exc:
        return False, str(exc)

    return True, None


async def ping_mongo() -> bool:
    mongo_ok, _ = await ping_mongo_detailed()
    return mongo_ok


def get_database() -> AsyncIOMotorDatabase:
    if _database is None:
        raise RuntimeError("MongoDB connection has not been initialized.")
    return _database
