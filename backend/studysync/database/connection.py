from __future__ import annotations

import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from studysync.config import Settings

logger = logging.getLogger(__name__)

KV_STORE_COLLECTION = "kv_store"

_client: AsyncIOMotorClient | None = None
_db_name: str | None = None


def get_db() -> AsyncIOMotorDatabase:
    if _client is None or _db_name is None:
        raise RuntimeError("MongoDB client is not initialized")
    return _client[_db_name]


def get_collection(name: str) -> AsyncIOMotorCollection:
    return get_db()[name]


async def connect_to_mongo(config: Settings) -> None:
    global _client, _db_name
    if _client is not None:
        return

    _client = AsyncIOMotorClient(
        config.mongodb_url,
        serverSelectionTimeoutMS=config.mongodb_server_selection_timeout_ms,
        uuidRepresentation="standard",
    )
    _db_name = config.mongodb_db_name
    logger.info(f"MongoDB client created: db={_db_name}")


async def ping_mongo() -> bool:
    if _client is None:
        return False
    try:
        await _client.admin.command("ping")
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False
    return True


async def close_mongo_connection() -> None:
    global _client, _db_name
    if _client is None:
        return

    _client.close()
    _client = None
    _db_name = None
