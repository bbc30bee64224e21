"""
MongoDB access helpers.

The client is created on first use from the configured connection string.
Request handlers receive the collection through `get_collection`, so tests can
swap in another store with FastAPI's dependency overrides.
"""

import logging
from typing import Iterable, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

import settings

logger = logging.getLogger(__name__)

COLLECTION = "transaction"  # schemas.Transaction -> collection name = lowercase class name

_client: Optional[MongoClient] = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        _client = MongoClient(settings.database_url(), tz_aware=True)
        logger.info("mongo_client_created database=%s", settings.database_name())
    return _client


def get_db() -> Database:
    return get_client()[settings.database_name()]


def get_collection() -> Collection:
    return get_db()[COLLECTION]


def replace_documents(collection: Collection, documents: Iterable[dict]) -> int:
    """Drop every document in the collection and insert `documents` instead.

    Not transactional: if the insert fails after the delete, the collection is
    left empty.
    """
    documents = list(documents)
    deleted = collection.delete_many({})
    logger.info("collection_cleared name=%s deleted=%s", collection.name, deleted.deleted_count)
    if not documents:
        return 0
    result = collection.insert_many(documents)
    return len(result.inserted_ids)


def ping(db: Database) -> dict:
    db.client.admin.command("ping")
    return {"database_name": db.name, "collections": db.list_collection_names()[:10]}
