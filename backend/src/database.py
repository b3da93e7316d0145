"""MongoDB async client setup."""

from __future__ import annotations

from pymongo import AsyncMongoClient

from src.config import settings
from src.services.document_store import MongoDocumentStore
from src.services.search_executor import StoreUnavailableError

_client: AsyncMongoClient | None = None


def get_mongo_client() -> AsyncMongoClient:
    """Get or create the shared Mongo client. Connection happens lazily on first use."""
    global _client
    if not settings.mongo_uri:
        raise StoreUnavailableError("MongoDB connection string not set (MONGO_URI)")
    if _client is None:
        _client = AsyncMongoClient(settings.mongo_uri)
    return _client


def get_document_store() -> MongoDocumentStore:
    """Dependency for FastAPI routes to get the document store."""
    client = get_mongo_client()
    collection = client[settings.mongo_db][settings.mongo_collection]
    return MongoDocumentStore(collection, settings.search_index)


async def close_mongo_client() -> None:
    global _client
    if _client is not None:
        await _client.close()
        _client = None
