"""MongoDB database configuration and connection management."""

from __future__ import annotations

from typing import Optional

from pymongo import MongoClient
from pymongo.database import Database

from portal.config import DEFAULT_DATABASE_NAME


# Global MongoDB client instance
_client: Optional[MongoClient] = None
_database: Optional[Database] = None

_settings = {
    "uri": "mongodb://localhost:27017/",
    "database": DEFAULT_DATABASE_NAME,
    "timeout_ms": 5000,
}


def configure(uri: str, database_name: str = DEFAULT_DATABASE_NAME, timeout_ms: int = 5000) -> None:
    """Point the shared client at a new deployment, dropping any open connection."""
    close_mongo_connection()
    _settings.update(uri=uri, database=database_name, timeout_ms=timeout_ms)


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client instance."""
    global _client
    if _client is None:
        timeout_ms = _settings["timeout_ms"]
        # Bound every network round-trip so a dead cluster surfaces as an error
        _client = MongoClient(
            _settings["uri"],
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
            socketTimeoutMS=timeout_ms,
        )
    return _client


def get_database() -> Database:
    """Get the MongoDB database instance."""
    global _database
    if _database is None:
        client = get_mongo_client()
        _database = client[_settings["database"]]
    return _database


def close_mongo_connection():
    """Close the MongoDB connection."""
    global _client, _database
    if _client is not None:
        _client.close()
        _client = None
        _database = None
