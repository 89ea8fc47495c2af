"""Store handles for MCP Database Server."""

from .postgres_store import PostgresStore, QueryResult
from .redis_store import RedisStore

__all__ = [
    "PostgresStore",
    "QueryResult",
    "RedisStore"
]
