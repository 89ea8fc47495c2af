"""Tool handlers package."""

from tools.handlers.postgres_handler import PostgresToolHandler
from tools.handlers.redis_handler import RedisToolHandler

__all__ = [
    'PostgresToolHandler',
    'RedisToolHandler',
]
