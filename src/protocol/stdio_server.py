"""STDIO transport MCP server."""

import asyncio
import logging
from typing import Optional, Union

from mcp.server.stdio import stdio_server

from core.config import AppConfig
from core.exceptions import DatabaseConnectionError
from database.postgres_store import PostgresStore
from database.redis_store import RedisStore
from protocol.base_server import BaseMCPServer
from tools.dispatcher import ToolDispatcher
from tools.registry import build_tool_registry

logger = logging.getLogger(__name__)

Store = Union[PostgresStore, RedisStore]


class StdioMCPServer(BaseMCPServer):
    """MCP server using STDIO transport."""

    async def run(self):
        """Run the STDIO MCP server until the client closes the session."""
        logger.info("Starting STDIO MCP server")
        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options()
            )


async def connect_store(store: Store, label: str) -> bool:
    """Connect one store, reporting failure instead of raising.

    A store that fails to connect only loses its tools; the server still
    starts with whatever else is available.
    """
    try:
        await store.connect()
    except DatabaseConnectionError as e:
        logger.error(f"Failed to connect to {label}: {e}")
        logger.warning(f"{label} tools will not be available")
        return False
    return True


async def disconnect_stores(*stores: Store):
    """Disconnect every store, continuing past individual failures."""
    for store in stores:
        try:
            await store.disconnect()
        except Exception as e:
            logger.warning(f"Error closing {store.__class__.__name__}: {e}")


async def run_stdio_server(
    app_config: Optional[AppConfig] = None,
    postgres_store: Optional[PostgresStore] = None,
    redis_store: Optional[RedisStore] = None
):
    """Connect the stores, register their tools and serve MCP over stdio.

    Args:
        app_config: App configuration (optional, defaults to env)
        postgres_store: Store to use instead of one built from app_config
        redis_store: Store to use instead of one built from app_config
    """
    app_config = app_config or AppConfig.from_env()
    postgres_store = postgres_store or PostgresStore(app_config.postgres)
    redis_store = redis_store or RedisStore(app_config.redis)

    try:
        await asyncio.gather(
            connect_store(postgres_store, "PostgreSQL"),
            connect_store(redis_store, "Redis")
        )

        registry = build_tool_registry(postgres_store, redis_store, app_config.query_config)
        server = StdioMCPServer(ToolDispatcher(registry), app_config)

        logger.info(f"PostgreSQL: {'Connected' if postgres_store.is_connected() else 'Disconnected'}")
        logger.info(f"Redis: {'Connected' if redis_store.is_connected() else 'Disconnected'}")

        await server.run()
    finally:
        logger.info("Shutting down MCP Database Server...")
        await disconnect_stores(postgres_store, redis_store)
        logger.info("Graceful shutdown completed")
