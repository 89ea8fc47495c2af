"""Tool registry: the catalog of tools exposed to MCP clients."""

import logging
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional

from mcp.types import Tool

from core.config import QueryConfig
from core.exceptions import ConfigurationError, ToolNotFoundError
from database.postgres_store import PostgresStore
from database.redis_store import RedisStore
from tools.base import ToolDescriptor, ToolHandler
from tools.handlers import PostgresToolHandler, RedisToolHandler

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Central registry for MCP tool descriptors.

    Built once from handler groups; the name -> descriptor mapping cannot
    be changed afterwards.
    """

    def __init__(self, handlers: Iterable[ToolHandler]):
        descriptors: Dict[str, ToolDescriptor] = {}
        handler_count = 0

        for handler in handlers:
            handler_count += 1
            for descriptor in handler.descriptors():
                if descriptor.name in descriptors:
                    raise ConfigurationError(
                        f"Duplicate tool name: {descriptor.name}",
                        details={"tool": descriptor.name, "handler": handler.__class__.__name__}
                    )
                descriptors[descriptor.name] = descriptor
                logger.debug(f"Registered {descriptor.name} -> {handler.__class__.__name__}")

        self._descriptors: Mapping[str, ToolDescriptor] = MappingProxyType(descriptors)
        logger.info(f"✅ Registered {len(descriptors)} MCP tools across {handler_count} handlers")

    def get(self, tool_name: str) -> ToolDescriptor:
        """Look up a tool descriptor by name.

        Raises:
            ToolNotFoundError: If no tool with that name is registered
        """
        descriptor = self._descriptors.get(tool_name)
        if descriptor is None:
            raise ToolNotFoundError(f"Unknown tool: {tool_name}", details={"tool": tool_name})
        return descriptor

    def is_tool_registered(self, tool_name: str) -> bool:
        """Check if a tool is registered."""
        return tool_name in self._descriptors

    @property
    def tool_names(self) -> List[str]:
        return list(self._descriptors)

    @property
    def descriptors(self) -> Mapping[str, ToolDescriptor]:
        return self._descriptors

    def list_tools(self) -> List[Tool]:
        """MCP tool listing for every registered descriptor."""
        return [descriptor.to_mcp_tool() for descriptor in self._descriptors.values()]


def build_tool_registry(
    postgres_store: Optional[PostgresStore] = None,
    redis_store: Optional[RedisStore] = None,
    query_config: Optional[QueryConfig] = None
) -> ToolRegistry:
    """Build the registry from whichever stores are currently connected.

    A store that is missing or not connected contributes no tools at all.
    """
    handlers: List[ToolHandler] = []

    if postgres_store is not None and postgres_store.is_connected():
        handlers.append(PostgresToolHandler(postgres_store, query_config))
    else:
        logger.warning("PostgreSQL not connected - PostgreSQL tools will not be available")

    if redis_store is not None and redis_store.is_connected():
        handlers.append(RedisToolHandler(redis_store))
    else:
        logger.warning("Redis not connected - Redis tools will not be available")

    return ToolRegistry(handlers)
