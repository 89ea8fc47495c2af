"""Base MCP server - Transport-agnostic MCP protocol implementation.

Binds the MCP tool listing and tool call requests to a ToolDispatcher.
Exceptions raised by the dispatcher are reported by the MCP server as
error results (isError=true) carrying the exception message.
"""

import logging
from typing import List, Optional

from mcp.server import Server
from mcp.types import Prompt, Resource, TextContent, Tool

from core.config import AppConfig
from tools.dispatcher import ToolDispatcher

logger = logging.getLogger(__name__)


class BaseMCPServer:
    """Base MCP server providing core protocol functionality.

    This class encapsulates the MCP protocol logic independent of
    the transport mechanism.
    """

    def __init__(self, dispatcher: ToolDispatcher, app_config: Optional[AppConfig] = None):
        """Initialize base MCP server.

        Args:
            dispatcher: ToolDispatcher routing calls to the connected stores
            app_config: Application configuration (server name and version)
        """
        self.app_config = app_config or AppConfig()
        self.dispatcher = dispatcher
        self.server = Server(self.app_config.server_name, version=self.app_config.server_version)
        self._setup_handlers()
        logger.info(f"Initialized {self.app_config.server_name} MCP server")

    def _setup_handlers(self):
        """Setup MCP protocol handlers."""

        @self.server.list_tools()
        async def list_tools() -> List[Tool]:
            """List all available tools."""
            return self.dispatcher.registry.list_tools()

        # Argument validation is done by the dispatcher against the tool's own schema
        @self.server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: Optional[dict]) -> List[TextContent]:
            """Handle tool execution."""
            return await self.dispatcher.dispatch(name, arguments)

        @self.server.list_prompts()
        async def list_prompts() -> List[Prompt]:
            """List available prompts (currently none)."""
            return []

        @self.server.list_resources()
        async def list_resources() -> List[Resource]:
            """List available resources (currently none)."""
            return []
