"""Dispatch of MCP tool calls to their bound store operations."""

import logging
from typing import Any, Dict, List, Optional

from mcp.types import TextContent

from core.error_handling import format_tool_result
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


class ToolDispatcher:
    """Routes a tool call through lookup, validation, execution and formatting.

    Lookup happens before the arguments are inspected, and the handler only
    runs once the arguments validated. Every failure (unknown tool, invalid
    arguments, store or backend error) is raised to the caller unchanged;
    nothing is retried. The dispatcher keeps no per-call state, so any number
    of calls may be in flight at once.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def dispatch(self, tool_name: str, arguments: Optional[Dict[str, Any]] = None) -> List[TextContent]:
        """
        Execute one tool call.

        Args:
            tool_name: Registered tool name
            arguments: Raw call arguments (None means no arguments)

        Returns:
            A single text content block holding the JSON result

        Raises:
            ToolNotFoundError: Unknown tool name
            ToolValidationError: Arguments do not match the tool schema
            MCPDBError / RedisError: Propagated from the store operation
        """
        descriptor = self.registry.get(tool_name)
        validated = descriptor.validate(arguments)

        logger.debug(f"Dispatching {tool_name} with {sorted(validated.model_fields_set)}")
        try:
            payload = await descriptor.handler(validated)
        except Exception as e:
            logger.error(f"Tool {tool_name} failed: {type(e).__name__}: {e}")
            raise

        return format_tool_result(payload)
