"""MCP tools package for MCP Database Server."""

from tools.base import ToolArguments, ToolDescriptor, ToolHandler
from tools.registry import ToolRegistry, build_tool_registry
from tools.dispatcher import ToolDispatcher
from tools.validators import SQLValidator, InputValidator

__all__ = [
    'ToolArguments',
    'ToolDescriptor',
    'ToolHandler',
    'ToolRegistry',
    'build_tool_registry',
    'ToolDispatcher',
    'SQLValidator',
    'InputValidator',
]
