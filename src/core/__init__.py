"""Core modules for MCP Database Server."""

from .exceptions import (
    MCPDBError,
    DatabaseConnectionError,
    NotConnectedError,
    QueryExecutionError,
    ToolValidationError,
    ToolNotFoundError,
    ConfigurationError
)

__all__ = [
    "MCPDBError",
    "DatabaseConnectionError",
    "NotConnectedError",
    "QueryExecutionError",
    "ToolValidationError",
    "ToolNotFoundError",
    "ConfigurationError"
]
