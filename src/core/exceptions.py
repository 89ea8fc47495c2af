"""Custom exceptions for MCP Database Server."""


class MCPDBError(Exception):
    """Base exception for all MCP database server errors."""

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert exception to dictionary for logging and diagnostics."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class DatabaseConnectionError(MCPDBError):
    """Exception raised when a store cannot be reached at connect time."""
    pass


class NotConnectedError(MCPDBError):
    """Exception raised when an operation is attempted on a disconnected store."""
    pass


class QueryExecutionError(MCPDBError):
    """Exception raised when the backend rejects an otherwise valid statement."""
    pass


class ToolValidationError(MCPDBError):
    """Exception raised when tool arguments fail their declared schema."""
    pass


class ToolNotFoundError(MCPDBError):
    """Exception raised when a tool name is not present in the registry."""
    pass


class ConfigurationError(MCPDBError):
    """Exception raised when configuration is invalid."""
    pass
