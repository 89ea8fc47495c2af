"""Base classes for MCP tool descriptors and handler groups."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Type

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict, ValidationError

from core.error_handling import describe_validation_error
from core.exceptions import ToolValidationError


class ToolArguments(BaseModel):
    """Base class for declarative tool argument schemas.

    Fields are checked strictly against their primitive types (no "5" -> 5
    coercion); absent optional fields take their declared defaults. Field
    aliases carry the camelCase names callers use on the wire.
    """

    model_config = ConfigDict(
        strict=True,
        populate_by_name=True,
        extra="ignore",
        frozen=True
    )


ToolCallable = Callable[[Any], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDescriptor:
    """Immutable description of one tool and the handler bound to it."""

    name: str
    title: str
    description: str
    arguments: Type[ToolArguments]
    handler: ToolCallable
    # Passed to field validators as ValidationInfo.context
    validation_context: Optional[Dict[str, Any]] = None

    def validate(self, raw_arguments: Optional[Dict[str, Any]]) -> ToolArguments:
        """Validate raw call arguments, filling in declared defaults.

        Raises:
            ToolValidationError: Naming every offending field
        """
        try:
            return self.arguments.model_validate(
                raw_arguments if raw_arguments is not None else {},
                context=self.validation_context
            )
        except ValidationError as e:
            message, details = describe_validation_error(self.name, e)
            raise ToolValidationError(message, details=details) from e

    def to_mcp_tool(self) -> Tool:
        """Render as the MCP tool listing entry."""
        return Tool(
            name=self.name,
            title=self.title,
            description=self.description,
            inputSchema=self.arguments.model_json_schema(by_alias=True)
        )


class ToolHandler(ABC):
    """Abstract base class for a group of tools bound to one store."""

    @abstractmethod
    def descriptors(self) -> List[ToolDescriptor]:
        """Return the descriptors of every tool this handler provides."""
        pass

    @property
    def tool_names(self) -> List[str]:
        """Return list of tool names this handler supports."""
        return [descriptor.name for descriptor in self.descriptors()]
