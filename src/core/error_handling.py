"""Response shaping for MCP tool calls.

Successful payloads become a single text content block holding pretty-printed
JSON. Failures are never embedded in a success envelope: they are raised and
the MCP server reports them through the call's error result.
"""

import json
import logging
from typing import Any, Dict, List, Tuple

from mcp.types import TextContent
from pydantic import ValidationError

logger = logging.getLogger(__name__)


def serialize_payload(payload: Any) -> str:
    """Serialize a result payload as 2-space indented JSON.

    Field order follows dict insertion order. Values JSON cannot encode
    natively (datetime, Decimal, UUID, ...) are rendered with ``str``.
    """
    return json.dumps(payload, indent=2, ensure_ascii=False, default=str)


def format_tool_result(payload: Any) -> List[TextContent]:
    """Wrap a result payload into the MCP response envelope (one text block)."""
    return [TextContent(type="text", text=serialize_payload(payload))]


def describe_validation_error(tool_name: str, error: ValidationError) -> Tuple[str, Dict[str, Any]]:
    """Turn a pydantic ValidationError into a message and details naming the fields.

    Returns:
        Tuple of (message, details) where details["fields"] lists offending fields
    """
    fields = []
    problems = []
    for item in error.errors():
        field = ".".join(str(part) for part in item.get("loc", ())) or "arguments"
        if field not in fields:
            fields.append(field)
        problems.append(f"{field}: {item.get('msg', 'invalid value')}")

    message = f"Invalid arguments for tool '{tool_name}': " + "; ".join(problems)
    return message, {"tool": tool_name, "fields": fields}
