"""MCP tool names and argument schemas for MCP Database Server."""

from typing import Any, List, Optional

from pydantic import Field, ValidationInfo, field_validator

from core.config import QueryConfig
from tools.base import ToolArguments
from tools.validators import InputValidator, SQLValidator


# PostgreSQL tools
TOOL_POSTGRES_QUERY = "postgres_query"
TOOL_POSTGRES_DESCRIBE_TABLE = "postgres_describe_table"
TOOL_POSTGRES_LIST_TABLES = "postgres_list_tables"
TOOL_POSTGRES_COUNT = "postgres_count"

# Redis tools
TOOL_REDIS_GET = "redis_get"
TOOL_REDIS_SET = "redis_set"
TOOL_REDIS_DEL = "redis_del"
TOOL_REDIS_EXISTS = "redis_exists"
TOOL_REDIS_EXPIRE = "redis_expire"
TOOL_REDIS_KEYS = "redis_keys"
TOOL_REDIS_INFO = "redis_info"

DEFAULT_SCHEMA = "public"
DEFAULT_KEY_PATTERN = "*"


def _check_identifier(value: str, kind: str) -> str:
    is_valid, error_msg = InputValidator.validate_identifier(value, kind)
    if not is_valid:
        raise ValueError(error_msg)
    return value


def _whole_number(value: Any) -> Any:
    # JSON has one number type: 5.0 is accepted as 5, 5.5 still fails the int check
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


# ===========================================
# PostgreSQL argument schemas
# ===========================================

class PostgresQueryArguments(ToolArguments):
    query: str = Field(description="SQL query to execute")
    params: Optional[List[Any]] = Field(
        default=None,
        description="Optional query parameters for prepared statements ($1, $2, ...)"
    )

    @field_validator("query")
    @classmethod
    def check_query(cls, value: str, info: ValidationInfo) -> str:
        query_config = (info.context or {}).get("query_config") or QueryConfig()

        is_valid, error_msg = SQLValidator.validate_length(value, query_config.max_query_length)
        if not is_valid:
            raise ValueError(error_msg)

        if query_config.read_only:
            is_valid, error_msg = SQLValidator.validate_query(value)
            if not is_valid:
                raise ValueError(error_msg)
        return value


class TableArguments(ToolArguments):
    table_name: str = Field(alias="tableName", description="Name of the table")
    schema_name: str = Field(
        default=DEFAULT_SCHEMA,
        alias="schema",
        description="Schema name (default: public)"
    )

    @field_validator("table_name")
    @classmethod
    def check_table_name(cls, value: str) -> str:
        return _check_identifier(value, "Table name")

    @field_validator("schema_name")
    @classmethod
    def check_schema_name(cls, value: str) -> str:
        return _check_identifier(value, "Schema name")


class PostgresDescribeTableArguments(TableArguments):
    pass


class PostgresCountArguments(TableArguments):
    pass


class PostgresListTablesArguments(ToolArguments):
    schema_name: str = Field(
        default=DEFAULT_SCHEMA,
        alias="schema",
        description="Schema name (default: public)"
    )

    @field_validator("schema_name")
    @classmethod
    def check_schema_name(cls, value: str) -> str:
        return _check_identifier(value, "Schema name")


# ===========================================
# Redis argument schemas
# ===========================================

class RedisGetArguments(ToolArguments):
    key: str = Field(description="Redis key to retrieve")


class RedisSetArguments(ToolArguments):
    key: str = Field(description="Redis key to set")
    value: str = Field(description="Value to store")
    expiration_seconds: Optional[int] = Field(
        default=None,
        ge=0,
        alias="expirationSeconds",
        description="Optional expiration time in whole seconds (0 or omitted: never expires)"
    )

    @field_validator("expiration_seconds", mode="before")
    @classmethod
    def check_expiration_seconds(cls, value: Any) -> Any:
        return _whole_number(value)


class RedisKeyListArguments(ToolArguments):
    keys: List[str] = Field(min_length=1, description="Array of Redis keys")


class RedisDelArguments(RedisKeyListArguments):
    pass


class RedisExistsArguments(RedisKeyListArguments):
    pass


class RedisExpireArguments(ToolArguments):
    key: str = Field(description="Redis key to set expiration on")
    seconds: int = Field(description="Expiration time in whole seconds")

    @field_validator("seconds", mode="before")
    @classmethod
    def check_seconds(cls, value: Any) -> Any:
        return _whole_number(value)


class RedisKeysArguments(ToolArguments):
    pattern: str = Field(
        default=DEFAULT_KEY_PATTERN,
        description="Glob-style pattern to match keys (default: *). Scans the whole keyspace."
    )


class RedisInfoArguments(ToolArguments):
    section: Optional[str] = Field(
        default=None,
        description='Optional info section (e.g., "server", "memory", "stats")'
    )
