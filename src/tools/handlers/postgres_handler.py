"""PostgreSQL tool handlers."""

import logging
from typing import Any, Dict, List, Optional

from core.config import QueryConfig
from database.postgres_store import PostgresStore
from tools.base import ToolDescriptor, ToolHandler
from tools.definitions import (
    TOOL_POSTGRES_QUERY,
    TOOL_POSTGRES_DESCRIBE_TABLE,
    TOOL_POSTGRES_LIST_TABLES,
    TOOL_POSTGRES_COUNT,
    PostgresQueryArguments,
    PostgresDescribeTableArguments,
    PostgresListTablesArguments,
    PostgresCountArguments,
)

logger = logging.getLogger(__name__)


class PostgresToolHandler(ToolHandler):
    """Tools bound to a connected PostgresStore."""

    def __init__(self, store: PostgresStore, query_config: Optional[QueryConfig] = None):
        self.store = store
        self.query_config = query_config or QueryConfig()

    def descriptors(self) -> List[ToolDescriptor]:
        return [
            ToolDescriptor(
                name=TOOL_POSTGRES_QUERY,
                title="Execute SQL Query",
                description=(
                    "Execute a SQL query on the PostgreSQL database and return the rows. "
                    "Use $1, $2, ... placeholders with 'params' for values. "
                    "Params keep their JSON types; pass dates, timestamps, UUIDs and numerics "
                    "as strings cast through text, e.g. $1::text::date or $1::text::uuid."
                    + (" READ-ONLY: only SELECT/WITH statements are accepted." if self.query_config.read_only else "")
                ),
                arguments=PostgresQueryArguments,
                handler=self.query,
                validation_context={"query_config": self.query_config}
            ),
            ToolDescriptor(
                name=TOOL_POSTGRES_DESCRIBE_TABLE,
                title="Describe Table Schema",
                description="Get the column definitions of a PostgreSQL table",
                arguments=PostgresDescribeTableArguments,
                handler=self.describe_table
            ),
            ToolDescriptor(
                name=TOOL_POSTGRES_LIST_TABLES,
                title="List Tables",
                description="List all tables and views in a PostgreSQL schema",
                arguments=PostgresListTablesArguments,
                handler=self.list_tables
            ),
            ToolDescriptor(
                name=TOOL_POSTGRES_COUNT,
                title="Count Table Rows",
                description="Get the number of rows in a PostgreSQL table",
                arguments=PostgresCountArguments,
                handler=self.count
            ),
        ]

    async def query(self, args: PostgresQueryArguments) -> Dict[str, Any]:
        result = await self.store.query(args.query, args.params)
        logger.debug(f"Query returned {len(result.rows)} rows (status: {result.status})")
        return {
            "rowCount": len(result.rows),
            "rows": result.rows
        }

    async def describe_table(self, args: PostgresDescribeTableArguments) -> Dict[str, Any]:
        columns = await self.store.describe_table(args.table_name, args.schema_name)
        return {
            "schema": args.schema_name,
            "table": args.table_name,
            "columns": columns
        }

    async def list_tables(self, args: PostgresListTablesArguments) -> Dict[str, Any]:
        tables = await self.store.list_tables_with_type(args.schema_name)
        return {
            "schema": args.schema_name,
            "tables": tables
        }

    async def count(self, args: PostgresCountArguments) -> Dict[str, Any]:
        count = await self.store.count_rows(args.table_name, args.schema_name)
        return {
            "schema": args.schema_name,
            "table": args.table_name,
            "count": count
        }
