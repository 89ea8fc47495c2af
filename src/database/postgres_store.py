"""PostgreSQL store handle backed by an asyncpg connection pool."""

import logging
from typing import Any, Dict, List, Optional

import asyncpg
from pydantic import BaseModel, Field

from core.config import PostgresConfig
from core.exceptions import DatabaseConnectionError, NotConnectedError, QueryExecutionError

logger = logging.getLogger(__name__)


LIST_TABLES_SQL = """
    SELECT tablename
    FROM pg_tables
    WHERE schemaname = $1
    ORDER BY tablename
"""

LIST_TABLES_WITH_TYPE_SQL = """
    SELECT
        table_name,
        table_type
    FROM information_schema.tables
    WHERE table_schema = $1
    ORDER BY table_name
"""

DESCRIBE_TABLE_SQL = """
    SELECT
        column_name,
        data_type,
        is_nullable,
        column_default,
        character_maximum_length
    FROM information_schema.columns
    WHERE table_schema = $1 AND table_name = $2
    ORDER BY ordinal_position
"""

LIST_DATABASES_SQL = """
    SELECT datname
    FROM pg_database
    WHERE datistemplate = false
    ORDER BY datname
"""


class QueryResult(BaseModel):
    """Full result of one statement."""

    rows: List[Dict[str, Any]] = Field(default_factory=list)
    row_count: int = 0
    status: str = ""


def quote_identifier(name: str) -> str:
    """Quote a SQL identifier, doubling embedded double quotes."""
    return '"' + name.replace('"', '""') + '"'


def _parse_row_count(status: Optional[str], fallback: int) -> int:
    # Command tags look like "SELECT 3", "INSERT 0 3", "UPDATE 2"
    if status:
        last = status.rsplit(" ", 1)[-1]
        if last.isdigit():
            return int(last)
    return fallback


class PostgresStore:
    """Owns one asyncpg pool and exposes the relational operation set.

    The pool object is the only connectivity signal: a held pool means
    connected. Connection failures during a query surface from the pool
    itself, so no liveness check is done.
    """

    def __init__(self, config: PostgresConfig):
        self.config = config
        self._pool: Optional[asyncpg.Pool] = None

    async def connect(self) -> None:
        """Create the pool and verify reachability with one acquire/release."""
        if self._pool is not None:
            logger.info("PostgreSQL connection pool already exists")
            return

        pool = None
        try:
            pool = await asyncpg.create_pool(
                host=self.config.host,
                port=self.config.port,
                database=self.config.database,
                user=self.config.user,
                password=self.config.password or None,
                min_size=0,
                max_size=self.config.max_connections,
                max_inactive_connection_lifetime=self.config.idle_timeout_ms / 1000,
                timeout=self.config.connect_timeout_ms / 1000
            )
            async with pool.acquire():
                pass
        except Exception as e:
            logger.error(f"PostgreSQL connection failed: {e}")
            if pool is not None:
                pool.terminate()
            raise DatabaseConnectionError(
                f"Failed to connect to PostgreSQL at {self.config.host}:{self.config.port}: {e}",
                details={
                    "host": self.config.host,
                    "port": self.config.port,
                    "database": self.config.database
                }
            ) from e

        self._pool = pool
        logger.info(
            f"✅ Connected to PostgreSQL database {self.config.database} "
            f"at {self.config.host}:{self.config.port} (pool size: {self.config.max_connections})"
        )

    def _require_pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise NotConnectedError("PostgreSQL not connected. Call connect() first.")
        return self._pool

    async def query(self, sql: str, params: Optional[List[Any]] = None) -> QueryResult:
        """Execute a statement and return every row plus the affected row count.

        Args:
            sql: SQL statement using $1, $2, ... placeholders
            params: Optional positional parameters

        Raises:
            NotConnectedError: If connect() has not succeeded
            QueryExecutionError: If PostgreSQL rejects the statement
        """
        pool = self._require_pool()

        try:
            async with pool.acquire() as conn:
                statement = await conn.prepare(sql)
                records = await statement.fetch(*(params or []))
                status = statement.get_statusmsg()
        except Exception as e:
            logger.error(f"PostgreSQL query error: {e}")
            raise QueryExecutionError(str(e), details={"query": sql[:200]}) from e

        rows = [dict(record) for record in records]
        return QueryResult(
            rows=rows,
            row_count=_parse_row_count(status, len(rows)),
            status=status or ""
        )

    async def list_tables(self, schema: str = "public") -> List[str]:
        """List table names in a schema, lexically ordered."""
        result = await self.query(LIST_TABLES_SQL, [schema])
        return [row["tablename"] for row in result.rows]

    async def list_tables_with_type(self, schema: str = "public") -> List[Dict[str, Any]]:
        """Tables and views in a schema with their ``table_type``, lexically ordered."""
        result = await self.query(LIST_TABLES_WITH_TYPE_SQL, [schema])
        return result.rows

    async def describe_table(self, table_name: str, schema: str = "public") -> List[Dict[str, Any]]:
        """Column definitions of a table in declaration order."""
        result = await self.query(DESCRIBE_TABLE_SQL, [schema, table_name])
        return result.rows

    async def list_databases(self) -> List[str]:
        """List non-template databases, lexically ordered."""
        result = await self.query(LIST_DATABASES_SQL)
        return [row["datname"] for row in result.rows]

    async def count_rows(self, table_name: str, schema: str = "public") -> int:
        """Count rows in ``schema.table_name``."""
        sql = f"SELECT COUNT(*) AS count FROM {quote_identifier(schema)}.{quote_identifier(table_name)}"
        result = await self.query(sql)
        return int(result.rows[0]["count"])

    async def disconnect(self) -> None:
        """Close the pool. No-op when already disconnected."""
        if self._pool is None:
            return

        pool, self._pool = self._pool, None
        await pool.close()
        logger.info("PostgreSQL connection pool closed")

    def is_connected(self) -> bool:
        return self._pool is not None
