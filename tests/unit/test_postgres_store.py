"""
PostgreSQL store unit tests

Covers the pool lifecycle, query execution and introspection helpers with a
patched asyncpg.create_pool.
"""

from unittest.mock import AsyncMock, patch

import pytest

from core.exceptions import DatabaseConnectionError, NotConnectedError, QueryExecutionError
from database.postgres_store import PostgresStore, QueryResult, quote_identifier

CREATE_POOL = "database.postgres_store.asyncpg.create_pool"


class TestPostgresStoreLifecycle:
    """Connection lifecycle tests"""

    def test_not_connected_before_connect(self, postgres_config):
        """✅ A new store starts disconnected"""
        store = PostgresStore(postgres_config)
        assert store.is_connected() is False

    @pytest.mark.asyncio
    async def test_connect_creates_pool_and_verifies(self, postgres_config, fake_pool):
        """✅ connect() builds the pool from config and acquires one connection"""
        pool = fake_pool()
        with patch(CREATE_POOL, new=AsyncMock(return_value=pool)) as create_pool:
            store = PostgresStore(postgres_config)
            await store.connect()

        assert store.is_connected() is True
        create_pool.assert_awaited_once_with(
            host="db.local",
            port=5433,
            database="testdb",
            user="tester",
            password="secret",
            min_size=0,
            max_size=10,
            max_inactive_connection_lifetime=30.0,
            timeout=2.0
        )
        pool.acquire.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_is_idempotent(self, postgres_config, fake_pool):
        """✅ A second connect() does not build another pool"""
        with patch(CREATE_POOL, new=AsyncMock(return_value=fake_pool())) as create_pool:
            store = PostgresStore(postgres_config)
            await store.connect()
            await store.connect()

        assert create_pool.await_count == 1
        assert store.is_connected() is True

    @pytest.mark.asyncio
    async def test_connect_failure_leaves_store_disconnected(self, postgres_config):
        """❌ Pool creation failure raises DatabaseConnectionError"""
        cause = OSError("Connection refused")
        with patch(CREATE_POOL, new=AsyncMock(side_effect=cause)):
            store = PostgresStore(postgres_config)
            with pytest.raises(DatabaseConnectionError) as exc_info:
                await store.connect()

        assert exc_info.value.__cause__ is cause
        assert "Connection refused" in str(exc_info.value)
        assert store.is_connected() is False

    @pytest.mark.asyncio
    async def test_verification_failure_terminates_pool(self, postgres_config, fake_pool):
        """❌ A failed verification acquire discards the half-built pool"""
        pool = fake_pool()
        pool.acquire.return_value.__aenter__.side_effect = OSError("password authentication failed")

        with patch(CREATE_POOL, new=AsyncMock(return_value=pool)):
            store = PostgresStore(postgres_config)
            with pytest.raises(DatabaseConnectionError):
                await store.connect()

        pool.terminate.assert_called_once()
        assert store.is_connected() is False

    @pytest.mark.asyncio
    async def test_disconnect_closes_pool(self, postgres_config, fake_pool):
        """✅ disconnect() closes the pool and is idempotent"""
        pool = fake_pool()
        with patch(CREATE_POOL, new=AsyncMock(return_value=pool)):
            store = PostgresStore(postgres_config)
            await store.connect()

        await store.disconnect()
        await store.disconnect()

        pool.close.assert_awaited_once()
        assert store.is_connected() is False

    @pytest.mark.asyncio
    async def test_disconnect_without_connect_is_noop(self, postgres_config):
        """✅ disconnect() on a never-connected store does nothing"""
        store = PostgresStore(postgres_config)
        await store.disconnect()
        assert store.is_connected() is False


class TestPostgresStoreQueries:
    """Query and introspection tests"""

    async def _connected_store(self, postgres_config, pool):
        with patch(CREATE_POOL, new=AsyncMock(return_value=pool)):
            store = PostgresStore(postgres_config)
            await store.connect()
        return store

    @pytest.mark.asyncio
    async def test_query_requires_connection(self, postgres_config):
        """❌ query() on a disconnected store raises NotConnectedError"""
        store = PostgresStore(postgres_config)
        with pytest.raises(NotConnectedError):
            await store.query("SELECT 1")

    @pytest.mark.asyncio
    async def test_query_returns_rows(self, postgres_config, fake_pool, fake_connection):
        """✅ query() returns rows as dicts with the row count"""
        conn = fake_connection(
            records=[{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}],
            status="SELECT 2"
        )
        store = await self._connected_store(postgres_config, fake_pool(conn))

        result = await store.query("SELECT id, name FROM users WHERE id > $1", [0])

        assert isinstance(result, QueryResult)
        assert result.rows == [{"id": 1, "name": "alice"}, {"id": 2, "name": "bob"}]
        assert result.row_count == 2
        assert result.status == "SELECT 2"
        conn.prepare.assert_awaited_once_with("SELECT id, name FROM users WHERE id > $1")
        conn.prepare.return_value.fetch.assert_awaited_once_with(0)

    @pytest.mark.asyncio
    async def test_query_reports_affected_rows(self, postgres_config, fake_pool, fake_connection):
        """✅ Row count comes from the command tag for data-modifying statements"""
        conn = fake_connection(records=[], status="INSERT 0 3")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        result = await store.query("INSERT INTO users (name) VALUES ('a'), ('b'), ('c')")

        assert result.rows == []
        assert result.row_count == 3

    @pytest.mark.asyncio
    async def test_query_error_preserves_backend_message(self, postgres_config, fake_pool, fake_connection):
        """❌ Backend failures raise QueryExecutionError with the message verbatim, no retry"""
        conn = fake_connection(error=RuntimeError('relation "missing" does not exist'))
        store = await self._connected_store(postgres_config, fake_pool(conn))

        with pytest.raises(QueryExecutionError) as exc_info:
            await store.query("SELECT * FROM missing")

        assert str(exc_info.value) == 'relation "missing" does not exist'
        assert conn.prepare.await_count == 1

    @pytest.mark.asyncio
    async def test_list_tables(self, postgres_config, fake_pool, fake_connection):
        """✅ list_tables() returns names for the requested schema"""
        conn = fake_connection(records=[{"tablename": "orders"}, {"tablename": "users"}], status="SELECT 2")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        tables = await store.list_tables()

        assert tables == ["orders", "users"]
        conn.prepare.return_value.fetch.assert_awaited_once_with("public")
        assert "ORDER BY tablename" in conn.prepare.await_args.args[0]

    @pytest.mark.asyncio
    async def test_list_tables_with_type(self, postgres_config, fake_pool, fake_connection):
        """✅ list_tables_with_type() returns name and type rows from information_schema"""
        rows = [{"table_name": "orders", "table_type": "BASE TABLE"},
                {"table_name": "recent_orders", "table_type": "VIEW"}]
        conn = fake_connection(records=rows, status="SELECT 2")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        assert await store.list_tables_with_type("sales") == rows
        conn.prepare.return_value.fetch.assert_awaited_once_with("sales")
        assert "information_schema.tables" in conn.prepare.await_args.args[0]

    @pytest.mark.asyncio
    async def test_describe_table(self, postgres_config, fake_pool, fake_connection):
        """✅ describe_table() passes schema and table as parameters"""
        columns = [
            {"column_name": "id", "data_type": "integer", "is_nullable": "NO",
             "column_default": None, "character_maximum_length": None},
        ]
        conn = fake_connection(records=columns, status="SELECT 1")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        result = await store.describe_table("users", "sales")

        assert result == columns
        conn.prepare.return_value.fetch.assert_awaited_once_with("sales", "users")
        assert "ORDER BY ordinal_position" in conn.prepare.await_args.args[0]

    @pytest.mark.asyncio
    async def test_list_databases(self, postgres_config, fake_pool, fake_connection):
        """✅ list_databases() excludes templates"""
        conn = fake_connection(records=[{"datname": "postgres"}, {"datname": "testdb"}], status="SELECT 2")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        assert await store.list_databases() == ["postgres", "testdb"]
        assert "datistemplate = false" in conn.prepare.await_args.args[0]

    @pytest.mark.asyncio
    async def test_count_rows_quotes_identifiers(self, postgres_config, fake_pool, fake_connection):
        """✅ count_rows() quotes schema and table names"""
        conn = fake_connection(records=[{"count": 0}], status="SELECT 1")
        store = await self._connected_store(postgres_config, fake_pool(conn))

        assert await store.count_rows("Order Items", "public") == 0
        conn.prepare.assert_awaited_once_with('SELECT COUNT(*) AS count FROM "public"."Order Items"')


class TestQuoteIdentifier:
    """Identifier quoting tests"""

    def test_plain_name(self):
        assert quote_identifier("users") == '"users"'

    def test_embedded_quote_is_doubled(self):
        assert quote_identifier('bad"; DROP TABLE users; --') == '"bad""; DROP TABLE users; --"'
