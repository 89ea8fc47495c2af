"""
pytest configuration

Test environment setup, shared fixtures and fake backend objects.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
from dotenv import load_dotenv

# Add src directory to the Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Load environment variables
load_dotenv()


def make_fake_pool(conn=None):
    """Fake asyncpg pool whose acquire() yields ``conn`` as an async context manager."""
    pool = MagicMock()
    pool.acquire.return_value.__aenter__.return_value = conn if conn is not None else MagicMock()
    pool.acquire.return_value.__aexit__.return_value = False
    pool.close = AsyncMock()
    pool.terminate = MagicMock()
    return pool


def make_fake_connection(records=None, status="SELECT 0", error=None):
    """Fake asyncpg connection whose prepared statement returns ``records``."""
    statement = MagicMock()
    if error is not None:
        statement.fetch = AsyncMock(side_effect=error)
    else:
        statement.fetch = AsyncMock(return_value=records or [])
    statement.get_statusmsg = MagicMock(return_value=status)

    conn = MagicMock()
    conn.prepare = AsyncMock(return_value=statement)
    return conn


def make_fake_redis_client():
    """Fake redis.asyncio client with an open single connection."""
    client = MagicMock()
    for method in ("ping", "get", "set", "delete", "exists", "keys", "ttl", "expire", "info", "aclose"):
        setattr(client, method, AsyncMock())
    client.ping.return_value = True
    client.connection = MagicMock()
    client.connection.is_connected = True
    return client


@pytest.fixture
def fake_pool():
    """Factory fixture for fake asyncpg pools."""
    return make_fake_pool


@pytest.fixture
def fake_connection():
    """Factory fixture for fake asyncpg connections."""
    return make_fake_connection


@pytest.fixture
def fake_redis_client():
    """Factory fixture for fake redis.asyncio clients."""
    return make_fake_redis_client


@pytest.fixture
def postgres_config():
    from core.config import PostgresConfig
    return PostgresConfig(host="db.local", port=5433, database="testdb", user="tester", password="secret")


@pytest.fixture
def redis_config():
    from core.config import RedisConfig
    return RedisConfig(host="cache.local", port=6380, password="p@ss", db=2)


@pytest.fixture
def mock_postgres_store():
    """Spy PostgresStore: async operations are AsyncMocks, is_connected() is True."""
    from database.postgres_store import PostgresStore, QueryResult

    store = MagicMock(spec=PostgresStore)
    store.is_connected.return_value = True
    store.query.return_value = QueryResult(rows=[], row_count=0, status="SELECT 0")
    return store


@pytest.fixture
def mock_redis_store():
    """Spy RedisStore: async operations are AsyncMocks, is_connected() is True."""
    from database.redis_store import RedisStore

    store = MagicMock(spec=RedisStore)
    store.is_connected.return_value = True
    return store
