"""Redis store handle backed by a single-connection redis.asyncio client."""

import logging
from typing import Dict, List, Optional

from redis.asyncio import Redis

from core.config import RedisConfig
from core.exceptions import DatabaseConnectionError, NotConnectedError

logger = logging.getLogger(__name__)


def _raw_info(response, **options):
    # Keep INFO as the server's text, section headers included
    return response


class RedisStore:
    """Owns one Redis client and exposes the key-value operation set.

    Unlike the PostgreSQL pool, the client object can outlive its socket,
    so is_connected() also checks that the connection is still open.
    """

    def __init__(self, config: RedisConfig):
        self.config = config
        self._client: Optional[Redis] = None

    async def connect(self) -> None:
        """Create the client and complete a PING handshake."""
        if self._client is not None:
            logger.info("Redis client already connected")
            return

        client = Redis.from_url(
            self.config.get_url(),
            db=self.config.db,
            socket_connect_timeout=self.config.connect_timeout_ms / 1000,
            decode_responses=True,
            single_connection_client=True
        )
        client.set_response_callback("INFO", _raw_info)
        try:
            await client.ping()
        except Exception as e:
            logger.error(f"Redis connection failed: {e}")
            await self._close_quietly(client)
            raise DatabaseConnectionError(
                f"Failed to connect to Redis at {self.config.host}:{self.config.port}: {e}",
                details={"host": self.config.host, "port": self.config.port, "db": self.config.db}
            ) from e

        self._client = client
        logger.info(f"✅ Connected to Redis at {self.config.host}:{self.config.port} (db {self.config.db})")

    @staticmethod
    async def _close_quietly(client: Redis) -> None:
        # The handshake already failed; a second error while closing is only logged
        try:
            await client.aclose()
        except Exception as e:
            logger.warning(f"Error closing Redis client after failed connect: {e}")

    def _require_client(self) -> Redis:
        if self._client is None:
            raise NotConnectedError("Redis not connected. Call connect() first.")
        return self._client

    async def get(self, key: str) -> Optional[str]:
        """Value stored at key, or None when the key does not exist."""
        return await self._require_client().get(key)

    async def set(self, key: str, value: str, expiration_seconds: Optional[int] = None) -> bool:
        """Set key unconditionally, with the expiry applied in the same SET when given."""
        client = self._require_client()
        if expiration_seconds is not None and expiration_seconds > 0:
            return bool(await client.set(key, value, ex=expiration_seconds))
        return bool(await client.set(key, value))

    async def delete(self, *keys: str) -> int:
        """Delete keys and return how many actually existed."""
        return await self._require_client().delete(*keys)

    async def exists(self, *keys: str) -> int:
        """Number of the given keys that exist; repeated keys count each time."""
        return await self._require_client().exists(*keys)

    async def keys(self, pattern: str = "*") -> List[str]:
        """All keys matching a glob pattern.

        KEYS walks the whole keyspace in one call; avoid it on large databases.
        """
        return await self._require_client().keys(pattern)

    async def ttl(self, key: str) -> int:
        """Remaining seconds to live; -1 without expiry, -2 when the key is missing."""
        return await self._require_client().ttl(key)

    async def expire(self, key: str, seconds: int) -> bool:
        """Set or overwrite the expiry of an existing key."""
        return bool(await self._require_client().expire(key, seconds))

    async def get_all(self, pattern: str = "*") -> Dict[str, str]:
        """Best-effort snapshot of every key matching pattern and its value.

        Not atomic: keys deleted between KEYS and GET are left out.
        """
        self._require_client()
        result: Dict[str, str] = {}
        for key in await self.keys(pattern):
            value = await self.get(key)
            if value is not None:
                result[key] = value
        return result

    async def get_info(self, section: Optional[str] = None) -> str:
        """Server INFO text, optionally restricted to one section."""
        client = self._require_client()
        if section:
            return await client.info(section)
        return await client.info()

    async def disconnect(self) -> None:
        """Close the client. No-op when already disconnected."""
        if self._client is None:
            return

        client, self._client = self._client, None
        await client.aclose()
        logger.info("Redis connection closed")

    def is_connected(self) -> bool:
        if self._client is None:
            return False
        connection = self._client.connection
        return connection is not None and connection.is_connected
