"""Redis tool handlers."""

import logging
from typing import Any, Dict, List

from database.redis_store import RedisStore
from tools.base import ToolDescriptor, ToolHandler
from tools.definitions import (
    TOOL_REDIS_GET,
    TOOL_REDIS_SET,
    TOOL_REDIS_DEL,
    TOOL_REDIS_EXISTS,
    TOOL_REDIS_EXPIRE,
    TOOL_REDIS_KEYS,
    TOOL_REDIS_INFO,
    RedisGetArguments,
    RedisSetArguments,
    RedisDelArguments,
    RedisExistsArguments,
    RedisExpireArguments,
    RedisKeysArguments,
    RedisInfoArguments,
)

logger = logging.getLogger(__name__)


class RedisToolHandler(ToolHandler):
    """Tools bound to a connected RedisStore."""

    def __init__(self, store: RedisStore):
        self.store = store

    def descriptors(self) -> List[ToolDescriptor]:
        return [
            ToolDescriptor(
                name=TOOL_REDIS_GET,
                title="Get Value",
                description="Get a value from Redis by key",
                arguments=RedisGetArguments,
                handler=self.get
            ),
            ToolDescriptor(
                name=TOOL_REDIS_SET,
                title="Set Value",
                description="Set a key-value pair in Redis with optional expiration",
                arguments=RedisSetArguments,
                handler=self.set
            ),
            ToolDescriptor(
                name=TOOL_REDIS_DEL,
                title="Delete Keys",
                description="Delete one or more keys from Redis",
                arguments=RedisDelArguments,
                handler=self.delete
            ),
            ToolDescriptor(
                name=TOOL_REDIS_EXISTS,
                title="Check Keys Exist",
                description="Count how many of the given keys exist in Redis",
                arguments=RedisExistsArguments,
                handler=self.exists
            ),
            ToolDescriptor(
                name=TOOL_REDIS_EXPIRE,
                title="Set Expiration",
                description="Set expiration time on a Redis key",
                arguments=RedisExpireArguments,
                handler=self.expire
            ),
            ToolDescriptor(
                name=TOOL_REDIS_KEYS,
                title="List Keys",
                description="Get all Redis keys matching a pattern. Not suitable for large keyspaces.",
                arguments=RedisKeysArguments,
                handler=self.keys
            ),
            ToolDescriptor(
                name=TOOL_REDIS_INFO,
                title="Server Info",
                description="Get Redis server information",
                arguments=RedisInfoArguments,
                handler=self.info
            ),
        ]

    async def get(self, args: RedisGetArguments) -> Dict[str, Any]:
        value = await self.store.get(args.key)
        return {"key": args.key, "value": value}

    async def set(self, args: RedisSetArguments) -> Dict[str, Any]:
        await self.store.set(args.key, args.value, args.expiration_seconds)
        return {
            "success": True,
            "key": args.key,
            "expiresIn": f"{args.expiration_seconds}s" if args.expiration_seconds else "never"
        }

    async def delete(self, args: RedisDelArguments) -> Dict[str, Any]:
        count = await self.store.delete(*args.keys)
        logger.debug(f"Deleted {count} of {len(args.keys)} keys")
        return {"deletedCount": count, "keys": args.keys}

    async def exists(self, args: RedisExistsArguments) -> Dict[str, Any]:
        count = await self.store.exists(*args.keys)
        return {"existingCount": count, "keys": args.keys}

    async def expire(self, args: RedisExpireArguments) -> Dict[str, Any]:
        success = await self.store.expire(args.key, args.seconds)
        return {
            "success": success,
            "key": args.key,
            "expiresIn": f"{args.seconds}s"
        }

    async def keys(self, args: RedisKeysArguments) -> Dict[str, Any]:
        keys = await self.store.keys(args.pattern)
        return {"pattern": args.pattern, "count": len(keys), "keys": keys}

    async def info(self, args: RedisInfoArguments) -> Dict[str, Any]:
        info = await self.store.get_info(args.section)
        return {"info": info}
