"""Configuration management for MCP Database Server."""

import os
from typing import Optional
from pathlib import Path
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from core.exceptions import ConfigurationError

# Load .env: explicit path first, then working directory, then project root
_env_loaded = False

env_file = os.getenv('ENV_FILE_PATH')
if env_file and Path(env_file).exists():
    load_dotenv(env_file, override=False)
    _env_loaded = True
else:
    possible_paths = [
        Path.cwd() / '.env',
        Path(__file__).parent.parent.parent / '.env',
    ]
    for env_path in possible_paths:
        if env_path.exists():
            load_dotenv(str(env_path), override=False)
            _env_loaded = True
            break

if not _env_loaded:
    load_dotenv()


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, rejecting malformed values."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigurationError(
            f"Environment variable {name} must be an integer, got {raw!r}",
            details={"variable": name, "value": raw}
        )


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, "true" if default else "false").lower() == "true"


class PostgresConfig(BaseModel):
    """PostgreSQL connection pool configuration."""

    host: str = Field(default="localhost", description="PostgreSQL server hostname or IP")
    port: int = Field(default=5432, description="PostgreSQL server port")
    database: str = Field(default="testdb", description="Database name")
    user: str = Field(default="postgres", description="Database user")
    password: str = Field(default="", description="Database password")
    max_connections: int = Field(default=10, ge=1, description="Maximum pool size")
    idle_timeout_ms: int = Field(default=30000, ge=0, description="Idle connection lifetime in milliseconds")
    connect_timeout_ms: int = Field(default=2000, ge=0, description="Connect timeout in milliseconds")

    @classmethod
    def from_env(cls) -> "PostgresConfig":
        """Create configuration from environment variables."""
        return cls(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_env_int("POSTGRES_PORT", 5432),
            database=os.getenv("POSTGRES_DB", "testdb"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", ""),
            max_connections=_env_int("POSTGRES_MAX_CONNECTIONS", 10),
            idle_timeout_ms=_env_int("POSTGRES_IDLE_TIMEOUT", 30000),
            connect_timeout_ms=_env_int("POSTGRES_CONNECT_TIMEOUT", 2000)
        )


class RedisConfig(BaseModel):
    """Redis client configuration."""

    host: str = Field(default="localhost", description="Redis server hostname or IP")
    port: int = Field(default=6379, description="Redis server port")
    password: Optional[str] = Field(default=None, description="Redis password (optional)")
    db: int = Field(default=0, ge=0, description="Redis database index")
    connect_timeout_ms: int = Field(default=5000, ge=0, description="Connect timeout in milliseconds")

    @classmethod
    def from_env(cls) -> "RedisConfig":
        """Create configuration from environment variables."""
        return cls(
            host=os.getenv("REDIS_HOST", "localhost"),
            port=_env_int("REDIS_PORT", 6379),
            password=os.getenv("REDIS_PASSWORD") or None,
            db=_env_int("REDIS_DB", 0),
            connect_timeout_ms=_env_int("REDIS_CONNECT_TIMEOUT", 5000)
        )

    def get_url(self) -> str:
        """Build the redis:// connection URL."""
        from urllib.parse import quote

        if self.password:
            return f"redis://:{quote(self.password, safe='')}@{self.host}:{self.port}"
        return f"redis://{self.host}:{self.port}"


class QueryConfig(BaseModel):
    """Query validation configuration."""

    read_only: bool = False  # Only allow single SELECT/WITH statements in postgres_query
    max_query_length: int = 50000  # Maximum SQL query length in characters

    @classmethod
    def from_env(cls) -> "QueryConfig":
        """Create query configuration from environment variables."""
        return cls(
            read_only=_env_bool("POSTGRES_READ_ONLY", False),
            max_query_length=_env_int("MAX_QUERY_LENGTH", 50000)
        )


class AppConfig(BaseModel):
    """Application configuration combining all configs."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    redis: RedisConfig = Field(default_factory=RedisConfig)
    query_config: QueryConfig = Field(default_factory=QueryConfig)
    server_name: str = Field(default="mcp-db-server", description="MCP server name identifier")
    server_version: str = Field(default="0.1.0", description="MCP server version reported to clients")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Create full application configuration from environment variables."""
        return cls(
            postgres=PostgresConfig.from_env(),
            redis=RedisConfig.from_env(),
            query_config=QueryConfig.from_env(),
            server_name=os.getenv("MCP_SERVER_NAME", "mcp-db-server")
        )
