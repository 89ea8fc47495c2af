"""Entry point for MCP Database Server.

Exposes PostgreSQL and Redis operations as MCP tools over stdio. Each store
connects independently at startup; only the tools of stores that connected
are offered to clients.

Usage:
    python main.py
    python main.py --log-level DEBUG
"""

import asyncio
import logging
import os
import sys


def configure_logging(level: str):
    """Log to stderr; stdout carries the MCP protocol."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        stream=sys.stderr
    )


logger = logging.getLogger(__name__)


async def run_stdio_mode():
    """Run MCP server in STDIO mode.

    Typically used when the server is spawned as a subprocess by an MCP client.
    """
    logger.info("Starting MCP Database Server in STDIO mode")

    from core.config import AppConfig
    from pydantic import ValidationError
    from core.exceptions import ConfigurationError
    from protocol.stdio_server import run_stdio_server

    try:
        app_config = AppConfig.from_env()
    except (ConfigurationError, ValidationError) as e:
        logger.error(f"Failed to load configuration: {e}")
        sys.exit(1)

    logger.info("Configuration loaded from environment variables")
    try:
        await run_stdio_server(app_config)
    except Exception as e:
        logger.error(f"STDIO server error: {e}", exc_info=True)
        sys.exit(1)


def main():
    """Main entry point with argument parsing."""
    import argparse

    parser = argparse.ArgumentParser(
        description="MCP Database Server - PostgreSQL and Redis tools over stdio"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level (default: from LOG_LEVEL env or INFO)"
    )

    args = parser.parse_args()
    configure_logging(args.log_level or os.getenv("LOG_LEVEL", "INFO"))

    try:
        asyncio.run(run_stdio_mode())
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")


if __name__ == "__main__":
    main()
