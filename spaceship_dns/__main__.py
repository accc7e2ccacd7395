"""
Main entry point for Spaceship-DNS.
"""

import asyncio
import logging
import sys
from pathlib import Path

from spaceship_dns.config.config import Config
from spaceship_dns.models.errors import ConfigError
from spaceship_dns.provider.spaceship import SpaceshipClient
from spaceship_dns.server.server import build_server


def setup_logging(level: str) -> None:
    """Configure root logging on stderr; stdout carries the MCP stream."""
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    logging.getLogger().setLevel(log_level)
    # Set httpx logger level to WARNING unless root is DEBUG
    httpx_log_level = logging.DEBUG if log_level == logging.DEBUG else logging.WARNING
    logging.getLogger("httpx").setLevel(httpx_log_level)
    logging.getLogger("httpcore").setLevel(httpx_log_level)


def load_config(argv) -> Config:
    config_path = Path(argv[1]) if len(argv) > 1 else None
    if config_path:
        return Config.from_yaml(config_path)
    return Config.from_env()


async def run(config: Config) -> None:
    """Build the client and server and serve until the transport closes."""
    logger = logging.getLogger("spaceship-dns")
    client = SpaceshipClient(
        config.api_key,
        config.api_secret,
        base_url=config.base_url,
        page_size=config.list_page_size,
        timeout=config.timeout,
    )
    server = build_server(client)
    logger.info(f"Starting Spaceship-DNS MCP server ({config.transport})")

    if config.transport == "stdio":
        await server.run_stdio_async()
    elif config.transport == "sse":
        await server.run_sse_async()
    elif config.transport == "streamable-http":
        await server.run_streamable_http_async()
    else:
        raise ConfigError(f"Unknown transport: {config.transport}")


def main() -> None:
    """Console script entry point."""
    try:
        config = load_config(sys.argv)
        setup_logging(config.log_level)
        config.validate_credentials()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(run(config))
    except ConfigError as e:
        logging.getLogger("spaceship-dns").error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nShutting down Spaceship-DNS", file=sys.stderr)
        sys.exit(0)


if __name__ == "__main__":
    main()
