"""
Main entry point for Obsidian Notes MCP Server.

This module provides the main() function and server initialization.
"""

import argparse
import asyncio
import sys

import structlog
from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from .config import Settings, resolve_vault_root
from .logging import configure_logging
from .notes import NoteStore
from .search import SearchEngine
from .server import create_server
from .tools import ToolDispatcher
from .utils import VaultConfigError, VaultGuard

logger = structlog.get_logger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="obsidian-mcp",
        description="MCP server for reading, writing and searching notes in an Obsidian vault.",
    )
    parser.add_argument(
        "vault_dir",
        nargs="?",
        help="Vault directory (used when OBSIDIAN_VAULT_DIR is not set)",
    )
    return parser.parse_args(argv)


def build_dispatcher(settings: Settings) -> ToolDispatcher:
    """Resolve the vault and assemble the tool dispatcher.

    Raises:
        VaultConfigError: If the vault directory is missing or invalid
    """
    root = resolve_vault_root(settings.vault_dir)
    guard = VaultGuard(root)
    return ToolDispatcher(
        store=NoteStore(guard, read_concurrency=settings.read_concurrency),
        engine=SearchEngine(guard),
    )


def main(argv: list[str] | None = None):
    """Main entry point."""
    args = parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as e:
        configure_logging()
        logger.error("startup_failed", error=str(e))
        sys.exit(1)
    if settings.vault_dir is None and args.vault_dir:
        settings = settings.model_copy(update={"vault_dir": args.vault_dir})

    configure_logging(settings.log_level)

    try:
        dispatcher = build_dispatcher(settings)
    except VaultConfigError as e:
        logger.error("startup_failed", error=str(e))
        sys.exit(1)

    server = create_server(dispatcher)
    logger.info("server_starting", vault=dispatcher.store.guard.root, transport="stdio")

    async def run():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("server_stopped")


if __name__ == "__main__":
    main()
