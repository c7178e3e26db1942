"""
MCP server wiring for Obsidian Notes MCP Server.

Registers the dispatcher's list_tools and call_tool handlers on a low-level
MCP Server instance.
"""

from typing import Any

from mcp.server import Server
from mcp.types import CallToolResult, Tool

from .tools import ToolDispatcher

SERVER_NAME = "obsidian-notes"


def create_server(dispatcher: ToolDispatcher) -> Server:
    """Create an MCP server backed by ``dispatcher``."""
    server = Server(SERVER_NAME)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        """List available tools."""
        return dispatcher.list_tools()

    # Arguments are validated by the dispatcher so errors carry field diagnostics
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Handle tool calls."""
        return await dispatcher.call_tool(name, arguments)

    return server
