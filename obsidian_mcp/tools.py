"""
MCP Tools module for Obsidian Notes MCP Server.

Contains the tool registry and the dispatcher behind list_tools and call_tool.
"""

from enum import Enum
from types import MappingProxyType
from typing import Any, assert_never

import structlog
from mcp.types import CallToolResult, TextContent, Tool
from pydantic import BaseModel, ConfigDict

from .models import (
    DeleteNoteInput,
    ReadNotesInput,
    SearchNotesInput,
    WriteNoteInput,
    validate_arguments,
)
from .notes import NoteStore
from .search import SearchEngine
from .utils import ArgumentValidationError, UnknownToolError, VaultError

logger = structlog.get_logger(__name__)


class ToolName(str, Enum):
    """Identifiers of every tool the server exposes."""

    WRITE_NOTE = "write_note"
    DELETE_NOTE = "delete_note"
    READ_NOTES = "read_notes"
    SEARCH_NOTES = "search_notes"


class ToolDefinition(BaseModel):
    """A tool as advertised to clients."""

    model_config = ConfigDict(frozen=True)

    name: ToolName
    description: str
    arguments_model: type[BaseModel]

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments_model.model_json_schema()

    def to_tool(self) -> Tool:
        return Tool(name=self.name.value, description=self.description, inputSchema=self.input_schema)


TOOL_DEFINITIONS = MappingProxyType({
    ToolName.WRITE_NOTE: ToolDefinition(
        name=ToolName.WRITE_NOTE,
        description="Create a new note or update an existing note in the Obsidian vault. "
                    "Can either completely replace the note content or append to it.",
        arguments_model=WriteNoteInput,
    ),
    ToolName.DELETE_NOTE: ToolDefinition(
        name=ToolName.DELETE_NOTE,
        description="Delete a note from the Obsidian vault.",
        arguments_model=DeleteNoteInput,
    ),
    ToolName.READ_NOTES: ToolDefinition(
        name=ToolName.READ_NOTES,
        description="Read the contents of multiple notes. Each note's content is returned with its path "
                    "as a reference. Failed reads for individual notes won't stop the entire operation.",
        arguments_model=ReadNotesInput,
    ),
    ToolName.SEARCH_NOTES: ToolDefinition(
        name=ToolName.SEARCH_NOTES,
        description="Searches for a note by its name. The search is case-insensitive and matches partial names. "
                    "Queries can also be a regex written as /pattern/flags. "
                    "Returns paths of the notes that match the query.",
        arguments_model=SearchNotesInput,
    ),
})


def text_result(*texts: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=t) for t in texts])


def error_result(message: str) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=f"Error: {message}")], isError=True)


class ToolDispatcher:
    """Validates tool calls and routes them to the note store or search engine."""

    def __init__(self, store: NoteStore, engine: SearchEngine):
        self.store = store
        self.engine = engine

    def list_tools(self) -> list[Tool]:
        """List available tools."""
        return [definition.to_tool() for definition in TOOL_DEFINITIONS.values()]

    async def call_tool(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        """Handle a tool call. Always returns a result; errors become ``isError`` results."""
        logger.debug("tool_called", tool=name)
        try:
            return await self._dispatch(name, arguments)
        except VaultError as e:
            logger.warning("tool_failed", tool=name, error=str(e))
            return error_result(str(e))
        except Exception as e:
            logger.exception("tool_crashed", tool=name)
            return error_result(str(e) or type(e).__name__)

    async def _dispatch(self, name: str, arguments: dict[str, Any] | None) -> CallToolResult:
        try:
            tool = ToolName(name)
        except ValueError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

        definition = TOOL_DEFINITIONS[tool]
        try:
            params = validate_arguments(definition.arguments_model, arguments)
        except ArgumentValidationError as e:
            raise ArgumentValidationError(f"Invalid arguments for {tool.value}: {e}") from e

        match tool:
            case ToolName.WRITE_NOTE:
                relative_path = await self.store.write(params.path, params.content, params.append)
                action = "appended to" if params.append else "wrote"
                return text_result(f"Successfully {action} note: {relative_path}")

            case ToolName.DELETE_NOTE:
                relative_path = await self.store.delete(params.path)
                return text_result(f"Successfully deleted note: {relative_path}")

            case ToolName.READ_NOTES:
                return text_result(*await self.store.read_many(params.paths))

            case ToolName.SEARCH_NOTES:
                results = await self.engine.search(params.query)
                if not results:
                    return text_result(f'No notes found matching "{params.query}"')
                return text_result(f"Found {len(results)} notes:\n" + "\n".join(results))

            case _:
                assert_never(tool)
