"""
Pydantic models for Obsidian Notes MCP Server.

Contains the argument models for each tool. They define the JSON schema
advertised by list_tools and validate the arguments received by call_tool.
"""

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .utils import ArgumentValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class ToolArguments(BaseModel):
    """Base model for tool arguments: no type coercion, unknown keys dropped."""

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


class WriteNoteInput(ToolArguments):
    """Arguments for write_note."""

    path: str = Field(
        description="The path to the note within the Obsidian vault (with or without .md extension)"
    )
    content: str = Field(description="The content to write to the note")
    append: bool = Field(
        default=False,
        description="If true, append to the note instead of overwriting",
    )


class DeleteNoteInput(ToolArguments):
    """Arguments for delete_note."""

    path: str = Field(
        description="The path to the note within the Obsidian vault (with or without .md extension)"
    )


class ReadNotesInput(ToolArguments):
    """Arguments for read_notes."""

    paths: list[str] = Field(
        description="List of note paths to read (with or without .md extension)"
    )


class SearchNotesInput(ToolArguments):
    """Arguments for search_notes."""

    query: str = Field(
        description="Query to search for in note names (case-insensitive). "
                    "Wrap in slashes (/pattern/flags) to search with a regular expression."
    )


def format_validation_error(error: ValidationError) -> str:
    """Render pydantic errors as ``field: reason`` pairs."""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def validate_arguments(model: type[ModelT], arguments: dict[str, Any] | None) -> ModelT:
    """Validate raw tool arguments against an argument model.

    Args:
        model: The argument model for the tool
        arguments: Untyped arguments from the request (None means no arguments)

    Returns:
        A validated model instance with defaults applied

    Raises:
        ArgumentValidationError: Listing every field that failed validation
    """
    try:
        return model.model_validate(arguments if arguments is not None else {})
    except ValidationError as e:
        raise ArgumentValidationError(format_validation_error(e)) from e
