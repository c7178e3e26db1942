"""
Pytest configuration and fixtures for obsidian-notes tests.
"""

import os
import pytest
from pathlib import Path


@pytest.fixture
def temp_vault(tmp_path: Path):
    """Create a temporary vault with test notes."""
    vault_path = Path(os.path.realpath(tmp_path / "vault"))
    vault_path.mkdir()

    # Create folder structure
    (vault_path / "notes").mkdir()
    (vault_path / "Archive").mkdir()
    (vault_path / "Journal").mkdir()
    (vault_path / ".obsidian").mkdir()

    (vault_path / "Project.md").write_text("# Project\n\nTop level project note.\n", encoding="utf-8")
    (vault_path / "my-proj-notes.md").write_text("Scratch notes for the project.\n", encoding="utf-8")
    (vault_path / "notes" / "a.md").write_text("Alpha note", encoding="utf-8")
    (vault_path / "Archive" / "Old Project.md").write_text("Archived.\n", encoding="utf-8")
    (vault_path / "Journal" / "Daily-01.md").write_text("Day one.\n", encoding="utf-8")
    (vault_path / "Journal" / "Daily-02.md").write_text("Day two.\n", encoding="utf-8")
    (vault_path / "Journal" / "Daily-notes.md").write_text("Index of dailies.\n", encoding="utf-8")
    (vault_path / "Journal" / "My-Daily-03.md").write_text("Misnamed daily.\n", encoding="utf-8")

    # Hidden folder (never searched)
    (vault_path / ".obsidian" / "project-config.md").write_text("hidden", encoding="utf-8")

    # Not a note
    (vault_path / "project-readme.txt").write_text("plain text", encoding="utf-8")

    yield vault_path


@pytest.fixture
def guard(temp_vault):
    """Create a VaultGuard for the temp vault."""
    from obsidian_mcp.utils import VaultGuard
    return VaultGuard(temp_vault)


@pytest.fixture
def note_store(guard):
    """Create a NoteStore for the temp vault."""
    from obsidian_mcp.notes import NoteStore
    return NoteStore(guard, read_concurrency=4)


@pytest.fixture
def search_engine(guard):
    """Create a SearchEngine for the temp vault."""
    from obsidian_mcp.search import SearchEngine
    return SearchEngine(guard)


@pytest.fixture
def dispatcher(note_store, search_engine):
    """Create a ToolDispatcher wired to the temp vault."""
    from obsidian_mcp.tools import ToolDispatcher
    return ToolDispatcher(store=note_store, engine=search_engine)
