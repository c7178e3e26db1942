"""
Configuration module for Obsidian Notes MCP Server.

Uses pydantic-settings for configuration management with environment variable support.
Environment variables use OBSIDIAN_ prefix (e.g., OBSIDIAN_VAULT_DIR).
"""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .utils import VaultConfigError


class Settings(BaseSettings):
    """Application settings with environment variable support.

    Environment variables:
    - OBSIDIAN_VAULT_DIR: Path to the Obsidian vault (falls back to the first CLI argument)
    - OBSIDIAN_READ_CONCURRENCY: Maximum number of notes read at once by read_notes
    - OBSIDIAN_LOG_LEVEL: Log level for stderr diagnostics
    """

    vault_dir: Path | None = None
    read_concurrency: int = Field(default=32, ge=1)
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="OBSIDIAN_", env_ignore_empty=True)


def resolve_vault_root(raw: Path | str | None) -> Path:
    """Canonicalize the configured vault directory.

    Args:
        raw: Vault directory as given by the environment or the command line

    Returns:
        The absolute, symlink-free vault root

    Raises:
        VaultConfigError: If no directory was given, it does not exist, or it is not a directory
    """
    if raw is None or not str(raw).strip():
        raise VaultConfigError(
            "No Obsidian vault directory specified. Set OBSIDIAN_VAULT_DIR environment "
            "variable or provide as command line argument."
        )

    root = Path(os.path.realpath(Path(raw).expanduser()))

    if not root.exists():
        raise VaultConfigError(f"Error accessing Obsidian vault directory {root}: no such directory")
    if not root.is_dir():
        raise VaultConfigError(f"{root} is not a directory")

    return root
