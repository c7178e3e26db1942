"""
Error types and path security for Obsidian Notes MCP Server.

Contains the exception hierarchy raised by tool handlers and the VaultGuard
that keeps every note path inside the configured vault.
"""

import os
from pathlib import Path

NOTE_SUFFIX = ".md"


# ============== Exceptions ==============

class VaultError(Exception):
    """Base class for errors reported back to the caller as tool errors."""
    pass


class ArgumentValidationError(VaultError):
    """Raised when tool arguments do not match the declared schema."""
    pass


class AccessDeniedError(VaultError):
    """Raised when a path resolves outside the vault root."""
    pass


class NoteNotFoundError(VaultError):
    """Raised when a note targeted by an operation does not exist."""
    pass


class VaultIOError(VaultError):
    """Raised for any other file-system failure."""
    pass


class UnknownToolError(VaultError):
    """Raised when no handler exists for a tool name."""
    pass


class VaultConfigError(Exception):
    """Raised at startup when the vault directory is missing or invalid."""
    pass


# ============== Security Validation ==============

class VaultGuard:
    """Resolves note paths against the vault root, rejecting sandbox escapes."""

    def __init__(self, root: Path | str):
        self.root = os.path.normpath(str(root))
        self._prefix = self.root if self.root.endswith(os.sep) else self.root + os.sep

    def resolve(self, requested: str) -> str:
        """Resolve a requested note path to an absolute path inside the vault.

        Relative paths are joined to the vault root; absolute paths are only
        normalized. The result always carries a single ``.md`` suffix; other
        extensions are kept as part of the file name (``a.txt`` -> ``a.txt.md``).

        Args:
            requested: Note path as supplied by the caller

        Returns:
            The absolute note path

        Raises:
            AccessDeniedError: If the normalized path is not strictly inside the vault
        """
        if os.path.isabs(requested):
            full_path = os.path.normpath(requested)
        else:
            full_path = os.path.normpath(os.path.join(self.root, requested))

        # The root itself would become "<root>.md", a sibling of the vault
        if not full_path.startswith(self._prefix):
            raise AccessDeniedError(f"Access denied - path outside vault: {full_path}")

        if os.path.splitext(full_path)[1] == NOTE_SUFFIX:
            return full_path
        return full_path + NOTE_SUFFIX

    def relative(self, path: str) -> str:
        """Return ``path`` relative to the vault root."""
        return os.path.relpath(path, self.root)
