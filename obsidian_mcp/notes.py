"""
Note storage functions for Obsidian Notes MCP Server.

Contains the NoteStore, which writes, deletes and batch-reads notes. Every
path goes through the VaultGuard before the file system is touched.
"""

import asyncio
import os

import aiofiles
import aiofiles.os
import structlog

from .utils import NoteNotFoundError, VaultError, VaultGuard, VaultIOError

logger = structlog.get_logger(__name__)

APPEND_SEPARATOR = "\n\n"


class NoteStore:
    """Read/write access to notes inside a single vault."""

    def __init__(self, guard: VaultGuard, read_concurrency: int = 32):
        self.guard = guard
        self.read_concurrency = read_concurrency

    async def write(self, path: str, content: str, append: bool = False) -> str:
        """Create, overwrite or append to a note.

        When appending, existing content and the new content are joined with a
        blank line. Appending to a missing note creates it.

        Args:
            path: Note path relative to the vault (``.md`` optional)
            content: Markdown content to write
            append: Append instead of overwriting

        Returns:
            The vault-relative path that was written
        """
        note_path = self.guard.resolve(path)

        try:
            await aiofiles.os.makedirs(os.path.dirname(note_path), exist_ok=True)
        except OSError as e:
            raise VaultIOError(f"Failed to create folder for note {path}: {e}") from e

        if append:
            try:
                async with aiofiles.open(note_path, mode="r", encoding="utf-8") as f:
                    existing = await f.read()
                content = existing + APPEND_SEPARATOR + content
            except FileNotFoundError:
                pass
            except (OSError, UnicodeDecodeError) as e:
                raise VaultIOError(f"Failed to read note {path}: {e}") from e

        try:
            async with aiofiles.open(note_path, mode="w", encoding="utf-8") as f:
                await f.write(content)
        except OSError as e:
            logger.error("note_write_failed", path=note_path, error=str(e))
            raise VaultIOError(f"Failed to write note {path}: {e}") from e

        relative_path = self.guard.relative(note_path)
        logger.info("note_written", path=relative_path, append=append)
        return relative_path

    async def delete(self, path: str) -> str:
        """Delete a note.

        Raises:
            NoteNotFoundError: If the note does not exist
            VaultIOError: If the note could not be removed
        """
        note_path = self.guard.resolve(path)

        try:
            await aiofiles.os.remove(note_path)
        except FileNotFoundError as e:
            raise NoteNotFoundError(f"Failed to delete note: {e}") from e
        except OSError as e:
            raise VaultIOError(f"Failed to delete note: {e}") from e

        relative_path = self.guard.relative(note_path)
        logger.info("note_deleted", path=relative_path)
        return relative_path

    async def read_many(self, paths: list[str]) -> list[str]:
        """Read several notes concurrently.

        A failure on one path is reported inline for that path and does not
        affect the others. Output order matches input order.

        Returns:
            One text per requested path: ``# <path>`` followed by the content,
            or ``Error reading note <path>: <reason>``
        """
        semaphore = asyncio.Semaphore(self.read_concurrency)

        async def read_one(requested: str) -> str:
            async with semaphore:
                try:
                    return await self._read(requested)
                except VaultError as e:
                    return f"Error reading note {requested}: {e}"

        results = await asyncio.gather(*(read_one(p) for p in paths))
        logger.info(
            "notes_read",
            requested=len(paths),
            failed=sum(1 for r in results if r.startswith("Error reading note ")),
        )
        return list(results)

    async def _read(self, requested: str) -> str:
        note_path = self.guard.resolve(requested)

        try:
            async with aiofiles.open(note_path, mode="r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError as e:
            raise NoteNotFoundError(str(e)) from e
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise VaultIOError(str(e)) from e

        return f"# {self.guard.relative(note_path)}\n\n{content}\n"
