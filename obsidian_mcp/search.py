"""
Search functions for Obsidian Notes MCP Server.

Contains query classification (literal vs. /regex/flags) and the recursive
note-name search over the vault.
"""

import os
import re
from dataclasses import dataclass

import aiofiles.os
import structlog

from .utils import NOTE_SUFFIX, VaultGuard, VaultIOError

logger = structlog.get_logger(__name__)

# /pattern/flags with JavaScript-style flag letters
DELIMITED_REGEX_PATTERN = re.compile(r"/(.*)/([gimuy]*)", re.DOTALL)

REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
}


@dataclass(frozen=True)
class SearchQuery:
    """A classified search query.

    ``pattern`` is None for literal queries, which match case-insensitively as
    a substring. ``anchored`` requires the regex to match at the start of the name.
    """

    raw: str
    pattern: re.Pattern[str] | None = None
    anchored: bool = False

    @property
    def is_regex(self) -> bool:
        return self.pattern is not None

    def matches(self, name: str) -> bool:
        if self.pattern is None:
            return self.raw.lower() in name.lower()
        if self.anchored:
            return self.pattern.match(name) is not None
        return self.pattern.search(name) is not None


def parse_query(raw: str) -> SearchQuery:
    """Classify a raw query string.

    Queries shaped like ``/pattern/`` or ``/pattern/flags`` (flags drawn from
    g, i, m, u, y) are regular expressions. ``i`` and ``m`` map to the Python
    flags of the same meaning, ``y`` anchors the match at the start of the
    name, ``g`` and ``u`` have no effect. A repeated flag or a pattern that
    does not compile falls back to a literal query.

    Note that a literal query which merely looks like ``/folder/`` is read as
    a regex; there is no way to search for such a name literally.
    """
    match = DELIMITED_REGEX_PATTERN.fullmatch(raw)
    if not match:
        return SearchQuery(raw=raw)

    pattern, flag_letters = match.groups()
    if len(set(flag_letters)) != len(flag_letters):
        return SearchQuery(raw=raw)

    flags = 0
    for letter in flag_letters:
        flags |= REGEX_FLAGS.get(letter, 0)

    try:
        compiled = re.compile(pattern, flags)
    except re.error:
        logger.debug("regex_fallback_to_literal", query=raw)
        return SearchQuery(raw=raw)

    return SearchQuery(raw=raw, pattern=compiled, anchored="y" in flag_letters)


class SearchEngine:
    """Recursive note-name search over a vault."""

    def __init__(self, guard: VaultGuard):
        self.guard = guard

    async def search(self, query: str | SearchQuery) -> list[str]:
        """Find notes whose name matches the query.

        Walks the vault depth-first in directory listing order, skipping
        directories that start with ``.``. Only ``.md`` files are considered;
        a file matches if either its name without ``.md`` or its full name
        matches.

        Returns:
            Vault-relative paths in traversal order

        Raises:
            VaultIOError: If any directory cannot be listed
        """
        if isinstance(query, str):
            query = parse_query(query)

        results: list[str] = []
        await self._search_directory(self.guard.root, query, results)

        relative_paths = [self.guard.relative(p) for p in results]
        logger.debug(
            "search_completed",
            query=query.raw,
            regex=query.is_regex,
            results=len(relative_paths),
        )
        return relative_paths

    async def _search_directory(self, dir_path: str, query: SearchQuery, results: list[str]) -> None:
        try:
            with await aiofiles.os.scandir(dir_path) as it:
                entries = list(it)
        except OSError as e:
            raise VaultIOError(f"Failed to search directory {dir_path}: {e}") from e

        for entry in entries:
            full_path = os.path.join(dir_path, entry.name)

            if entry.is_dir(follow_symlinks=False):
                # Skip hidden directories (.obsidian, .trash, .git)
                if not entry.name.startswith("."):
                    await self._search_directory(full_path, query, results)
            elif entry.is_file(follow_symlinks=False) and entry.name.endswith(NOTE_SUFFIX):
                stem = entry.name[:-len(NOTE_SUFFIX)]
                if query.matches(stem) or query.matches(entry.name):
                    results.append(full_path)
