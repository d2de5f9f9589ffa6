"""Corpus — the content collection behind every service.

The Corpus is the single dependency injected into every service. It owns
discovery and decoding of entry files under the content root and the few
write paths (new entries, normalized rewrites). Entries are loaded lazily
on first access and cached for the lifetime of the object; writes drop
the cache.

A file that fails to decode never aborts the load: it is recorded in
:attr:`Corpus.failures` and the rest of the collection stays usable.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

from postctl.domain.content import Entry, EntryError, FrontmatterError
from postctl.infrastructure.filesystem import (
    find_content_files,
    read_content_file,
    resolve_entry_path,
    write_content_file,
)

if TYPE_CHECKING:
    from postctl.config.settings import PostSettings
    from postctl.domain.content import FrontmatterFormat

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoadFailure:
    """A content file that could not be decoded."""

    path: Path
    error: FrontmatterError | EntryError | UnicodeDecodeError

    @property
    def message(self) -> str:
        return str(self.error)


class Corpus:
    """Content collection rooted at ``settings.content_root``."""

    def __init__(self, settings: PostSettings) -> None:
        self.settings = settings
        self.root = settings.site_root
        self.content_root = settings.content_root
        self._entries: list[Entry] | None = None
        self._failures: list[LoadFailure] = []

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def _load(self) -> None:
        entries: list[Entry] = []
        failures: list[LoadFailure] = []
        files = find_content_files(self.content_root)
        logger.debug("Discovered %d content files under %s", len(files), self.content_root)
        for file_path in files:
            rel = file_path.relative_to(self.content_root)
            try:
                entries.append(Entry.from_text(read_content_file(file_path), path=rel))
            except (FrontmatterError, EntryError, UnicodeDecodeError) as exc:
                logger.debug("Skipping %s: %s", rel, exc)
                failures.append(LoadFailure(path=rel, error=exc))
        self._entries = entries
        self._failures = failures

    def entries(self, *, section: str | None = None) -> list[Entry]:
        """All decoded entries in path order, optionally limited to one section."""
        if self._entries is None:
            self._load()
        assert self._entries is not None
        if section is None:
            return list(self._entries)
        return [e for e in self._entries if e.section == section]

    @property
    def failures(self) -> list[LoadFailure]:
        """Files that failed to decode during the last load."""
        if self._entries is None:
            self._load()
        return list(self._failures)

    def reload(self) -> None:
        """Drop the cached collection; the next access re-reads the files."""
        self._entries = None
        self._failures = []

    def sections(self) -> list[str]:
        """Section names that hold at least one entry, sorted."""
        return sorted({e.section for e in self.entries()})

    def is_dated(self, section: str) -> bool:
        """Whether entries in *section* must carry a title and date."""
        return section in self.settings.site.dated_sections

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def find(self, key: str) -> list[Entry]:
        """Entries matching *key* by content-root-relative path, else by slug."""
        wanted = key.strip().strip("/")
        by_path = [
            e
            for e in self.entries()
            if e.path.as_posix() == wanted or e.path.with_suffix("").as_posix() == wanted
        ]
        if by_path:
            return by_path
        return [e for e in self.entries() if e.slug == wanted]

    def entry_path(self, section: str, slug: str) -> Path:
        """Absolute path where a new entry ``{section}/{slug}.md`` would live."""
        return resolve_entry_path(self.content_root, section, slug)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def write_entry(
        self,
        path: Path,
        frontmatter: dict[str, Any],
        body: str,
        fmt: FrontmatterFormat,
    ) -> Path:
        """Write an entry file and invalidate the cache. Returns the relative path."""
        write_content_file(path, frontmatter, body, fmt)
        self.reload()
        rel = path.relative_to(self.content_root)
        logger.debug("Wrote %s", rel)
        return rel
