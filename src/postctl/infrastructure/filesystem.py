"""Filesystem operations for content files.

INVARIANT: Files are truth. Nothing is cached between invocations; every
command re-reads the content root.

Pure parsing/rendering utilities live in :mod:`postctl.domain.content`
(correct dependency direction: infrastructure -> domain). This module
handles actual file I/O, path resolution, and file discovery.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from postctl.domain.content import render_frontmatter

if TYPE_CHECKING:
    from postctl.domain.content import FrontmatterFormat

CONTENT_SUFFIX = ".md"


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def read_content_file(path: Path) -> str:
    """Read an entry file as text.

    Line endings are kept as written. A UTF-8 byte-order mark, as left by
    some Windows editors, is dropped.
    """
    with path.open(encoding="utf-8-sig", newline="") as fh:
        return fh.read()


def write_content_file(
    path: Path,
    frontmatter: dict[str, Any],
    body: str,
    fmt: FrontmatterFormat = "toml",
) -> None:
    """Write frontmatter + body to a markdown file.

    Creates parent directories if they don't exist.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    rendered = render_frontmatter(frontmatter, body, fmt)
    path.write_text(rendered, encoding="utf-8", newline="")


# ---------------------------------------------------------------------------
# Path resolution
# ---------------------------------------------------------------------------


def resolve_entry_path(content_root: Path, section: str, slug: str) -> Path:
    """Resolve the filesystem path for a new entry: ``{root}/{section}/{slug}.md``."""
    if not slug:
        msg = "Slug must not be empty"
        raise ValueError(msg)
    base = content_root / section if section else content_root
    result = base / f"{slug}{CONTENT_SUFFIX}"

    # Guard against path traversal via crafted section or slug
    if not result.resolve().is_relative_to(content_root.resolve()):
        msg = f"Path escapes content root: {result}"
        raise ValueError(msg)

    return result


def _is_skipped(relative: Path) -> bool:
    """Hidden directories/files and ``_``-prefixed files (section metadata) are not entries."""
    if any(part.startswith(".") for part in relative.parts):
        return True
    return relative.name.startswith("_")


def find_content_files(content_root: Path, *, section: str | None = None) -> list[Path]:
    """Discover all entry files under *content_root*.

    Walks the whole tree (or only ``{root}/{section}``), skipping hidden
    paths and ``_index.md``-style section files. Sorted by path.
    """
    search_root = content_root / section if section else content_root
    if not search_root.is_dir():
        return []

    results: list[Path] = []
    for path in search_root.rglob(f"*{CONTENT_SUFFIX}"):
        if not path.is_file():
            continue
        if _is_skipped(path.relative_to(content_root)):
            continue
        results.append(path)

    return sorted(results)
