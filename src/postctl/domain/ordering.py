"""Collection ordering for index pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from postctl.domain.content import Entry

SORT_KEYS: tuple[str, ...] = ("date", "title", "path")


def sort_entries(
    entries: Iterable[Entry],
    *,
    key: str = "date",
    newest_first: bool = True,
) -> list[Entry]:
    """Stable sort of *entries*.

    ``date`` sorts newest first by default; undated entries always go last.
    Ties keep their input order (discovery order is path order), so equal
    dates never make the result depend on anything but the input.
    ``title`` sorts case-insensitively and ``path`` lexically, both ascending.
    """
    items = list(entries)
    if key == "date":
        dated = [e for e in items if e.date is not None]
        undated = [e for e in items if e.date is None]
        # list.sort stays stable with reverse=True.
        dated.sort(key=lambda e: e.date, reverse=newest_first)
        return dated + undated
    if key == "title":
        return sorted(items, key=lambda e: (e.title or "").casefold())
    if key == "path":
        return sorted(items, key=lambda e: e.path.as_posix())
    msg = f"Unknown sort key: {key!r} (expected one of {', '.join(SORT_KEYS)})"
    raise ValueError(msg)
