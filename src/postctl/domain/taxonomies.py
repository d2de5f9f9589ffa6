"""Taxonomy domain logic — label rules, term slugs, grouping."""

from __future__ import annotations

import re
import unicodedata
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

    from postctl.domain.content import Entry

TAXONOMY_NAMES: tuple[str, ...] = ("categories", "tags")

# Characters that would terminate or corrupt a quoted label in the metadata block.
DELIMITER_CHARS = frozenset({'"', "\\", "\n", "\r"})

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def validate_label(label: str) -> list[str]:
    """Return the problems with one taxonomy label (empty list when valid).

    Examples:
        >>> validate_label("rust")
        []
        >>> validate_label("  ")
        ['Empty label']
    """
    if not label.strip():
        return ["Empty label"]
    bad = sorted(c for c in set(label) if c in DELIMITER_CHARS)
    if bad:
        shown = ", ".join(repr(c) for c in bad)
        return [f"Label {label!r} contains delimiter character(s): {shown}"]
    return []


def slugify_term(label: str) -> str:
    """URL-safe slug for a taxonomy term.

    Examples:
        >>> slugify_term("Dependency Injection")
        'dependency-injection'
        >>> slugify_term("Crème Brûlée")
        'creme-brulee'
    """
    folded = unicodedata.normalize("NFKD", label).encode("ascii", "ignore").decode("ascii")
    return _NON_ALNUM.sub("-", folded.lower()).strip("-")


def labels_for(entry: Entry, taxonomy: str) -> list[str]:
    """Labels an entry carries for *taxonomy*."""
    if taxonomy not in TAXONOMY_NAMES:
        msg = f"Unknown taxonomy: {taxonomy!r}"
        raise ValueError(msg)
    return list(getattr(entry.frontmatter.taxonomies, taxonomy))


def group_by_term(entries: Iterable[Entry], taxonomy: str) -> dict[str, list[Entry]]:
    """Group entries by the labels of *taxonomy*.

    Terms appear in order of first use; entries keep their input order.
    An entry listing the same label twice is grouped under it once.
    """
    groups: dict[str, list[Entry]] = {}
    for entry in entries:
        for label in dict.fromkeys(labels_for(entry, taxonomy)):
            groups.setdefault(label, []).append(entry)
    return groups
