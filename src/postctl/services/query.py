"""QueryService — listing, lookup, and taxonomy index data.

This is the data an index page is built from: entries sorted newest
first, grouped by category or tag. Nothing here renders HTML.
"""

from __future__ import annotations

from typing import Any

from postctl.domain.ordering import SORT_KEYS, sort_entries
from postctl.domain.taxonomies import TAXONOMY_NAMES, group_by_term, slugify_term
from postctl.services._helpers import parse_iso_date
from postctl.services.base import BaseService
from postctl.services.result import AMBIGUOUS, INVALID_ARGUMENT, NOT_FOUND, ServiceResult


class QueryService(BaseService):
    """Read-only queries over the corpus."""

    def list_entries(
        self,
        *,
        section: str | None = None,
        tag: str | None = None,
        category: str | None = None,
        since: str | None = None,
        until: str | None = None,
        include_drafts: bool = False,
        sort: str = "date",
        limit: int | None = None,
    ) -> ServiceResult:
        """List entries matching all given filters.

        Args:
            section: Only entries of this content-type directory.
            tag: Only entries carrying this tag.
            category: Only entries in this category.
            since: Dated on or after this ISO date (undated entries excluded).
            until: Dated on or before this ISO date (undated entries excluded).
            include_drafts: Keep entries marked ``draft = true``.
            sort: ``date`` (newest first), ``title`` or ``path``.
            limit: Maximum number of rows.
        """
        op = "list_entries"
        if sort not in SORT_KEYS:
            return self._fail(op, INVALID_ARGUMENT, f"Unknown sort key: {sort!r}", sort=sort)
        if limit is not None and limit < 0:
            return self._fail(op, INVALID_ARGUMENT, "limit must not be negative", limit=limit)
        try:
            since_date = parse_iso_date(since, name="since") if since else None
            until_date = parse_iso_date(until, name="until") if until else None
        except ValueError as exc:
            return self._fail(op, INVALID_ARGUMENT, str(exc))

        entries = self._corpus.entries(section=section)
        if not include_drafts:
            entries = [e for e in entries if not e.draft]
        if tag is not None:
            entries = [e for e in entries if tag in e.tags]
        if category is not None:
            entries = [e for e in entries if category in e.categories]
        if since_date is not None:
            entries = [e for e in entries if e.date is not None and e.date >= since_date]
        if until_date is not None:
            entries = [e for e in entries if e.date is not None and e.date <= until_date]

        ordered = sort_entries(entries, key=sort)
        total = len(ordered)
        if limit is not None:
            ordered = ordered[:limit]

        return ServiceResult(
            ok=True,
            op=op,
            data={"items": [e.summary() for e in ordered], "count": len(ordered), "total": total},
            warnings=self._load_warnings(),
        )

    def get(self, key: str) -> ServiceResult:
        """Retrieve one entry by content-root-relative path or slug."""
        op = "get"
        matches = self._corpus.find(key)
        if not matches:
            return self._fail(op, NOT_FOUND, f"No entry matches {key!r}", key=key)
        if len(matches) > 1:
            paths = [e.path.as_posix() for e in matches]
            return self._fail(
                op,
                AMBIGUOUS,
                f"{len(matches)} entries match {key!r}; use a path instead",
                key=key,
                paths=paths,
            )
        return ServiceResult(ok=True, op=op, data=matches[0].detail())

    def taxonomy(
        self,
        name: str,
        *,
        sort: str = "name",
        include_drafts: bool = False,
    ) -> ServiceResult:
        """Index-page data for one taxonomy: every term with its entries, newest first."""
        op = "taxonomy"
        if name not in TAXONOMY_NAMES:
            return self._fail(
                op,
                INVALID_ARGUMENT,
                f"Unknown taxonomy {name!r} (expected one of {', '.join(TAXONOMY_NAMES)})",
                name=name,
            )
        if sort not in ("name", "count"):
            return self._fail(op, INVALID_ARGUMENT, f"Unknown sort key: {sort!r}", sort=sort)

        entries = self._corpus.entries()
        if not include_drafts:
            entries = [e for e in entries if not e.draft]
        groups = group_by_term(sort_entries(entries), name)

        terms: list[dict[str, Any]] = [
            {
                "name": label,
                "slug": slugify_term(label),
                "count": len(members),
                "items": [e.summary() for e in members],
            }
            for label, members in groups.items()
        ]
        terms.sort(key=lambda t: t["name"].casefold())
        if sort == "count":
            terms.sort(key=lambda t: t["count"], reverse=True)

        return ServiceResult(
            ok=True,
            op=op,
            data={"taxonomy": name, "terms": terms, "count": len(terms)},
            warnings=self._load_warnings(),
        )

    def sections(self) -> ServiceResult:
        """Per-section entry counts and date range."""
        rows: list[dict[str, Any]] = []
        for section in self._corpus.sections():
            entries = self._corpus.entries(section=section)
            dates = [e.date for e in entries if e.date is not None]
            rows.append(
                {
                    "section": section or "/",
                    "count": len(entries),
                    "drafts": sum(1 for e in entries if e.draft),
                    "dated": self._corpus.is_dated(section),
                    "oldest": min(dates).isoformat() if dates else None,
                    "newest": max(dates).isoformat() if dates else None,
                }
            )
        return ServiceResult(
            ok=True,
            op="sections",
            data={"items": rows, "count": len(rows)},
            warnings=self._load_warnings(),
        )
