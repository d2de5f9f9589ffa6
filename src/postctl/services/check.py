"""CheckService — data-shape linting of the corpus.

Single command following the linter pattern. Categories:

- ``parse``: front matter that cannot be decoded or does not fit the schema.
- ``required_fields``: missing title/date on dated sections.
- ``dates``: values that are not calendar dates, ``updated`` before ``date``.
- ``taxonomy``: empty labels, delimiter characters, duplicates, unknown names.
- ``structure``: unknown keys, duplicate slugs, non-canonical key order.
- ``round_trip``: re-serializing the block changes its keys or values.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from postctl.domain.content import (
    EntryError,
    entry_issues,
    has_canonical_order,
    round_trips,
)
from postctl.services.base import BaseService
from postctl.services.result import INVALID_ARGUMENT, ServiceResult

if TYPE_CHECKING:
    from postctl.domain.content import Entry
    from postctl.infrastructure.corpus import LoadFailure

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Issue severity and category constants
# ---------------------------------------------------------------------------

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
_SEVERITY_RANK = {SEVERITY_WARNING: 0, SEVERITY_ERROR: 1}

CAT_PARSE = "parse"
CAT_REQUIRED = "required_fields"
CAT_DATES = "dates"
CAT_TAXONOMY = "taxonomy"
CAT_STRUCTURE = "structure"
CAT_ROUND_TRIP = "round_trip"

FIX_REORDER = "reorder_keys"

_DATE_FIELDS = ("date", "updated")


def _issue(
    category: str,
    severity: str,
    path: str,
    message: str,
    fix_action: str | None = None,
) -> dict[str, Any]:
    return {
        "category": category,
        "severity": severity,
        "path": path,
        "message": message,
        "fix_action": fix_action,
    }


class CheckService(BaseService):
    """Lints the corpus and applies safe repairs."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def check(self, *, min_severity: str = SEVERITY_WARNING) -> ServiceResult:
        """Report issues without modifying anything."""
        if min_severity not in _SEVERITY_RANK:
            return self._fail(
                "check",
                INVALID_ARGUMENT,
                f"Unknown severity: {min_severity!r}",
                min_severity=min_severity,
            )

        issues: list[dict[str, Any]] = []
        for failure in self._corpus.failures:
            issues.extend(self._failure_issues(failure))

        entries = self._corpus.entries()
        for entry in entries:
            issues.extend(self._entry_issues(entry))
        issues.extend(self._duplicate_slug_issues(entries))

        threshold = _SEVERITY_RANK[min_severity]
        issues = [i for i in issues if _SEVERITY_RANK[i["severity"]] >= threshold]
        issues.sort(key=lambda i: (i["path"], i["category"]))

        error_count = sum(1 for i in issues if i["severity"] == SEVERITY_ERROR)
        logger.debug("check: %d entries, %d issues", len(entries), len(issues))
        return ServiceResult(
            ok=True,
            op="check",
            data={
                "issues": issues,
                "count": len(issues),
                "error_count": error_count,
                "warning_count": len(issues) - error_count,
                "healthy": error_count == 0,
                "entries_checked": len(entries) + len(self._corpus.failures),
            },
        )

    def fix(self) -> ServiceResult:
        """Rewrite entries whose keys are out of canonical order.

        Only entries that round-trip cleanly are touched, so a rewrite can
        never change a value. Format (TOML/YAML) and body are preserved.
        """
        fixes: list[str] = []
        warnings: list[str] = []
        for entry in self._corpus.entries():
            if entry.fmt is None or has_canonical_order(entry):
                continue
            rel = entry.path.as_posix()
            if not round_trips(entry):
                warnings.append(f"Not reordering {rel}: front matter does not round-trip")
                continue
            self._corpus.write_entry(
                self._corpus.content_root / entry.path,
                dict(entry.raw),
                entry.body,
                entry.fmt,
            )
            fixes.append(rel)

        return ServiceResult(
            ok=True,
            op="fix",
            data={"fixes": fixes, "count": len(fixes)},
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Issue collection
    # ------------------------------------------------------------------

    @staticmethod
    def _failure_issues(failure: LoadFailure) -> list[dict[str, Any]]:
        path = failure.path.as_posix()
        error = failure.error
        if not isinstance(error, EntryError):
            return [_issue(CAT_PARSE, SEVERITY_ERROR, path, str(error))]

        issues: list[dict[str, Any]] = []
        for loc, msg in error.problems:
            head = loc.split(".", 1)[0]
            if head in _DATE_FIELDS:
                category = CAT_DATES
            elif head == "taxonomies":
                category = CAT_TAXONOMY
            else:
                category = CAT_PARSE
            issues.append(_issue(category, SEVERITY_ERROR, path, f"{loc}: {msg}"))
        return issues

    def _entry_issues(self, entry: Entry) -> list[dict[str, Any]]:
        path = entry.path.as_posix()
        issues = [
            _issue(i.category, i.severity, path, i.message)
            for i in entry_issues(
                entry,
                dated=self._corpus.is_dated(entry.section),
                allow_unknown_keys=self._corpus.settings.check.allow_unknown_keys,
            )
        ]
        if entry.fmt is None:
            return issues

        if not round_trips(entry):
            issues.append(
                _issue(
                    CAT_ROUND_TRIP,
                    SEVERITY_ERROR,
                    path,
                    "Front matter changes when re-serialized",
                )
            )
        elif not has_canonical_order(entry):
            issues.append(
                _issue(
                    CAT_STRUCTURE,
                    SEVERITY_WARNING,
                    path,
                    "Front-matter keys are not in canonical order",
                    fix_action=FIX_REORDER,
                )
            )
        return issues

    @staticmethod
    def _duplicate_slug_issues(entries: list[Entry]) -> list[dict[str, Any]]:
        by_slug: dict[tuple[str, str], list[Entry]] = {}
        for entry in entries:
            by_slug.setdefault((entry.section, entry.slug), []).append(entry)

        issues: list[dict[str, Any]] = []
        for (section, slug), group in by_slug.items():
            if len(group) < 2:
                continue
            others = ", ".join(e.path.as_posix() for e in group)
            for entry in group:
                issues.append(
                    _issue(
                        CAT_STRUCTURE,
                        SEVERITY_ERROR,
                        entry.path.as_posix(),
                        f"Duplicate slug {slug!r} in section {section or '/'!r}: {others}",
                    )
                )
        return issues
