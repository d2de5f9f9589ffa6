"""CreateService — scaffold new entries.

Pipeline: VALIDATE -> RESOLVE PATH -> RENDER BODY -> WRITE.

The front matter is built from arguments, checked with the same rules the
checker applies, and written in the site's configured format. The body
comes from the ``entry.md.j2`` template, overridable per site.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from postctl.domain.content import Entry, EntryError, validate_entry
from postctl.domain.frontmatter import EntryFrontmatter
from postctl.domain.taxonomies import slugify_term
from postctl.infrastructure.templates import build_template_environment
from postctl.services._helpers import parse_iso_date, today
from postctl.services.base import BaseService
from postctl.services.result import (
    ALREADY_EXISTS,
    INVALID_ARGUMENT,
    VALIDATION_FAILED,
    ServiceResult,
)

logger = logging.getLogger(__name__)

BODY_TEMPLATE = "entry.md.j2"


class CreateService(BaseService):
    """Creates new entry files."""

    def create_entry(
        self,
        title: str,
        *,
        section: str | None = None,
        tags: list[str] | None = None,
        categories: list[str] | None = None,
        date: str | None = None,
        template: str | None = None,
        draft: bool = False,
        slug: str | None = None,
        description: str | None = None,
        body: str = "",
    ) -> ServiceResult:
        """Write ``{content}/{section}/{slug}.md`` with a fresh metadata block.

        The slug defaults to the slugified title and is only stored in the
        front matter when given explicitly.
        """
        op = "create_entry"
        settings = self._corpus.settings
        section = settings.site.default_section if section is None else section

        # ── VALIDATE ──
        try:
            entry_date = parse_iso_date(date) if date else today()
        except ValueError as exc:
            return self._fail(op, INVALID_ARGUMENT, str(exc))

        file_slug = slug or slugify_term(title)
        if not file_slug:
            return self._fail(
                op, INVALID_ARGUMENT, f"Cannot derive a slug from title {title!r}", title=title
            )

        fm: dict[str, Any] = {
            "title": title,
            "description": description,
            "date": entry_date,
            "draft": draft or None,
            "slug": slug,
            "template": template,
        }
        taxonomies = {k: v for k, v in (("categories", categories), ("tags", tags)) if v}
        if taxonomies:
            fm["taxonomies"] = taxonomies
        fm = {k: v for k, v in fm.items() if v is not None}

        try:
            model = EntryFrontmatter.model_validate(fm)
        except ValidationError as exc:
            err = EntryError.from_validation_error(None, exc)
            return self._fail(op, VALIDATION_FAILED, str(err), problems=err.problems)

        # ── RESOLVE PATH ──
        try:
            path = self._corpus.entry_path(section, file_slug)
        except ValueError as exc:
            return self._fail(op, INVALID_ARGUMENT, str(exc), section=section, slug=file_slug)

        fmt = settings.frontmatter.format
        rel = path.relative_to(self._corpus.content_root)
        draft_entry = Entry(path=rel, section=section, frontmatter=model, body="", fmt=fmt)
        validation = validate_entry(draft_entry, dated=self._corpus.is_dated(section))
        if not validation.valid:
            return self._fail(
                op,
                VALIDATION_FAILED,
                "; ".join(validation.errors),
                errors=validation.errors,
            )

        if path.exists():
            return self._fail(
                op, ALREADY_EXISTS, f"{rel.as_posix()} already exists", path=rel.as_posix()
            )

        # ── RENDER BODY ──
        env = build_template_environment("content", site_root=self._corpus.root)
        rendered = env.get_template(BODY_TEMPLATE).render(title=title, section=section, body=body)

        # ── WRITE ──
        self._corpus.write_entry(path, fm, rendered, fmt)
        logger.info("Created %s", rel.as_posix())

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "slug": file_slug,
                "path": rel.as_posix(),
                "title": title,
                "section": section,
                "date": entry_date.isoformat(),
                "format": fmt,
            },
            warnings=validation.warnings,
        )
