"""Front-matter schema for content entries.

Canonical key ordering:
  title, description, date, updated, draft, slug, weight, template,
  taxonomies, extra

Unrecognized keys are allowed on the model (``extra="allow"``) so that a
hand-authored file never fails to load just because the generator grew a
new key. The checker reports them instead.
"""

from __future__ import annotations

import datetime as dt
from typing import Any

from pydantic import BaseModel, Field, field_validator


class Taxonomies(BaseModel):
    """The ``[taxonomies]`` table: named label lists used for grouping."""

    model_config = {"frozen": True, "extra": "allow"}

    categories: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)

    def unknown_names(self) -> list[str]:
        """Taxonomy names present in the file that are not recognized."""
        return sorted((self.model_extra or {}).keys())


class EntryFrontmatter(BaseModel):
    """Decoded metadata block of one entry.

    ``title`` and ``date`` are optional here; whether a section requires
    them is a checker rule, not a schema rule (the resume page has neither
    requirement).
    """

    model_config = {"frozen": True, "extra": "allow"}

    title: str | None = None
    description: str | None = None
    date: dt.date | None = None
    updated: dt.date | None = None
    draft: bool = False
    slug: str | None = None
    weight: int | None = None
    template: str | None = None
    taxonomies: Taxonomies = Field(default_factory=Taxonomies)
    extra: dict[str, Any] = Field(default_factory=dict)

    @field_validator("date", "updated", mode="before")
    @classmethod
    def _truncate_datetime(cls, value: Any) -> Any:
        # A TOML/YAML datetime is accepted; only its calendar date matters.
        if isinstance(value, dt.datetime):
            return value.date()
        return value

    def unknown_keys(self) -> list[str]:
        return sorted((self.model_extra or {}).keys())
