"""Tests for the front-matter schema models."""

from __future__ import annotations

import datetime as dt

import pytest
from pydantic import ValidationError

from postctl.domain.frontmatter import EntryFrontmatter, Taxonomies


class TestEntryFrontmatter:
    def test_defaults(self) -> None:
        fm = EntryFrontmatter()
        assert fm.title is None
        assert fm.date is None
        assert fm.draft is False
        assert fm.taxonomies == Taxonomies()
        assert fm.extra == {}

    def test_frozen(self) -> None:
        fm = EntryFrontmatter(title="T")
        with pytest.raises(ValidationError):
            fm.title = "changed"  # type: ignore[misc]

    def test_datetime_truncated(self) -> None:
        fm = EntryFrontmatter.model_validate(
            {"date": dt.datetime(2022, 4, 25, 9, 0), "updated": dt.datetime(2022, 5, 1, 9, 0)}
        )
        assert fm.date == dt.date(2022, 4, 25)
        assert fm.updated == dt.date(2022, 5, 1)

    def test_unknown_keys_retained(self) -> None:
        fm = EntryFrontmatter.model_validate({"title": "T", "author": "me", "aliases": []})
        assert fm.unknown_keys() == ["aliases", "author"]

    def test_unknown_taxonomy_names(self) -> None:
        tax = Taxonomies.model_validate({"tags": ["a"], "series": ["b"]})
        assert tax.unknown_names() == ["series"]
        assert tax.tags == ["a"]

    def test_bad_date_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EntryFrontmatter.model_validate({"date": "yesterday"})
