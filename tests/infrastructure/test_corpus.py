"""Tests for the Corpus loader."""

from __future__ import annotations

import os
from pathlib import Path

from postctl.config.discovery import CONFIG_ENV_VAR
from postctl.config.settings import PostSettings
from postctl.domain.content import EntryError, FrontmatterError
from postctl.infrastructure.corpus import Corpus
from tests.conftest import write_entry


class TestLoading:
    def test_entries_in_path_order(self, corpus: Corpus) -> None:
        assert [e.path.as_posix() for e in corpus.entries()] == [
            "blog/orm-patterns.md",
            "blog/rust-traits.md",
            "blog/testing-philosophy.md",
            "resume/index.md",
        ]
        assert corpus.failures == []

    def test_section_filter(self, corpus: Corpus) -> None:
        assert [e.slug for e in corpus.entries(section="resume")] == ["resume"]

    def test_sections(self, corpus: Corpus) -> None:
        assert corpus.sections() == ["blog", "resume"]

    def test_is_dated(self, corpus: Corpus) -> None:
        assert corpus.is_dated("blog")
        assert not corpus.is_dated("resume")

    def test_bad_files_recorded_not_fatal(self, corpus: Corpus, content_root: Path) -> None:
        write_entry(content_root, "blog/broken.md", '+++\ntitle = "oops\n+++\n')
        write_entry(content_root, "blog/bad-date.md", '+++\ntitle = "x"\ndate = "nope"\n+++\n')
        corpus.reload()
        assert len(corpus.entries()) == 4
        failures = {f.path.as_posix(): f for f in corpus.failures}
        assert set(failures) == {"blog/broken.md", "blog/bad-date.md"}
        assert isinstance(failures["blog/broken.md"].error, FrontmatterError)
        assert isinstance(failures["blog/bad-date.md"].error, EntryError)

    def test_cache_until_reload(self, corpus: Corpus, content_root: Path) -> None:
        assert len(corpus.entries()) == 4
        write_entry(content_root, "blog/later.md", '+++\ntitle = "L"\ndate = 2023-01-01\n+++\n')
        assert len(corpus.entries()) == 4
        corpus.reload()
        assert len(corpus.entries()) == 5

    def test_custom_content_dir(self, tmp_path: Path) -> None:
        (tmp_path / "postctl.toml").write_text('[site]\ncontent_dir = "posts"\n', encoding="utf-8")
        write_entry(tmp_path / "posts", "blog/a.md", '+++\ntitle = "A"\ndate = 2022-01-01\n+++\n')
        corpus = Corpus(PostSettings.from_cli(site_root=tmp_path))
        assert [e.slug for e in corpus.entries()] == ["a"]

    def test_byte_order_mark_file_loads(self, corpus: Corpus, content_root: Path) -> None:
        path = content_root / "blog" / "bom.md"
        path.write_bytes("\ufeff+++\ntitle = \"BOM\"\ndate = 2022-01-01\n+++\n\nbody\n".encode())
        corpus.reload()
        (entry,) = corpus.find("bom")
        assert entry.fmt == "toml"
        assert entry.title == "BOM"
        assert corpus.failures == []

    def test_fixture_runs_without_outer_config(self, corpus: Corpus) -> None:
        assert CONFIG_ENV_VAR not in os.environ
        assert corpus.settings.config_path is None


class TestLookup:
    def test_find_by_slug(self, corpus: Corpus) -> None:
        assert [e.path.as_posix() for e in corpus.find("rust-traits")] == ["blog/rust-traits.md"]

    def test_find_by_path(self, corpus: Corpus) -> None:
        assert len(corpus.find("blog/rust-traits.md")) == 1
        assert len(corpus.find("blog/rust-traits")) == 1
        assert len(corpus.find("/resume/index.md")) == 1

    def test_find_bundle_by_slug(self, corpus: Corpus) -> None:
        assert [e.section for e in corpus.find("resume")] == ["resume"]

    def test_find_missing(self, corpus: Corpus) -> None:
        assert corpus.find("nope") == []


class TestWrites:
    def test_write_entry_invalidates_cache(self, corpus: Corpus) -> None:
        assert len(corpus.entries()) == 4
        path = corpus.entry_path("blog", "fresh")
        rel = corpus.write_entry(path, {"title": "Fresh", "date": "2023-03-03"}, "", "toml")
        assert rel == Path("blog/fresh.md")
        assert len(corpus.entries()) == 5
