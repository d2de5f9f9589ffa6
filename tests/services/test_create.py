"""Tests for CreateService — scaffolding new entries."""

from __future__ import annotations

from pathlib import Path

from postctl.config.settings import PostSettings
from postctl.domain.content import parse_frontmatter
from postctl.infrastructure.corpus import Corpus
from postctl.services._helpers import today
from postctl.services.create import CreateService


class TestCreateEntry:
    def test_writes_toml_entry(self, corpus: Corpus, content_root: Path) -> None:
        result = CreateService(corpus).create_entry(
            "Hello World", tags=["rust"], categories=["programming"], date="2023-05-01"
        )
        assert result.ok
        assert result.data["path"] == "blog/hello-world.md"
        assert result.data["slug"] == "hello-world"
        assert result.data["format"] == "toml"

        text = (content_root / "blog/hello-world.md").read_text()
        assert text.startswith('+++\ntitle = "Hello World"\ndate = 2023-05-01\n')
        fm, body = parse_frontmatter(text)
        assert fm["taxonomies"] == {"categories": ["programming"], "tags": ["rust"]}
        assert body == "<!-- Hello World: write the blog body here. -->\n"

    def test_defaults_to_today(self, corpus: Corpus) -> None:
        result = CreateService(corpus).create_entry("Fresh")
        assert result.data["date"] == today().isoformat()

    def test_new_entry_is_listed(self, corpus: Corpus) -> None:
        CreateService(corpus).create_entry("Fresh", date="2030-01-01")
        assert [e.slug for e in corpus.find("fresh")] == ["fresh"]

    def test_explicit_slug_is_stored(self, corpus: Corpus, content_root: Path) -> None:
        result = CreateService(corpus).create_entry("Hello", slug="hi-there")
        assert result.data["path"] == "blog/hi-there.md"
        fm, _ = parse_frontmatter((content_root / "blog/hi-there.md").read_text())
        assert fm["slug"] == "hi-there"

    def test_body_passthrough(self, corpus: Corpus, content_root: Path) -> None:
        CreateService(corpus).create_entry("With Body", body="Already written.")
        _, body = parse_frontmatter((content_root / "blog/with-body.md").read_text())
        assert body == "Already written.\n"

    def test_undated_section_with_template(self, corpus: Corpus) -> None:
        result = CreateService(corpus).create_entry(
            "Projects", section="portfolio", template="portfolio.html"
        )
        assert result.ok
        (entry,) = corpus.find("portfolio/projects.md")
        assert entry.template == "portfolio.html"
        assert entry.section == "portfolio"

    def test_draft_flag(self, corpus: Corpus, content_root: Path) -> None:
        CreateService(corpus).create_entry("Later", draft=True)
        fm, _ = parse_frontmatter((content_root / "blog/later.md").read_text())
        assert fm["draft"] is True

    def test_yaml_format_from_config(self, site_root: Path, content_root: Path) -> None:
        (site_root / "postctl.toml").write_text('[frontmatter]\nformat = "yaml"\n')
        corpus = Corpus(PostSettings.from_cli(site_root=site_root))
        result = CreateService(corpus).create_entry("Yaml Post", date="2023-01-02")
        assert result.data["format"] == "yaml"
        text = (content_root / "blog/yaml-post.md").read_text()
        assert text.startswith("---\ntitle: Yaml Post\ndate: 2023-01-02\n---\n")

    def test_template_override(self, corpus: Corpus, site_root: Path, content_root: Path) -> None:
        override = site_root / ".postctl" / "templates" / "content"
        override.mkdir(parents=True)
        (override / "entry.md.j2").write_text("# {{ title }}\n")
        CreateService(corpus).create_entry("Custom")
        _, body = parse_frontmatter((content_root / "blog/custom.md").read_text())
        assert body == "# Custom\n"


class TestCreateEntryErrors:
    def test_already_exists(self, corpus: Corpus) -> None:
        svc = CreateService(corpus)
        assert svc.create_entry("Brand New").ok
        result = svc.create_entry("Brand New")
        assert result.error is not None
        assert result.error.code == "ALREADY_EXISTS"

    def test_bad_date(self, corpus: Corpus) -> None:
        result = CreateService(corpus).create_entry("X", date="tomorrow")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"

    def test_no_slug_from_title(self, corpus: Corpus) -> None:
        result = CreateService(corpus).create_entry("!!!")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"

    def test_delimiter_in_tag(self, corpus: Corpus, content_root: Path) -> None:
        result = CreateService(corpus).create_entry("Quoted", tags=['say "hi"'])
        assert result.error is not None
        assert result.error.code == "VALIDATION_FAILED"
        assert not (content_root / "blog/quoted.md").exists()

    def test_path_escape(self, corpus: Corpus) -> None:
        result = CreateService(corpus).create_entry("Escape", section="..")
        assert result.error is not None
        assert result.error.code == "INVALID_ARGUMENT"
