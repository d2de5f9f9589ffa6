"""Shared pytest fixtures and test helpers for postctl tests."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from postctl.config.discovery import CONFIG_ENV_VAR
from postctl.config.settings import PostSettings
from postctl.infrastructure.corpus import Corpus

RUST_POST = """\
+++
title = "Dependency Injection With Rust Traits"
date = 2022-04-25

[taxonomies]
categories = ["programming"]
tags = ["rust", "design"]
+++

Traits make seams cheap.
"""

ORM_POST = """\
+++
title = "ORM Patterns"
date = 2021-11-02

[taxonomies]
categories = ["programming"]
tags = ["orm", "design"]
+++

Repositories and units of work.
"""

TESTING_POST = """\
+++
title = "Testing Philosophy"
date = 2022-04-25

[taxonomies]
categories = ["essays"]
tags = ["testing"]
+++

Test behaviour, not wiring.
"""

RESUME = """\
+++
title = "Resume"
template = "resume.html"
+++

## Experience
"""


def write_entry(content_root: Path, rel: str, text: str) -> Path:
    """Write *text* to ``content_root / rel`` and return the path."""
    path = content_root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site with a small, valid corpus.

    This is the single source of truth for the test site layout.
    """
    content = tmp_path / "content"
    write_entry(content, "blog/rust-traits.md", RUST_POST)
    write_entry(content, "blog/orm-patterns.md", ORM_POST)
    write_entry(content, "blog/testing-philosophy.md", TESTING_POST)
    write_entry(content, "blog/_index.md", '+++\ntitle = "Blog"\n+++\n')
    write_entry(content, "resume/index.md", RESUME)
    return tmp_path


@pytest.fixture
def content_root(site_root: Path) -> Path:
    return site_root / "content"


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a POSTCTL_CONFIG from the outer environment out of every test."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


@pytest.fixture
def corpus(site_root: Path) -> Corpus:
    """Corpus over the temp site (no config file, default settings)."""
    return Corpus(PostSettings.from_cli(site_root=site_root))


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp site root so the CLI operates on it.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.
    """
    monkeypatch.chdir(site_root)
