"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, postctl.toml only contains
overrides. A site laid out the conventional way needs no config file at all.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# --- postctl.toml sections ---


class SiteConfig(BaseModel):
    """[site] section."""

    model_config = {"frozen": True}

    name: str = "my-site"
    content_dir: str = "content"
    dated_sections: list[str] = Field(default_factory=lambda: ["blog"])
    default_section: str = "blog"


class FrontmatterConfig(BaseModel):
    """[frontmatter] section."""

    model_config = {"frozen": True}

    format: Literal["toml", "yaml"] = "toml"


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    allow_unknown_keys: bool = False

