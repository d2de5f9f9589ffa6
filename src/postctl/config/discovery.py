"""Locating ``postctl.toml``.

Resolution order: the ``-c/--config`` flag, then the ``POSTCTL_CONFIG``
environment variable, then a walk up from the starting directory the way
git finds ``.git``. An explicit path that does not exist means "no config",
never a fallback to the walk-up.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "postctl.toml"
CONFIG_ENV_VAR = "POSTCTL_CONFIG"


def _existing(path: str | Path) -> Path | None:
    p = Path(path)
    return p if p.is_file() else None


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``postctl.toml`` at or above *start* (default: cwd).

    ``POSTCTL_CONFIG``, when set, replaces the search.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return _existing(env_path)

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(explicit: str | None = None, start: Path | None = None) -> Path | None:
    """Config file in effect for one invocation.

    *explicit* is the ``--config`` value and wins over everything else.
    """
    if explicit:
        return _existing(explicit)
    return find_config(start)
