"""Command: per-section summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(cls=PostCommand, examples="  postctl sections\n  postctl --json sections")
@click.pass_obj
def sections(app: AppContext) -> None:
    """Summarize content directories."""
    from postctl.services.query import QueryService

    app.emit(QueryService(app.corpus).sections())
