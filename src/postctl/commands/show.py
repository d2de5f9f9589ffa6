"""Command: show one entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl show rust-traits-for-di
  postctl show blog/rust-traits-for-di.md
  postctl --json show resume""",
)
@click.argument("key")
@click.pass_obj
def show(app: AppContext, key: str) -> None:
    """Show an entry by slug or content-relative path."""
    from postctl.services.query import QueryService

    app.emit(QueryService(app.corpus).get(key))
