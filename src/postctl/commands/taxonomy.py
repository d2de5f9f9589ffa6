"""Command: taxonomy index (terms with their entries)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand
from postctl.domain.taxonomies import TAXONOMY_NAMES

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl taxonomy tags
  postctl taxonomy categories --sort count
  postctl -v taxonomy tags
  postctl --json taxonomy tags""",
)
@click.argument("name", type=click.Choice(list(TAXONOMY_NAMES)))
@click.option(
    "--sort",
    type=click.Choice(["name", "count"]),
    default="name",
    help="Order terms by name or by entry count.",
)
@click.option("--drafts", "include_drafts", is_flag=True, help="Include draft entries.")
@click.pass_obj
def taxonomy(app: AppContext, name: str, sort: str, include_drafts: bool) -> None:
    """Group entries by category or tag."""
    from postctl.services.query import QueryService

    app.emit(QueryService(app.corpus).taxonomy(name, sort=sort, include_drafts=include_drafts))
