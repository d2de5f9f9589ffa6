"""Command: list entries for an index page."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand
from postctl.domain.ordering import SORT_KEYS

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    "list",
    cls=PostCommand,
    examples="""\
  postctl list
  postctl list --section blog --limit 10
  postctl list --tag rust --sort title
  postctl list --category testing --since 2022-01-01
  postctl list --drafts
  postctl --json list --until 2021-12-31""",
)
@click.option("--section", default=None, help="Only entries in this content directory.")
@click.option("--tag", default=None, help="Only entries carrying this tag.")
@click.option("--category", default=None, help="Only entries in this category.")
@click.option("--since", default=None, help="Dated on or after (YYYY-MM-DD).")
@click.option("--until", default=None, help="Dated on or before (YYYY-MM-DD).")
@click.option("--drafts", "include_drafts", is_flag=True, help="Include draft entries.")
@click.option(
    "--sort",
    type=click.Choice(list(SORT_KEYS)),
    default="date",
    help="Sort order (date is newest first).",
)
@click.option("--limit", default=None, type=click.IntRange(min=0), help="Max results.")
@click.pass_obj
def list_cmd(
    app: AppContext,
    section: str | None,
    tag: str | None,
    category: str | None,
    since: str | None,
    until: str | None,
    include_drafts: bool,
    sort: str,
    limit: int | None,
) -> None:
    """List entries, newest first."""
    from postctl.services.query import QueryService

    app.emit(
        QueryService(app.corpus).list_entries(
            section=section,
            tag=tag,
            category=category,
            since=since,
            until=until,
            include_drafts=include_drafts,
            sort=sort,
            limit=limit,
        )
    )
