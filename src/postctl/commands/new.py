"""Command: scaffold a new entry."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl new "Testing Without Mocks"
  postctl new "Trait Objects" --tag rust --tag design --category programming
  postctl new "Resume" --section resume --template resume.html
  postctl new "Half Done" --draft --date 2022-04-25
  postctl new "ORM Patterns" --slug orm --description "On repositories"
  postctl --json new "Hello" --section notes""",
)
@click.argument("title")
@click.option("--section", default=None, help="Content directory (default from config).")
@click.option("--tag", "tags", multiple=True, help="Tag label (repeatable).")
@click.option("--category", "categories", multiple=True, help="Category label (repeatable).")
@click.option("--date", default=None, help="Entry date (YYYY-MM-DD, default today).")
@click.option("--template", default=None, help="Alternate render template.")
@click.option("--slug", default=None, help="Explicit slug (default derived from title).")
@click.option("--description", default=None, help="Short description.")
@click.option("--draft", is_flag=True, help="Mark as draft.")
@click.pass_obj
def new(
    app: AppContext,
    title: str,
    section: str | None,
    tags: tuple[str, ...],
    categories: tuple[str, ...],
    date: str | None,
    template: str | None,
    slug: str | None,
    description: str | None,
    draft: bool,
) -> None:
    """Create a new entry file with front matter."""
    from postctl.services.create import CreateService

    app.emit(
        CreateService(app.corpus).create_entry(
            title,
            section=section,
            tags=list(tags),
            categories=list(categories),
            date=date,
            template=template,
            slug=slug,
            description=description,
            draft=draft,
        )
    )
