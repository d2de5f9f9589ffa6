"""Command: corpus linting and repair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from postctl.commands._base import PostCommand

if TYPE_CHECKING:
    from postctl.commands._context import AppContext


@click.command(
    cls=PostCommand,
    examples="""\
  postctl check
  postctl check --errors-only
  postctl check --min-severity error
  postctl check --fix
  postctl --json check""",
)
@click.option(
    "--min-severity",
    type=click.Choice(["warning", "error"]),
    default="warning",
    help="Hide issues below this severity.",
)
@click.option("--errors-only", is_flag=True, help="Shortcut for --min-severity error.")
@click.option("--fix", is_flag=True, help="Rewrite entries with out-of-order keys.")
@click.option("--strict", is_flag=True, help="Exit 1 when any error-severity issue is found.")
@click.pass_obj
def check(app: AppContext, min_severity: str, errors_only: bool, fix: bool, strict: bool) -> None:
    """Check front matter across the corpus."""
    from postctl.services.check import CheckService

    svc = CheckService(app.corpus)

    if fix:
        app.emit(svc.fix())
        return

    threshold = "error" if errors_only else min_severity
    result = svc.check(min_severity=threshold)
    app.emit(result)
    if strict and not result.data.get("healthy", True):
        raise SystemExit(1)
