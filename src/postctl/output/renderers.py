"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from postctl.output.console import create_console, get_output

if TYPE_CHECKING:
    from rich.console import Console

    from postctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if items and isinstance(items, list):
        return "\n".join(k for k in (_extract_key(item) for item in items) if k)

    terms = result.data.get("terms")
    if terms and isinstance(terms, list):
        return "\n".join(str(t.get("name", "")) for t in terms)

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _extract_key(item: Any) -> str:
    """Extract the identifying key from a listing row."""
    if isinstance(item, dict):
        for key in ("path", "section"):
            val = item.get(key)
            if val is not None:
                return str(val)
    return ""


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="post.ok")
    op = Text(f"  {result.op}", style="post.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="post.key")
    if key == "slug":
        v = Text(str(value), style="post.slug")
    elif key == "path":
        v = Text(str(value), style="post.path")
    elif key == "title":
        v = Text(str(value), style="post.title")
    elif key == "date":
        v = Text(str(value), style="post.date")
    else:
        v = Text(str(value))
    console.print(k, v, sep="", end="")
    console.print()


def _entry_table(items: list[dict[str, Any]], *, verbose: bool = False) -> Table:
    """Build a Rich Table for a list of entry rows."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Date", style="post.date", no_wrap=True)
    table.add_column("Title", style="post.title")
    table.add_column("Section")
    table.add_column("Tags")
    if verbose:
        table.add_column("Categories")
        table.add_column("Path", style="post.path")

    for item in items:
        title = Text(str(item.get("title", "")))
        if item.get("draft"):
            title.append(" (draft)", style="post.draft")
        row: list[Any] = [
            str(item.get("date") or "—"),
            title,
            str(item.get("section", "")),
            ", ".join(item.get("tags", [])),
        ]
        if verbose:
            row.append(", ".join(item.get("categories", [])))
            row.append(str(item.get("path", "")))
        table.add_row(*row)

    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="post.error")
    op = Text(f"  {result.op}", style="post.op")
    sep = Text(" — ")
    console.print(label, op, sep, Text(msg))

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(f"    {k}: {v}")


# ── Query renderers ───────────────────────────────────────────────────


def _render_entry_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render list_entries results as a table."""
    items = result.data.get("items", [])
    console.print(_entry_table(items, verbose=verbose))
    count = result.data.get("count", len(items))
    total = result.data.get("total", count)
    suffix = f" of {total}" if total != count else ""
    console.print(f"\n{count}{suffix} entries")


def _render_single_entry(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a get result as a panel with metadata and body."""
    d = result.data
    lines: list[str] = []
    for key in ("date", "updated", "section", "path", "template", "description"):
        val = d.get(key)
        if val:
            lines.append(f"{key}: {val}")
    for key in ("categories", "tags"):
        labels = d.get(key, [])
        if labels:
            lines.append(f"{key}: {', '.join(labels)}")
    if d.get("draft"):
        lines.append("draft: true")

    content = "\n".join(lines)
    body = d.get("body", "")
    if body:
        content += f"\n\n{body.strip()}"

    title = f"{d.get('slug', '?')} — {d.get('title') or 'Untitled'}"
    console.print(Panel(Text(content), title=Text(title), border_style="dim", expand=False))


def _render_taxonomy(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render taxonomy terms with counts; verbose lists member entries."""
    terms = result.data.get("terms", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Term", style="post.term")
    table.add_column("Slug", style="post.slug")
    table.add_column("Entries", justify="right")
    if verbose:
        table.add_column("Titles")
    for term in terms:
        row = [str(term.get("name", "")), str(term.get("slug", "")), str(term.get("count", 0))]
        if verbose:
            row.append("\n".join(str(i.get("title", "")) for i in term.get("items", [])))
        table.add_row(*row)
    console.print(table)
    console.print(f"\n{len(terms)} {result.data.get('taxonomy', 'terms')}")


def _render_sections(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    items = result.data.get("items", [])
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Section", style="post.slug")
    table.add_column("Entries", justify="right")
    table.add_column("Drafts", justify="right")
    table.add_column("Oldest", style="post.date")
    table.add_column("Newest", style="post.date")
    for item in items:
        table.add_row(
            str(item.get("section", "")),
            str(item.get("count", 0)),
            str(item.get("drafts", 0)),
            str(item.get("oldest") or "—"),
            str(item.get("newest") or "—"),
        )
    console.print(table)


# ── Check renderers ───────────────────────────────────────────────────


def _render_check(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render check results with issues grouped by category."""
    issues = result.data.get("issues", [])
    count = result.data.get("count", len(issues))

    if count == 0:
        console.print("[post.ok]OK[/post.ok]  No issues found.")
        return

    severity_styles = {"error": "post.error", "warning": "post.warning"}

    by_category: dict[str, list[dict[str, Any]]] = {}
    for issue in issues:
        cat = str(issue.get("category", "unknown"))
        by_category.setdefault(cat, []).append(issue)

    for cat, cat_issues in by_category.items():
        console.print(Text(f"\n{cat}", style="bold"))
        for issue in cat_issues:
            sev = str(issue.get("severity", "warning"))
            style = severity_styles.get(sev, "")
            line = Text("  ")
            line.append(sev, style=style)
            path = issue.get("path")
            if path:
                line.append(" ")
                line.append(str(path), style="post.path")
            line.append(": ")
            line.append(str(issue.get("message", "")))
            console.print(line)
            if verbose and issue.get("fix_action"):
                console.print(f"    fix: {issue['fix_action']}")

    errors = result.data.get("error_count", sum(1 for i in issues if i.get("severity") == "error"))
    warnings = result.data.get("warning_count", count - errors)
    console.print(f"\n{errors} errors, {warnings} warnings")


def _render_fix(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render fix results."""
    _status_line(console, result)
    fixes = result.data.get("fixes", [])
    _field(console, "fixes_applied", result.data.get("count", len(fixes)))
    if verbose:
        for fix in fixes:
            console.print(f"  - {fix}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_mutation(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render create_entry results."""
    _status_line(console, result)
    for key in ("slug", "path", "title", "section", "date", "format"):
        if key in result.data:
            _field(console, key, result.data[key])


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":"), default=str))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Query
    "list_entries": _render_entry_list,
    "get": _render_single_entry,
    "taxonomy": _render_taxonomy,
    "sections": _render_sections,
    # Check
    "check": _render_check,
    "fix": _render_fix,
    # Mutations
    "create_entry": _render_mutation,
}
