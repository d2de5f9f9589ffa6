"""Content entries — front-matter codec, the Entry model, and validation.

An entry file is a delimited metadata block followed by a Markdown body:

- ``+++`` delimiters: TOML (the generator's native format).
- ``---`` delimiters: YAML.

The body is never interpreted here; it is passed through unchanged for the
external renderer.

Pure parsing utilities (``parse_frontmatter``, ``order_frontmatter``,
``render_frontmatter``) live here so that the dependency direction stays
clean: infrastructure -> domain, never the reverse.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any, Literal, Self

import tomlkit
import tomlkit.exceptions
from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from postctl.domain.frontmatter import EntryFrontmatter
from postctl.domain.taxonomies import TAXONOMY_NAMES, validate_label

FrontmatterFormat = Literal["toml", "yaml"]

DELIMITERS: dict[str, FrontmatterFormat] = {"+++": "toml", "---": "yaml"}
_FORMAT_DELIMITER: dict[str, str] = {fmt: delim for delim, fmt in DELIMITERS.items()}

BOM = "\ufeff"

# One physical line with its terminator; the last line may lack one.
_LINE_RE = re.compile(r"[^\n]*\n|[^\n]+\Z")

# ---------------------------------------------------------------------------
# Canonical front-matter key ordering
# ---------------------------------------------------------------------------

CANONICAL_KEY_ORDER: list[str] = [
    "title",
    "description",
    "date",
    "updated",
    "draft",
    "slug",
    "weight",
    "template",
    "taxonomies",
    "extra",
]

KNOWN_KEYS = frozenset(CANONICAL_KEY_ORDER)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FrontmatterError(ValueError):
    """The metadata block could not be decoded."""

    def __init__(self, fmt: str, message: str) -> None:
        super().__init__(f"Invalid {fmt.upper()} front matter: {message}")
        self.fmt = fmt


class EntryError(ValueError):
    """Decoded front matter does not fit the entry schema.

    ``problems`` holds ``(field, message)`` pairs, where ``field`` is the
    dotted location of the offending key (e.g. ``taxonomies.tags.0``).
    """

    def __init__(self, path: Path | None, problems: list[tuple[str, str]]) -> None:
        where = f"{path}: " if path is not None else ""
        summary = "; ".join(f"{loc}: {msg}" for loc, msg in problems)
        super().__init__(f"{where}{summary}")
        self.path = path
        self.problems = problems

    @classmethod
    def from_validation_error(cls, path: Path | None, exc: ValidationError) -> EntryError:
        problems = [
            (".".join(str(part) for part in err["loc"]) or "<root>", err["msg"])
            for err in exc.errors()
        ]
        return cls(path, problems)


# ---------------------------------------------------------------------------
# Codec helpers
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh round-trip YAML parser.

    ruamel's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.preserve_quotes = True
    y.default_flow_style = False
    return y


def _decode_toml(block: str) -> dict[str, Any]:
    try:
        return tomlkit.parse(block).unwrap()
    except tomlkit.exceptions.TOMLKitError as exc:
        raise FrontmatterError("toml", str(exc)) from exc


def _decode_yaml(block: str) -> dict[str, Any]:
    try:
        data = _new_yaml().load(block)
    except YAMLError as exc:
        raise FrontmatterError("yaml", str(exc)) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontmatterError("yaml", f"expected a mapping, got {type(data).__name__}")
    return data


def _split(content: str) -> tuple[FrontmatterFormat | None, str, str]:
    """Split *content* into ``(format, block, body)``.

    Only the delimiter lines are interpreted; the block and body are sliced
    from the original text, so line endings survive untouched. A leading
    byte-order mark is ignored.

    Returns ``(None, "", content)`` when there is no complete block.
    """
    text = content.removeprefix(BOM)
    lines = _LINE_RE.findall(text)
    fmt = DELIMITERS.get(lines[0].strip()) if lines else None
    if fmt is None:
        return None, "", content

    delimiter = _FORMAT_DELIMITER[fmt]
    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == delimiter:
            end_idx = i
            break

    if end_idx is None:
        return None, "", content

    block = "".join(lines[1:end_idx])
    body = "".join(lines[end_idx + 1 :])
    for blank in ("\r\n", "\n"):
        if body.startswith(blank):
            body = body[len(blank) :]
            break
    return fmt, block, body


# ---------------------------------------------------------------------------
# Pure parsing / rendering utilities
# ---------------------------------------------------------------------------


def detect_format(content: str) -> FrontmatterFormat | None:
    """Return the front-matter format of *content*, or None if it has no block."""
    fmt, _block, _body = _split(content)
    return fmt


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse the metadata block and body from markdown content.

    The first line must be ``+++`` (TOML) or ``---`` (YAML); the next line
    holding the same delimiter closes the block. One blank line after the
    block is consumed, everything else is the body.

    Handles both ``\\n`` and ``\\r\\n`` line endings; the body keeps whichever
    the file uses.

    Returns:
        A ``(metadata, body)`` tuple. If no complete block is found,
        returns ``({}, content)``.

    Raises:
        FrontmatterError: The block exists but is not valid TOML/YAML.
    """
    fmt, block, body = _split(content)
    if fmt is None:
        return {}, content
    if fmt == "toml":
        return _decode_toml(block), body
    return _decode_yaml(block), body


def order_frontmatter(fm: dict[str, Any], *, keep_none: bool = False) -> dict[str, Any]:
    """Return *fm* with keys in canonical order.

    Scalar and list values come first, tables (mappings) last, because a
    TOML key written after a table header would land inside that table.
    Within each group, :data:`CANONICAL_KEY_ORDER` keys come first, then
    the rest alphabetically. ``None`` values are omitted unless *keep_none*
    is set; TOML has no null, YAML writes them back as empty values.
    """
    present = [k for k in fm if keep_none or fm[k] is not None]
    ranked = [k for k in CANONICAL_KEY_ORDER if k in present]
    ranked += sorted(k for k in present if k not in KNOWN_KEYS)

    scalars = [k for k in ranked if not isinstance(fm[k], dict)]
    tables = [k for k in ranked if isinstance(fm[k], dict)]
    return {k: fm[k] for k in scalars + tables}


def render_frontmatter(
    frontmatter: dict[str, Any],
    body: str,
    fmt: FrontmatterFormat = "toml",
) -> str:
    """Render a metadata mapping and body text into entry file text.

    Keys are emitted in canonical order (see :func:`order_frontmatter`),
    followed by a blank line and the body.
    """
    ordered = order_frontmatter(frontmatter, keep_none=fmt == "yaml")
    if fmt == "toml":
        block = tomlkit.dumps(ordered)
    elif fmt == "yaml":
        buf = StringIO()
        if ordered:
            _new_yaml().dump(ordered, buf)
        block = buf.getvalue()
    else:
        msg = f"Unknown front-matter format: {fmt!r}"
        raise ValueError(msg)

    if block and not block.endswith("\n"):
        block += "\n"
    delimiter = _FORMAT_DELIMITER[fmt]
    parts = [delimiter, "\n", block, delimiter, "\n", "\n"]
    if body:
        parts.append(body)
    return "".join(parts)


# ---------------------------------------------------------------------------
# Entry
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Entry:
    """One content file: decoded front matter plus the untouched body.

    Attributes:
        path: Location relative to the content root.
        section: Content-type directory (first path component), ``""`` for
            files directly under the content root.
        frontmatter: Typed metadata.
        body: Markdown body.
        fmt: Front-matter format the file was written in.
        raw: The decoded mapping exactly as found (key order included).
    """

    path: Path
    section: str
    frontmatter: EntryFrontmatter
    body: str
    fmt: FrontmatterFormat | None = None
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str | None:
        return self.frontmatter.title

    @property
    def date(self) -> dt.date | None:
        return self.frontmatter.date

    @property
    def tags(self) -> list[str]:
        return self.frontmatter.taxonomies.tags

    @property
    def categories(self) -> list[str]:
        return self.frontmatter.taxonomies.categories

    @property
    def template(self) -> str | None:
        return self.frontmatter.template

    @property
    def draft(self) -> bool:
        return self.frontmatter.draft

    @property
    def slug(self) -> str:
        """Explicit ``slug`` key, else the file stem (bundle directory for ``index.md``)."""
        if self.frontmatter.slug:
            return self.frontmatter.slug
        if self.path.stem == "index" and len(self.path.parts) > 1:
            return self.path.parent.name
        return self.path.stem

    @classmethod
    def from_text(cls, content: str, *, path: Path, section: str | None = None) -> Self:
        """Decode file text into an Entry.

        Raises:
            FrontmatterError: The block is not valid TOML/YAML.
            EntryError: The decoded mapping does not fit the schema.
        """
        fmt = detect_format(content)
        raw, body = parse_frontmatter(content)
        try:
            fm = EntryFrontmatter.model_validate(dict(raw))
        except ValidationError as exc:
            raise EntryError.from_validation_error(path, exc) from exc
        if section is None:
            section = path.parts[0] if len(path.parts) > 1 else ""
        return cls(path=path, section=section, frontmatter=fm, body=body, fmt=fmt, raw=raw)

    def summary(self) -> dict[str, Any]:
        """JSON-friendly listing row."""
        return {
            "slug": self.slug,
            "title": self.title or "",
            "date": self.date.isoformat() if self.date else None,
            "section": self.section,
            "path": self.path.as_posix(),
            "categories": list(self.categories),
            "tags": list(self.tags),
            "draft": self.draft,
        }

    def detail(self) -> dict[str, Any]:
        """Listing row plus the remaining metadata and the body."""
        fm = self.frontmatter
        data = self.summary()
        data.update(
            {
                "description": fm.description,
                "updated": fm.updated.isoformat() if fm.updated else None,
                "weight": fm.weight,
                "template": fm.template,
                "format": self.fmt,
                "body": self.body,
            }
        )
        return data


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Issue:
    """A single data-shape problem found on an entry."""

    category: str
    severity: Literal["error", "warning"]
    message: str


@dataclass(frozen=True)
class ValidationResult:
    """Result of a content validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _plain(value: Any) -> Any:
    """Strip codec-specific container and scalar types for comparison."""
    if isinstance(value, dict):
        return {str(k): _plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_plain(v) for v in value]
    if isinstance(value, str):
        return str(value)
    return value


def round_trips(entry: Entry) -> bool:
    """True if re-serializing *entry* reproduces the same keys, values and body."""
    rendered = render_frontmatter(dict(entry.raw), entry.body, entry.fmt or "toml")
    fm, body = parse_frontmatter(rendered)
    return _plain(fm) == _plain(entry.raw) and body == entry.body


def has_canonical_order(entry: Entry) -> bool:
    """True if the file's keys are already in canonical order."""
    return list(entry.raw) == list(order_frontmatter(entry.raw, keep_none=True))


def entry_issues(
    entry: Entry,
    *,
    dated: bool,
    allow_unknown_keys: bool = False,
) -> list[Issue]:
    """Collect the data-shape problems of one decoded entry.

    Args:
        entry: The entry to inspect.
        dated: Whether the entry's section requires ``title`` and ``date``.
        allow_unknown_keys: Suppress warnings for unrecognized top-level keys.
    """
    issues: list[Issue] = []
    fm = entry.frontmatter

    if entry.fmt is None:
        issues.append(Issue("structure", "warning", "No front-matter block"))

    if dated:
        if fm.title is None or not fm.title.strip():
            issues.append(Issue("required_fields", "error", "Missing title"))
        if fm.date is None:
            issues.append(Issue("required_fields", "error", "Missing date"))
    elif fm.title is not None and not fm.title.strip():
        issues.append(Issue("required_fields", "error", "Empty title"))

    if fm.date is not None and fm.updated is not None and fm.updated < fm.date:
        issues.append(
            Issue("dates", "warning", f"updated ({fm.updated}) is earlier than date ({fm.date})")
        )

    for name in TAXONOMY_NAMES:
        labels: list[str] = getattr(fm.taxonomies, name)
        seen: set[str] = set()
        for label in labels:
            for problem in validate_label(label):
                issues.append(Issue("taxonomy", "error", f"{name}: {problem}"))
            if label != label.strip() and label.strip():
                issues.append(
                    Issue("taxonomy", "warning", f"{name}: label {label!r} has surrounding spaces")
                )
            if label in seen:
                issues.append(Issue("taxonomy", "warning", f"{name}: duplicate label {label!r}"))
            seen.add(label)

    for name in fm.taxonomies.unknown_names():
        issues.append(Issue("taxonomy", "warning", f"Unknown taxonomy {name!r}"))

    if not allow_unknown_keys:
        for key in fm.unknown_keys():
            issues.append(Issue("structure", "warning", f"Unknown front-matter key {key!r}"))

    return issues


def validate_entry(
    entry: Entry,
    *,
    dated: bool,
    allow_unknown_keys: bool = False,
) -> ValidationResult:
    """Business-rule validation of one entry, flattened to messages."""
    issues = entry_issues(entry, dated=dated, allow_unknown_keys=allow_unknown_keys)
    errors = [i.message for i in issues if i.severity == "error"]
    warnings = [i.message for i in issues if i.severity == "warning"]
    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
