"""Front-matter parsing for Markdown content files.

A content file starts with a ``---`` line, followed by flat ``key: value``
pairs, followed by another ``---`` line. Everything after that is the body.
Simple key-value parser; no YAML dependency, no nested values.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Mapping, NamedTuple

from folio.errors import MalformedContentError

DELIMITER = "---"

_NEEDS_QUOTES = re.compile(r"""^\s|\s$|^["'#]|:\s|^$""")
_ESCAPE = re.compile(r"\\(.)")


class ParsedContent(NamedTuple):
    metadata: dict[str, str]
    body: str


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        inner = value[1:-1]
        if value[0] == '"':
            inner = _ESCAPE.sub(r"\1", inner)
        return inner
    return value


def _quote(value: str) -> str:
    if not _NEEDS_QUOTES.search(value) and '"' not in value:
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def parse_content(text: str, source: Path | str | None = None) -> ParsedContent:
    """Split ``text`` into its front-matter mapping and body.

    Args:
        text: Full file contents.
        source: Path used in error messages only.

    Returns:
        ParsedContent with the flat metadata mapping and the remaining body.

    Raises:
        MalformedContentError: If the opening delimiter is not the first
            line, the closing delimiter is missing, or a metadata line is
            not a ``key: value`` pair.
    """
    lines = text.removeprefix("\ufeff").splitlines(keepends=True)
    if not lines or lines[0].strip() != DELIMITER:
        raise MalformedContentError("missing opening front-matter delimiter '---'", source)

    metadata: dict[str, str] = {}
    for index, line in enumerate(lines[1:], start=1):
        stripped = line.strip()
        if stripped == DELIMITER:
            body = "".join(lines[index + 1 :])
            return ParsedContent(metadata=metadata, body=body)
        if not stripped or stripped.startswith("#"):
            continue
        key, sep, value = stripped.partition(":")
        key = key.strip()
        if not sep or not key:
            raise MalformedContentError(
                f"line {index + 1}: expected 'key: value', got {stripped!r}", source
            )
        metadata[key] = _unquote(value.strip())

    raise MalformedContentError("front-matter block is never closed with '---'", source)


def serialize_front_matter(metadata: Mapping[str, str]) -> str:
    """Render a mapping as a front-matter block that parses back unchanged.

    Raises:
        ValueError: If a key or value cannot be expressed on a single
            ``key: value`` line.
    """
    lines = [DELIMITER]
    for key, value in metadata.items():
        value = str(value)
        if not key or ":" in key or key != key.strip() or key.startswith("#"):
            raise ValueError(f"Invalid front-matter key: {key!r}")
        if "\n" in value or "\r" in value or "\n" in key:
            raise ValueError(f"Front-matter value for {key!r} must be a single line")
        lines.append(f"{key}: {_quote(value)}")
    lines.append(DELIMITER)
    return "\n".join(lines) + "\n"
