"""Collection loading: posts directory → ContentItem list, JSON → experience.

Pure reads. Nothing is cached; a rebuild re-reads every file.
"""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from folio.content.models import ContentItem, ExperienceRecord, PostMetadata
from folio.content.parser import parse_content
from folio.errors import ContentLoadError, MalformedContentError

logger = logging.getLogger(__name__)

SortKey = Callable[[ContentItem], Any]


def slugify(name: str) -> str:
    """Derive a URL-safe slug from a filename stem.

    Accented letters are folded to ASCII (``Café`` → ``cafe``).
    """
    ascii_name = unicodedata.normalize("NFKD", name or "").encode("ascii", "ignore").decode("ascii")
    cleaned = re.sub(r"[^a-z0-9]+", "-", ascii_name.lower()).strip("-")
    return cleaned or "post"


def by_date_desc(item: ContentItem) -> tuple[int, int, str]:
    """Sort key: newest first, undated posts last, ties by filename."""
    parsed = item.metadata.date
    if parsed is None:
        return (1, 0, item.source_path.name)
    return (0, -parsed.toordinal(), item.source_path.name)


def sort_by_date(items: Iterable[ContentItem]) -> list[ContentItem]:
    """Return ``items`` ordered newest-first. Idempotent."""
    return sorted(items, key=by_date_desc)


def load_item(path: Path) -> ContentItem:
    """Read and parse a single content file.

    Raises:
        ContentLoadError: If the file cannot be read or decoded.
        MalformedContentError: If its front-matter is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentLoadError(f"could not read file ({exc})", path) from exc

    parsed = parse_content(text, source=path)
    try:
        metadata = PostMetadata.model_validate(parsed.metadata)
    except ValidationError as exc:
        raise MalformedContentError(f"invalid front-matter ({exc})", path) from exc

    return ContentItem(
        slug=slugify(path.stem),
        metadata=metadata,
        body=parsed.body,
        source_path=path,
    )


def load_collection(
    directory: Path,
    extension: str = ".md",
    sort_key: SortKey | None = None,
) -> list[ContentItem]:
    """Load every content file in ``directory``.

    Files are visited in filename order so the result does not depend on
    the platform's directory listing order.

    Args:
        directory: Directory holding the content files (not recursive).
        extension: Suffix filter, with or without the leading dot.
        sort_key: Optional key to re-sort the loaded items, e.g.
            :func:`by_date_desc`.

    Returns:
        One ContentItem per matching file.

    Raises:
        ContentLoadError: If the directory is unreadable or two files map
            to the same slug.
        MalformedContentError: If any file has invalid front-matter.
    """
    if not extension.startswith("."):
        extension = f".{extension}"

    try:
        entries = sorted(p for p in directory.iterdir() if p.is_file())
    except OSError as exc:
        raise ContentLoadError(f"could not list directory ({exc})", directory) from exc

    items: list[ContentItem] = []
    seen: dict[str, Path] = {}
    for path in entries:
        if path.suffix.lower() != extension.lower():
            continue
        item = load_item(path)
        if item.slug in seen:
            raise ContentLoadError(
                f"slug {item.slug!r} already used by {seen[item.slug].name}", path
            )
        seen[item.slug] = path
        items.append(item)
        logger.debug("Loaded %s as %s", path.name, item.slug)

    logger.info("Loaded %d item(s) from %s", len(items), directory)

    if sort_key is not None:
        items.sort(key=sort_key)
    return items


def load_experience(path: Path) -> list[ExperienceRecord]:
    """Read the experience list from a JSON array, keeping file order.

    Raises:
        ContentLoadError: If the file is unreadable, not valid JSON, or not
            an array of experience objects.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ContentLoadError(f"could not read experience data ({exc})", path) from exc
    except json.JSONDecodeError as exc:
        raise ContentLoadError(f"invalid JSON ({exc})", path) from exc

    if not isinstance(raw, list):
        raise ContentLoadError("experience data must be a JSON array", path)

    records: list[ExperienceRecord] = []
    for index, entry in enumerate(raw):
        try:
            records.append(ExperienceRecord.model_validate(entry))
        except ValidationError as exc:
            raise ContentLoadError(f"entry {index} is not a valid experience record ({exc})", path) from exc

    logger.info("Loaded %d experience record(s) from %s", len(records), path)
    return records

