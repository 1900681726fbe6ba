"""Content domain models: pure Pydantic v2 data types.

Posts are parsed from Markdown files with a front-matter block; the About
page is driven by a JSON list of experience records. No I/O here.
"""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

# Accepted spellings of ``dateFormatted``, tried in order.
DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%Y-%m-%d")

DEFAULT_LAYOUT = "post"

FRONT_MATTER_KEYS = ("layout", "title", "description", "dateFormatted")


def parse_display_date(value: str) -> date | None:
    """Parse a human-formatted date such as ``Jan 1, 2020``.

    Returns None when the value is empty or matches no known format.
    """
    value = (value or "").strip()
    if not value:
        return None
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue
    return None


class PostMetadata(BaseModel):
    """Typed front-matter of a post.

    Known keys map onto named fields with defaults; anything else is kept
    verbatim in ``extra``.
    """

    model_config = ConfigDict(frozen=True)

    layout: str = DEFAULT_LAYOUT
    title: str = ""
    description: str = ""
    date_formatted: str = Field(default="", alias="dateFormatted")
    extra: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra(cls, data: Any) -> Any:
        """Split raw front-matter into named fields and ``extra``.

        Only the front-matter spellings count as known keys; anything else,
        including ``extra`` or ``date_formatted``, is an ordinary extra key.
        """
        if not isinstance(data, dict):
            return data
        fields = {key: data[key] for key in FRONT_MATTER_KEYS if key in data}
        extra = {key: str(value) for key, value in data.items() if key not in FRONT_MATTER_KEYS}
        if not fields.get("layout"):
            fields["layout"] = DEFAULT_LAYOUT
        return {**fields, "extra": extra}

    @property
    def date(self) -> date | None:
        return parse_display_date(self.date_formatted)

    def to_front_matter(self) -> dict[str, str]:
        """Return the mapping as it appears in a front-matter block."""
        fm: dict[str, str] = {"layout": self.layout}
        if self.title:
            fm["title"] = self.title
        if self.description:
            fm["description"] = self.description
        if self.date_formatted:
            fm["dateFormatted"] = self.date_formatted
        fm.update(self.extra)
        return fm


class ContentItem(BaseModel):
    """A single post read from the content directory."""

    model_config = ConfigDict(frozen=True)

    slug: str
    metadata: PostMetadata
    body: str
    source_path: Path = Path(".")

    @property
    def url(self) -> str:
        return f"/posts/{self.slug}/"


class ExperienceRecord(BaseModel):
    """One entry of the About page experience list."""

    model_config = ConfigDict(frozen=True)

    dates: str
    role: str
    company: str
    description: str = ""
    logo: str = ""
