"""Content models, front-matter parsing and collection loading."""

from folio.content.loader import (
    by_date_desc,
    load_collection,
    load_experience,
    slugify,
    sort_by_date,
)
from folio.content.models import ContentItem, ExperienceRecord, PostMetadata
from folio.content.parser import ParsedContent, parse_content, serialize_front_matter

__all__ = [
    "ContentItem",
    "ExperienceRecord",
    "ParsedContent",
    "PostMetadata",
    "by_date_desc",
    "load_collection",
    "load_experience",
    "parse_content",
    "serialize_front_matter",
    "slugify",
    "sort_by_date",
]
