"""List rendering: one markup fragment per record, concatenated in order."""

from __future__ import annotations

import html
from collections.abc import Callable, Iterable
from typing import TypeVar

from folio.content.models import ContentItem, ExperienceRecord

T = TypeVar("T")


def _escape(text: str) -> str:
    return html.escape(text or "", quote=True)


def render_list(records: Iterable[T], template: Callable[[T], str]) -> str:
    """Apply ``template`` to each record and join the fragments.

    No filtering, deduplication or paging. Exceptions raised by
    ``template`` propagate; nothing is returned for a partial list.
    """
    return "".join([template(record) for record in records])


def post_summary(item: ContentItem) -> str:
    """Index entry for a single post."""
    meta = item.metadata
    title = _escape(meta.title or item.slug)
    lines = [
        '<li class="post-summary">',
        f'  <a class="post-title" href="{_escape(item.url)}">{title}</a>',
    ]
    if meta.date_formatted:
        parsed = meta.date
        stamp = f' datetime="{parsed.isoformat()}"' if parsed else ""
        lines.append(f"  <time{stamp}>{_escape(meta.date_formatted)}</time>")
    if meta.description:
        lines.append(f'  <p class="post-description">{_escape(meta.description)}</p>')
    lines.append("</li>\n")
    return "\n".join(lines)


def experience_entry(record: ExperienceRecord) -> str:
    """About page card for a single experience record."""
    lines = ['<li class="experience">']
    if record.logo:
        lines.append(
            f'  <img class="experience-logo" src="{_escape(record.logo)}" '
            f'alt="{_escape(record.company)} logo">'
        )
    lines.append(f'  <h3 class="experience-role">{_escape(record.role)}</h3>')
    lines.append(f'  <p class="experience-company">{_escape(record.company)}</p>')
    lines.append(f'  <p class="experience-dates">{_escape(record.dates)}</p>')
    if record.description:
        lines.append(f'  <p class="experience-description">{_escape(record.description)}</p>')
    lines.append("</li>\n")
    return "\n".join(lines)
