"""Markdown → HTML conversion, delegated to python-markdown."""

from __future__ import annotations

import markdown

EXTENSIONS = ["fenced_code", "tables", "sane_lists"]


def render_markdown(text: str) -> str:
    """Convert a Markdown body to an HTML fragment."""
    return markdown.markdown(text or "", extensions=EXTENSIONS, output_format="html")
