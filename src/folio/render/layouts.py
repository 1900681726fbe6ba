"""Layout composition: wrap a rendered body in a shared page shell.

Shells are Jinja2 templates named ``<layout>.html``. A user templates
directory, when configured, is searched before the packaged defaults so a
site can override any shell.
"""

from __future__ import annotations

import datetime as dt
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    TemplateNotFound,
)
from markupsafe import Markup

from folio.config import SiteConfig
from folio.content.models import ContentItem, PostMetadata
from folio.errors import LayoutNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".html"


def _template_name(shell: str) -> str:
    return shell if shell.endswith(TEMPLATE_SUFFIX) else f"{shell}{TEMPLATE_SUFFIX}"


class LayoutCompositor:
    """Render page shells around body fragments."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        site: SiteConfig | None = None,
        year: int | None = None,
    ) -> None:
        loaders = []
        self.search_path: list[str] = []
        if templates_dir is not None:
            loaders.append(FileSystemLoader(templates_dir))
            self.search_path.append(str(templates_dir))
        loaders.append(PackageLoader("folio", "templates"))
        self.search_path.append("folio/templates")

        self.site = site or SiteConfig()
        self.year = year if year is not None else dt.date.today().year
        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def has_layout(self, shell: str) -> bool:
        """Whether a template exists for ``shell``."""
        try:
            self.env.get_template(_template_name(shell))
        except TemplateNotFound:
            return False
        return True

    def require_layouts(self, items: Iterable[ContentItem]) -> None:
        """Check every item's layout up front.

        Raises:
            LayoutNotFoundError: Naming the first item whose layout is missing.
        """
        for item in items:
            if not self.has_layout(item.metadata.layout):
                raise LayoutNotFoundError(item.metadata.layout, self.search_path, item.source_path)

    def compose(
        self,
        shell: str,
        metadata: PostMetadata | Mapping[str, str],
        body: str,
        **extra: Any,
    ) -> str:
        """Render ``body`` inside the shell named ``shell``.

        Args:
            shell: Layout identifier, e.g. ``"post"``.
            metadata: Post metadata or a plain mapping; ``title`` and
                ``description`` go into the document head.
            body: Already-rendered HTML fragment for the content region.
            **extra: Additional template variables.

        Returns:
            The complete HTML document.

        Raises:
            LayoutNotFoundError: If no template exists for ``shell``.
        """
        name = _template_name(shell)
        try:
            template = self.env.get_template(name)
        except TemplateNotFound as exc:
            raise LayoutNotFoundError(shell, self.search_path) from exc

        if isinstance(metadata, PostMetadata):
            page = metadata
            title, description = metadata.title, metadata.description
        else:
            page = dict(metadata)
            title = metadata.get("title", "")
            description = metadata.get("description", "")

        logger.debug("Composing %s with title %r", name, title)
        context = {
            "site": self.site,
            "page": page,
            "title": title,
            "description": description,
            "body": Markup(body),
            "year": self.year,
        }
        context.update(extra)
        return template.render(**context)
