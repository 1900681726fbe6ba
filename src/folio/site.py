"""Site pipeline: posts + experience data → static HTML pages.

Every page is rendered in memory before anything is written, so a failure
anywhere leaves the output directory untouched.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from markupsafe import Markup
from pydantic import BaseModel, Field

from folio.config import FolioConfig
from folio.content.loader import by_date_desc, load_collection, load_experience, load_item
from folio.content.models import ContentItem, ExperienceRecord
from folio.render.layouts import LayoutCompositor
from folio.render.lists import experience_entry, post_summary, render_list
from folio.render.markdown import render_markdown

logger = logging.getLogger(__name__)

INDEX_FILENAME = "index.html"


class RenderedPage(BaseModel):
    """A finished document and where it goes, relative to the output root."""

    path: Path
    html: str


class BuildReport(BaseModel):
    """Summary of a completed build."""

    output_dir: Path
    posts: list[str] = Field(default_factory=list)
    pages: list[Path] = Field(default_factory=list)
    experience_count: int = 0

    @property
    def page_count(self) -> int:
        return len(self.pages)


def _atomic_write(path: Path, content: str) -> None:
    """Write ``content`` to ``path`` via a temp file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp, path)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise


def post_output_path(item: ContentItem) -> Path:
    return Path("posts") / item.slug / INDEX_FILENAME


def render_post(compositor: LayoutCompositor, item: ContentItem) -> RenderedPage:
    """Render one post through the shell named by its ``layout``."""
    html = compositor.compose(
        item.metadata.layout,
        item.metadata,
        render_markdown(item.body),
        slug=item.slug,
        url=item.url,
    )
    return RenderedPage(path=post_output_path(item), html=html)


def render_index(
    compositor: LayoutCompositor,
    posts: list[ContentItem],
    title: str = "",
) -> RenderedPage:
    """Render the post listing, in the order given."""
    listing = render_list(posts, post_summary)
    metadata = {
        "title": title or compositor.site.title,
        "description": compositor.site.description,
    }
    html = compositor.compose("index", metadata, listing, posts=posts, url="/")
    return RenderedPage(path=Path(INDEX_FILENAME), html=html)


def render_about(
    compositor: LayoutCompositor,
    experience: list[ExperienceRecord],
    intro: ContentItem | None = None,
) -> RenderedPage:
    """Render the About page from the experience list and optional intro."""
    listing = render_list(experience, experience_entry)
    metadata: dict[str, str] = {"title": "About Me", "description": ""}
    intro_html = ""
    if intro is not None:
        metadata["title"] = intro.metadata.title or metadata["title"]
        metadata["description"] = intro.metadata.description
        intro_html = render_markdown(intro.body)
    html = compositor.compose(
        "about",
        metadata,
        listing,
        intro=Markup(intro_html),
        experience=experience,
        url="/about/",
    )
    return RenderedPage(path=Path("about") / INDEX_FILENAME, html=html)


def build_site(config: FolioConfig) -> BuildReport:
    """Run a full build.

    Loads posts newest-first, renders each post, the index and the About
    page, then writes all pages. Any error aborts before the first write.

    Args:
        config: Resolved site configuration.

    Returns:
        BuildReport describing the written pages.

    Raises:
        FolioError: On the first malformed post, unreadable file, or
            missing layout.
    """
    content = config.content
    output_dir = Path(config.output.directory)
    compositor = LayoutCompositor(config.templates.path, site=config.site)

    posts = load_collection(content.posts_path, content.extension, sort_key=by_date_desc)
    compositor.require_layouts(posts)

    pages: list[RenderedPage] = [render_post(compositor, item) for item in posts]
    pages.append(render_index(compositor, posts))

    experience: list[ExperienceRecord] = []
    if content.experience_path.exists():
        experience = load_experience(content.experience_path)
    else:
        logger.info("No experience data at %s", content.experience_path)
    intro = load_item(content.about_path) if content.about_path.exists() else None
    pages.append(render_about(compositor, experience, intro))

    report = BuildReport(
        output_dir=output_dir,
        posts=[p.slug for p in posts],
        experience_count=len(experience),
    )
    for page in pages:
        target = output_dir / page.path
        _atomic_write(target, page.html)
        report.pages.append(page.path)
        logger.debug("Wrote %s", target)

    logger.info("Built %d page(s) into %s", report.page_count, output_dir)
    return report
