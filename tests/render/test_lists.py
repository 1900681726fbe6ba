"""Tests for list rendering and the stock per-record templates."""

from pathlib import Path

import pytest

from folio.content.models import ContentItem, ExperienceRecord, PostMetadata
from folio.render.lists import experience_entry, post_summary, render_list


def _item(slug: str, **meta: str) -> ContentItem:
    return ContentItem(
        slug=slug,
        metadata=PostMetadata.model_validate(meta),
        body="",
        source_path=Path(f"{slug}.md"),
    )


class TestRenderList:
    def test_empty_sequence(self):
        assert render_list([], str) == ""

    def test_input_order_kept(self):
        assert render_list(["b", "a", "b"], lambda s: f"<{s}>") == "<b><a><b>"

    def test_accepts_generators(self):
        assert render_list((n for n in range(3)), str) == "012"

    def test_template_errors_propagate(self):
        def template(value: int) -> str:
            if value == 2:
                raise ValueError("bad record")
            return str(value)

        with pytest.raises(ValueError, match="bad record"):
            render_list([1, 2, 3], template)


class TestPostSummary:
    def test_fields(self):
        html = post_summary(
            _item("hello", title="Hello", description="World", dateFormatted="Jan 1, 2020")
        )
        assert 'href="/posts/hello/"' in html
        assert ">Hello</a>" in html
        assert '<time datetime="2020-01-01">Jan 1, 2020</time>' in html
        assert "World" in html

    def test_untitled_uses_slug(self):
        html = post_summary(_item("untitled-draft"))
        assert ">untitled-draft</a>" in html
        assert "<time" not in html

    def test_unparseable_date_shown_verbatim(self):
        html = post_summary(_item("x", title="X", dateFormatted="Summer 2020"))
        assert "<time>Summer 2020</time>" in html

    def test_escapes(self):
        html = post_summary(_item("x", title="Generics <T>"))
        assert "Generics &lt;T&gt;" in html


class TestExperienceEntry:
    def test_fields(self):
        record = ExperienceRecord(
            dates="2021 - Present",
            role="iOS Engineer",
            company="Acme & Co",
            description="Shipping SwiftUI.",
            logo="/img/acme.png",
        )
        html = experience_entry(record)
        assert 'src="/img/acme.png"' in html
        assert "iOS Engineer" in html
        assert "Acme &amp; Co" in html
        assert "2021 - Present" in html
        assert "Shipping SwiftUI." in html

    def test_no_logo(self):
        html = experience_entry(ExperienceRecord(dates="2019", role="Dev", company="X"))
        assert "<img" not in html
