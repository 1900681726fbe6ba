"""Tests for front-matter parsing (no I/O)."""

import pytest

from folio.content.parser import ParsedContent, parse_content, serialize_front_matter
from folio.errors import MalformedContentError

SAMPLE_POST = """\
---
layout: post
title: "Hello"
description: "World"
dateFormatted: "Jan 1, 2020"
---
# Hi

Some text about SwiftUI.
"""


class TestParseContent:
    def test_basic_parsing(self):
        parsed = parse_content(SAMPLE_POST)
        assert parsed.metadata == {
            "layout": "post",
            "title": "Hello",
            "description": "World",
            "dateFormatted": "Jan 1, 2020",
        }

    def test_body_is_remainder(self):
        parsed = parse_content(SAMPLE_POST)
        assert parsed.body == "# Hi\n\nSome text about SwiftUI.\n"

    def test_returns_named_tuple(self):
        parsed = parse_content(SAMPLE_POST)
        assert isinstance(parsed, ParsedContent)
        metadata, body = parsed
        assert metadata["title"] == "Hello"
        assert body.startswith("# Hi")

    def test_single_quotes_stripped(self):
        parsed = parse_content("---\ntitle: 'Combine basics'\n---\n")
        assert parsed.metadata["title"] == "Combine basics"

    def test_unquoted_value_keeps_inner_colons(self):
        parsed = parse_content("---\ntitle: Swift: the good parts\n---\nbody")
        assert parsed.metadata["title"] == "Swift: the good parts"

    def test_unknown_keys_pass_through(self):
        parsed = parse_content("---\nfoo: bar\n---\n")
        assert parsed.metadata == {"foo": "bar"}

    def test_blank_and_comment_lines_ignored(self):
        parsed = parse_content("---\n\n# draft\ntitle: A\n---\n")
        assert parsed.metadata == {"title": "A"}

    def test_empty_block(self):
        parsed = parse_content("---\n---\nBody text")
        assert parsed.metadata == {}
        assert parsed.body == "Body text"

    def test_leading_bom_tolerated(self):
        parsed = parse_content("\ufeff---\ntitle: A\n---\n")
        assert parsed.metadata == {"title": "A"}

    def test_crlf_line_endings(self):
        parsed = parse_content("---\r\ntitle: A\r\n---\r\nbody\r\n")
        assert parsed.metadata == {"title": "A"}
        assert parsed.body == "body\r\n"

    def test_body_may_contain_delimiter(self):
        parsed = parse_content("---\ntitle: A\n---\nabove\n---\nbelow\n")
        assert parsed.body == "above\n---\nbelow\n"


class TestMalformedContent:
    def test_missing_opening_delimiter(self):
        with pytest.raises(MalformedContentError, match="opening"):
            parse_content("title: A\n---\nbody")

    def test_empty_text(self):
        with pytest.raises(MalformedContentError):
            parse_content("")

    def test_delimiter_not_first_line(self):
        with pytest.raises(MalformedContentError):
            parse_content("\n---\ntitle: A\n---\n")

    def test_missing_closing_delimiter(self):
        with pytest.raises(MalformedContentError, match="never closed"):
            parse_content("---\ntitle: A\ndescription: B\n# Body without close\n")

    def test_line_without_separator(self):
        with pytest.raises(MalformedContentError, match="key: value"):
            parse_content("---\ntitle A\n---\n")

    def test_error_names_source(self):
        with pytest.raises(MalformedContentError) as excinfo:
            parse_content("no front-matter", source="posts/bad.md")
        assert "posts/bad.md" in str(excinfo.value)
        assert excinfo.value.source == "posts/bad.md"


class TestSerializeFrontMatter:
    @pytest.mark.parametrize(
        "metadata",
        [
            {"title": "Hello", "description": "World", "dateFormatted": "Jan 1, 2020"},
            {"title": "Swift: the good parts", "layout": "post"},
            {"title": 'She said "hi"', "description": ""},
            {"title": "'quoted'", "note": "# not a comment"},
            {"path": "C:\\Users\\me", "padded": "  spaced  "},
        ],
    )
    def test_round_trip(self, metadata):
        text = serialize_front_matter(metadata) + "body"
        parsed = parse_content(text)
        assert parsed.metadata == metadata
        assert parsed.body == "body"

    def test_plain_values_unquoted(self):
        text = serialize_front_matter({"layout": "post"})
        assert text == "---\nlayout: post\n---\n"

    def test_rejects_multiline_value(self):
        with pytest.raises(ValueError):
            serialize_front_matter({"title": "two\nlines"})

    def test_rejects_key_with_colon(self):
        with pytest.raises(ValueError):
            serialize_front_matter({"a:b": "c"})
