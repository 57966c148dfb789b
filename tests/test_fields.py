# tests/test_fields.py
"""
Tests for the Heuristic Field Extractor.

The extractor only sees a TextOutline, so these tests exercise the rules
without building any document.
"""

from __future__ import annotations

import pytest

from lo_importer.config.schema import ImportOptions
from lo_importer.ingestion.extraction.fields import (
    FieldExtractor,
    TextOutline,
    is_author_line,
)


def outline(*paragraphs: str, headings=(), body_text=None, author="") -> TextOutline:
    return TextOutline(
        headings=list(headings),
        paragraphs=list(paragraphs),
        body_text="\n".join(paragraphs) if body_text is None else body_text,
        metadata_author=author,
    )


@pytest.fixture
def extractor() -> FieldExtractor:
    return FieldExtractor(options=ImportOptions())


# =============================================================================
# Title
# =============================================================================


class TestTitle:
    def test_first_non_empty_heading(self, extractor):
        assert extractor.extract_title(outline("Para", headings=["  ", "Heading"])) == "Heading"

    def test_first_paragraph_under_limit(self, extractor):
        assert extractor.extract_title(outline("", "First", "Second")) == "First"

    def test_paragraph_at_limit_falls_back_to_body_line(self, extractor):
        long_para = "x" * 200
        doc = outline(long_para, body_text=f"\n  {long_para}\nnext")

        assert extractor.extract_title(doc) == "x" * 200

    def test_body_line_truncated(self, extractor):
        doc = outline(body_text="\n" + "y" * 250)

        assert extractor.extract_title(doc) == "y" * 200

    def test_empty(self, extractor):
        assert extractor.extract_title(outline()) == ""


# =============================================================================
# Author
# =============================================================================


class TestAuthor:
    def test_metadata_first(self, extractor):
        assert extractor.extract_author(outline("Author: Jane", author=" Meta ")) == "Meta"

    @pytest.mark.parametrize(
        "line, expected",
        [
            ("Author: Jane Doe", "Jane Doe"),
            ("by: Jane Doe", "Jane Doe"),
            ("WRITTEN BY: jane doe", "jane doe"),
            ("By John Smith", "John Smith"),
            ("by Ada Byron King", "Ada Byron King"),
        ],
    )
    def test_patterns(self, extractor, line, expected):
        assert extractor.extract_author(outline("Title", line)) == expected

    @pytest.mark.parametrize("line", ["By john smith", "By Madonna", "Authored: X", "Author:   "])
    def test_non_matches(self, extractor, line):
        assert extractor.extract_author(outline("Title", line)) == ""

    def test_label_rule_checked_before_byline(self, extractor):
        """The label rule wins even when a byline appears earlier."""
        doc = outline("Title", "By Jane Roe", "Author: John Doe")

        assert extractor.extract_author(doc) == "John Doe"

    def test_window_is_five_non_empty_paragraphs(self, extractor):
        doc = outline("1", "", "2", "3", "4", "5", "Author: Too Late")

        assert extractor.extract_author(doc) == ""

    def test_multi_line_paragraph(self, extractor):
        assert extractor.extract_author(outline("Title\nAuthor: Line Two")) == "Line Two"

    def test_disabled_keeps_metadata(self):
        extractor = FieldExtractor(options=ImportOptions(auto_extract_author=False))

        assert extractor.extract_author(outline("Author: Jane")) == ""
        assert extractor.extract_author(outline("Author: Jane", author="Meta")) == "Meta"

    def test_is_author_line(self):
        assert is_author_line("Written by: Someone")
        assert is_author_line("By Some One")
        assert not is_author_line("Bystanders were present")


# =============================================================================
# Abstract
# =============================================================================


class TestAbstract:
    BODY_1 = "The first paragraph of real body text."
    BODY_2 = "The second paragraph of real body text."
    BODY_3 = "The third paragraph of real body text."
    BODY_4 = "The fourth paragraph of real body text."

    def test_defaults_collect_three(self, extractor):
        doc = outline("Title", self.BODY_1, self.BODY_2, self.BODY_3, self.BODY_4)

        abstract = extractor.extract_abstract(doc, "Title")

        assert abstract == "\n\n".join([self.BODY_1, self.BODY_2, self.BODY_3])

    def test_skips_author_line_after_title(self, extractor):
        doc = outline("Title", "Author: Someone Important", self.BODY_1)

        assert extractor.extract_abstract(doc, "Title") == self.BODY_1

    def test_author_line_only_skipped_right_after_title(self, extractor):
        doc = outline("Title", self.BODY_1, "Author: Someone Important Here")

        assert extractor.extract_abstract(doc, "Title") == (
            f"{self.BODY_1}\n\nAuthor: Someone Important Here"
        )

    def test_skips_paragraph_equal_to_title(self, extractor):
        title = "A title that is longer than twenty characters"
        doc = outline("", "", "Intro", title, self.BODY_1)

        assert extractor.extract_abstract(doc, title) == self.BODY_1

    def test_prefix_stripped_from_first_only(self, extractor):
        doc = outline("Title", "Summary:  " + self.BODY_1, "Overview: " + self.BODY_2)

        assert extractor.extract_abstract(doc, "Title") == (
            f"{self.BODY_1}\n\nOverview: {self.BODY_2}"
        )

    def test_html_long_first_paragraph_kept(self):
        extractor = FieldExtractor(options=ImportOptions(), short_title_line_only=True)
        long_para = "z" * 210

        assert extractor.extract_abstract(outline(long_para), "z" * 200) == long_para

    def test_odt_first_paragraph_always_skipped(self, extractor):
        long_para = "z" * 210

        assert extractor.extract_abstract(outline(long_para), "z" * 200) == ""

    def test_disabled(self):
        extractor = FieldExtractor(options=ImportOptions(auto_extract_abstract=False))

        assert extractor.extract_abstract(outline("Title", self.BODY_1), "Title") == ""

    def test_extract_combines_fields(self, extractor):
        fields = extractor.extract(outline("Title", "By Ann Lee", self.BODY_1))

        assert (fields.title, fields.author, fields.abstract) == ("Title", "Ann Lee", self.BODY_1)
