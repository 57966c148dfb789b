# tests/test_html_parser.py
"""
Tests for the HTML parser and its structural walker.

Verifies:
1. Malformed fragments parse permissively
2. Every element kind renders to the canonical markup
3. Data URI images become placeholders; external images pass through
4. Superscript footnote detection
5. HTML-specific field rules
"""

from __future__ import annotations

import re

import pytest

from lo_importer import TitleExtractionError, parse_html
from lo_importer.ingestion.parser.plugins.html import HtmlParser, visible_text
from lo_importer.ingestion.source import SourceDocument


# =============================================================================
# Field Heuristics
# =============================================================================


class TestHtmlFields:
    """Title, author and abstract recovered from HTML fragments."""

    def test_heading_title_and_label_author(self):
        doc = parse_html(
            "<h1>My Title</h1><p>Author: Jane Doe</p>"
            "<p>A paragraph that is long enough to count.</p>"
        )

        assert doc.title == "My Title"
        assert doc.author == "Jane Doe"

    def test_meta_author_wins(self):
        doc = parse_html(
            '<meta name="Author" content="Ann Writer"><p>Title</p><p>By John Smith</p>'
        )

        assert doc.author == "Ann Writer"

    def test_byline_author(self):
        doc = parse_html("<p>Essay</p><p>By John Smith</p>")

        assert doc.author == "John Smith"

    def test_first_paragraph_title(self):
        doc = parse_html("<p>  Short   title </p><p>Body text that is long enough to count.</p>")

        assert doc.title == "Short title"
        assert doc.abstract == "Body text that is long enough to count."

    def test_long_first_paragraph_is_not_skipped_for_abstract(self):
        long_text = ("word " * 50).strip()
        doc = parse_html(f"<p>{long_text}</p><p>Another paragraph that is long enough.</p>")

        assert doc.title == long_text[:200].strip()
        assert doc.abstract == f"{long_text}\n\nAnother paragraph that is long enough."

    def test_abstract_prefix_stripped(self):
        doc = parse_html(
            "<h1>Paper</h1><p>Intro line that is skipped as title.</p>"
            "<p>Abstract: We study the thing in detail.</p>"
        )

        assert doc.abstract == "We study the thing in detail."

    def test_script_text_never_becomes_title(self):
        doc = parse_html("<script>var title = 1;</script><div>Visible heading text</div>")

        assert doc.title == "Visible heading text"

    def test_no_title_raises(self):
        with pytest.raises(TitleExtractionError):
            parse_html("<p> </p><!-- only a comment -->")


# =============================================================================
# Structural Walk
# =============================================================================


class TestHtmlWalker:
    """Element kinds rendered by the HTML walker."""

    def test_scenario_d_unclosed_bold(self):
        """Malformed markup still yields a Document."""
        doc = parse_html("<h1>Broken</h1><p>Some <b>bold text never closed</p><p>Next paragraph</p>")

        assert doc.title == "Broken"
        assert "<strong>bold text never closed</strong>" in doc.content
        assert "Next paragraph" in doc.content

    def test_title_block_kept(self):
        doc = parse_html("<h1>Kept Title</h1><p>Body</p>")

        assert doc.content == "<h1>Kept Title</h1>\n<p>Body</p>"

    def test_emphasis_family(self):
        doc = parse_html(
            "<p>T</p><p><b>b</b> <strong>s</strong> <i>i</i> <em>e</em> <u>u</u> "
            "<s>x</s> <strike>y</strike> <del>z</del> <code>c</code></p>"
        )

        assert (
            "<p><strong>b</strong> <strong>s</strong> <em>i</em> <em>e</em> <u>u</u> "
            "<del>x</del> <del>y</del> <del>z</del> <code>c</code></p>"
        ) in doc.content

    def test_nested_emphasis(self):
        doc = parse_html("<p>T</p><p><i>a <b>b</b></i></p>")

        assert "<em>a <strong>b</strong></em>" in doc.content

    def test_formatting_disabled(self, options_for):
        doc = parse_html("<p>T</p><p>A <b>bold</b> <sub>2</sub></p>", options=options_for("plain"))

        assert "<p>A bold <sub>2</sub></p>" in doc.content

    def test_headings_and_empty_heading(self):
        doc = parse_html("<h3>Third</h3><h2> </h2><p>Body</p>")

        assert "<h3>Third</h3>" in doc.content
        assert "<h2>" not in doc.content

    def test_links(self):
        doc = parse_html(
            '<p>T</p><p><a href="http://x.com/a?b=1&amp;c=2">x</a> '
            '<a>none</a> <a href="javascript:alert(1)">js</a></p>'
        )

        assert '<a href="http://x.com/a?b=1&amp;c=2">x</a>' in doc.content
        assert "none js" in doc.content
        assert "javascript" not in doc.content

    def test_lists_drop_whitespace_between_items(self):
        doc = parse_html("<p>T</p><ul>\n  <li>One</li>\n  <li>Two</li>\n</ul><ol><li>First</li></ol>")

        assert "<ul>\n<li>One</li>\n<li>Two</li>\n</ul>" in doc.content
        assert "<ol>\n<li>First</li>\n</ol>" in doc.content

    def test_table(self):
        doc = parse_html(
            "<p>T</p><table>\n<thead><tr><th>H</th></tr></thead>\n"
            "<tbody><tr><td>v</td></tr></tbody></table>"
        )

        assert (
            "<table>\n<thead>\n<tr>\n<th>H</th>\n</tr>\n</thead>\n"
            "<tbody>\n<tr>\n<td>v</td>\n</tr>\n</tbody>\n</table>"
        ) in doc.content

    def test_breaks_rules_quotes_and_pre(self):
        doc = parse_html(
            "<p>T</p><p>a<br>b</p><hr><blockquote>Quoted</blockquote><pre>x = 1</pre>"
        )

        assert "<p>a<br />b</p>" in doc.content
        assert "<hr />" in doc.content
        assert "<blockquote>Quoted</blockquote>" in doc.content
        assert "<pre>x = 1</pre>" in doc.content

    def test_non_content_skipped(self):
        doc = parse_html(
            "<p>T</p><script>alert(1)</script><style>p { color: red }</style>"
            "<!-- hidden --><p>Shown</p>"
        )

        assert "alert" not in doc.content
        assert "color" not in doc.content
        assert "hidden" not in doc.content
        assert "<p>Shown</p>" in doc.content

    def test_root_text_dropped(self):
        doc = parse_html("stray text<p>Title para</p><div>div text <span>kept</span></div>")

        assert "stray" not in doc.content
        assert "div text kept" in doc.content

    def test_unknown_tags_descend(self):
        doc = parse_html("<p>T</p><custom-box><p>Inside</p></custom-box>")

        assert "<p>Inside</p>" in doc.content

    def test_text_escaped(self):
        doc = parse_html("<p>T</p><p>a &lt; b &amp; c</p>")

        assert "<p>a &lt; b &amp; c</p>" in doc.content

    def test_plain_superscript_and_subscript(self):
        doc = parse_html("<p>T</p><p>4<sup>th</sup> H<sub>2</sub>O</p>")

        assert "<p>4<sup>th</sup> H<sub>2</sub>O</p>" in doc.content
        assert dict(doc.footnotes) == {}


# =============================================================================
# Images
# =============================================================================


class TestHtmlImages:
    """Data URI extraction and external image pass-through."""

    def test_scenario_b_data_uri(self, png_data_uri):
        doc = parse_html(f'<p>Title Here</p><p><img src="{png_data_uri}" alt="Logo"></p>')

        assert doc.images[1].extension == "png"
        assert doc.images[1].data == b"\x89PNG\r\n\x1a\n"
        assert "{{IMAGE_1}}" in doc.content
        assert '<img src="{{IMAGE_1}}" alt="Logo" />' in doc.content

    def test_ids_follow_document_order(self, test_config, png_data_uri):
        gif = test_config["samples"]["gif_data_uri"]
        doc = parse_html(f'<p>T</p><img src="{gif}"><p><img src="{png_data_uri}"></p>')

        assert doc.images[1].extension == "gif"
        assert doc.images[2].extension == "png"
        assert '<img src="{{IMAGE_2}}" alt="Image 2" />' in doc.content

    def test_external_image_kept_not_extracted(self):
        doc = parse_html('<p>T</p><p><img src="https://example.com/a.png" alt="ext"></p>')

        assert dict(doc.images) == {}
        assert '<img src="https://example.com/a.png" alt="ext" />' in doc.content

    def test_relative_and_undecodable_sources_dropped(self):
        doc = parse_html(
            '<p>T</p><p>x<img src="a.png"><img src="data:image/png;base64,@@@"></p>'
        )

        assert dict(doc.images) == {}
        assert "<img" not in doc.content

    def test_import_images_disabled(self, options_for, png_data_uri):
        doc = parse_html(
            f'<p>T</p><p><img src="{png_data_uri}"><img src="https://example.com/b.png"></p>',
            options=options_for("no_images"),
        )

        assert dict(doc.images) == {}
        assert "{{IMAGE_" not in doc.content
        assert 'src="https://example.com/b.png"' in doc.content

    def test_literal_placeholder_text_is_neutralised(self, png_data_uri):
        doc = parse_html(
            f"<h1>T</h1><p>See {{{{IMAGE_1}}}} here</p>"
            f'<p><a href="{{{{IMAGE_1}}}}">x</a><img src="{png_data_uri}"></p>'
        )

        image_ids = [int(i) for i in re.findall(r"\{\{IMAGE_(\d+)\}\}", doc.content)]
        assert image_ids == [1]
        assert set(doc.images) == {1}
        assert "<p>See &#123;&#123;IMAGE_1&#125;&#125; here</p>" in doc.content
        assert '<a href="&#123;&#123;IMAGE_1&#125;&#125;">x</a>' in doc.content

    def test_literal_placeholder_without_images(self):
        doc = parse_html("<h1>T</h1><p>See {{IMAGE_1}} here for details</p>")

        assert dict(doc.images) == {}
        assert "{{IMAGE_" not in doc.content


# =============================================================================
# Footnotes
# =============================================================================


class TestHtmlFootnotes:
    """Superscript footnote references."""

    def test_numeric_and_link_references(self):
        doc = parse_html(
            '<p>Title</p><p>Claim<sup>[1]</sup> and more<sup><a href="#fn2">2</a></sup>.</p>'
        )

        assert dict(doc.footnotes) == {1: "[1]", 2: '<a href="#fn2">2</a>'}
        assert '<sup><a href="#fn-1" id="fnref-1">[1]</a></sup>' in doc.content
        assert '<sup><a href="#fn-2" id="fnref-2">[2]</a></sup>' in doc.content
        assert '<div class="footnotes"><hr /><ol><li id="fn-1">[1] <a href="#fnref-1">↩</a></li>' in doc.content

    def test_footnote_link_text_reference(self):
        doc = parse_html('<p>Title</p><p>x<sup><a href="#footnote-a">a</a></sup></p>')

        assert doc.footnote_count == 1

    def test_no_images_extracted_from_footnotes(self, png_data_uri):
        doc = parse_html(f'<p>Title</p><p>x<sup>3<img src="{png_data_uri}"></sup></p>')

        assert doc.footnote_count == 1
        assert dict(doc.images) == {}

    def test_block_omitted_when_disabled(self, options_for):
        doc = parse_html("<p>Title</p><p>x<sup>1</sup></p>", options=options_for("no_footnotes"))

        assert doc.footnote_count == 1
        assert 'id="fnref-1"' in doc.content
        assert 'class="footnotes"' not in doc.content

    def test_bijection(self, png_data_uri):
        doc = parse_html(
            f'<p>T</p><p>a<sup>1</sup><img src="{png_data_uri}"></p>'
            f'<p>b<sup>[2]</sup><img src="{png_data_uri}"><sup>note</sup></p>'
        )

        image_ids = {int(i) for i in re.findall(r"\{\{IMAGE_(\d+)\}\}", doc.content)}
        note_ids = {int(i) for i in re.findall(r'id="fnref-(\d+)"', doc.content)}
        assert image_ids == set(doc.images) == {1, 2}
        assert note_ids == set(doc.footnotes) == {1, 2}


# =============================================================================
# Parser Contract
# =============================================================================


class TestHtmlParserContract:
    def test_plugin_attributes(self):
        parser = HtmlParser()
        source = SourceDocument(uri="paste", payload="<p>T</p>", extension=".htm")

        assert parser.plugin_name == "html"
        assert parser.can_parse(source)

    def test_bytes_payload(self):
        doc = parse_html("<p>Café title</p>".encode("utf-8"))

        assert doc.title == "Café title"

    def test_idempotent(self, png_data_uri):
        fragment = f'<h1>T</h1><p>By Ann Lee</p><p>x<sup>1</sup><img src="{png_data_uri}"></p>'

        assert parse_html(fragment).to_dict(True) == parse_html(fragment).to_dict(True)

    def test_visible_text_breaks_blocks(self):
        from bs4 import BeautifulSoup

        soup = BeautifulSoup("<div>a<p>b</p><span>c</span></div>", "html.parser")

        assert visible_text(soup).split("\n") == ["", "a", "b", "c", ""]
