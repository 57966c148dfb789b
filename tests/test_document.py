# tests/test_document.py
"""
Tests for the Document and ImageAsset values.
"""

from __future__ import annotations

import dataclasses

import pytest

from lo_importer.core.document import Document, ImageAsset


@pytest.fixture
def document() -> Document:
    images = {1: ImageAsset(data=b"abc", extension="png", original_name="a.png")}
    return Document(title="T", content="c", images=images, footnotes={1: "n"}, metadata={"parser": "html"})


class TestDocument:
    def test_frozen(self, document):
        with pytest.raises(dataclasses.FrozenInstanceError):
            document.title = "other"

    def test_mappings_read_only(self, document):
        with pytest.raises(TypeError):
            document.images[2] = document.images[1]
        with pytest.raises(TypeError):
            document.footnotes[2] = "x"

    def test_caller_dict_not_shared(self):
        footnotes = {1: "a"}
        doc = Document(title="T", footnotes=footnotes)
        footnotes[2] = "b"

        assert doc.footnote_count == 1

    def test_to_dict(self, document):
        data = document.to_dict()

        assert data["images"] == {
            "1": {"extension": "png", "original_name": "a.png", "mime_type": "image/png", "size": 3}
        }
        assert data["footnotes"] == {"1": "n"}
        assert data["metadata"] == {"parser": "html"}
        assert "data" not in data["images"]["1"]
        assert document.to_dict(include_image_data=True)["images"]["1"]["data"] == b"abc"

    def test_defaults(self):
        doc = Document(title="Only")

        assert (doc.author, doc.abstract, doc.content) == ("", "", "")
        assert doc.image_count == 0


class TestImageAsset:
    def test_mime_and_size(self):
        asset = ImageAsset(data=b"12345", extension="jpeg", original_name="p.jpeg")

        assert asset.mime_type == "image/jpeg"
        assert asset.size == 5
        assert "p.jpeg" in repr(asset)
