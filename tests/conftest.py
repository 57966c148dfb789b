# tests/conftest.py
"""
Root conftest - shared fixtures for the lo_importer test suite.

All tests use the centralized tests/test_config.yaml.

Test Tiers:
===========
- tier1: Pure logic tests - in-memory documents, no I/O (<30s)
         Run: pytest -m tier1
- tier2: Tests touching the filesystem or the CLI runner
         Run: pytest -m "tier1 or tier2"

ODT archives are built in memory from XML snippets with build_odt(), so no
binary fixtures live in the repository.
"""

from __future__ import annotations

import io
import zipfile
from functools import lru_cache
from pathlib import Path
from typing import Callable, Dict, Optional

import pytest
import yaml

from lo_importer.config.schema import ImportOptions

# =============================================================================
# Test Configuration
# =============================================================================

TEST_CONFIG_PATH = Path(__file__).parent / "test_config.yaml"

TIER2_PATTERNS = ["test_cli", "test_importer", "test_config_loader"]


@lru_cache(maxsize=1)
def load_test_config() -> dict:
    """Load the centralized test configuration."""
    with open(TEST_CONFIG_PATH) as f:
        return yaml.safe_load(f)


def pytest_collection_modifyitems(items):
    """Mark tests tier1 unless their file touches disk or the CLI."""
    for item in items:
        if any(marker.name.startswith("tier") for marker in item.iter_markers()):
            continue
        fspath = str(item.fspath)
        if any(pattern in fspath for pattern in TIER2_PATTERNS):
            item.add_marker(pytest.mark.tier2)
        else:
            item.add_marker(pytest.mark.tier1)


# =============================================================================
# ODT Builder
# =============================================================================

_NAMESPACES = (
    'xmlns:office="urn:oasis:names:tc:opendocument:xmlns:office:1.0" '
    'xmlns:text="urn:oasis:names:tc:opendocument:xmlns:text:1.0" '
    'xmlns:style="urn:oasis:names:tc:opendocument:xmlns:style:1.0" '
    'xmlns:fo="urn:oasis:names:tc:opendocument:xmlns:xsl-fo-compatible:1.0" '
    'xmlns:draw="urn:oasis:names:tc:opendocument:xmlns:drawing:1.0" '
    'xmlns:xlink="http://www.w3.org/1999/xlink" '
    'xmlns:meta="urn:oasis:names:tc:opendocument:xmlns:meta:1.0" '
    'xmlns:dc="http://purl.org/dc/elements/1.1/" '
    'xmlns:table="urn:oasis:names:tc:opendocument:xmlns:table:1.0" '
    'xmlns:svg="urn:oasis:names:tc:opendocument:xmlns:svg-compatible:1.0"'
)

CONTENT_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    f'<office:document-content {_NAMESPACES} office:version="1.2">'
    "<office:automatic-styles>__STYLES__</office:automatic-styles>"
    "<office:body><office:text>__BODY__</office:text></office:body>"
    "</office:document-content>"
)

META_TEMPLATE = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    f'<office:document-meta {_NAMESPACES} office:version="1.2">'
    "<office:meta>__FIELDS__</office:meta>"
    "</office:document-meta>"
)


def build_odt(
    body: str = "",
    styles: str = "",
    meta: Optional[str] = None,
    pictures: Optional[Dict[str, bytes]] = None,
    content_xml: Optional[str] = None,
    meta_xml: Optional[str] = None,
    omit_content: bool = False,
) -> bytes:
    """
    Build an ODT archive in memory.

    Args:
        body: XML placed inside office:text.
        styles: XML placed inside office:automatic-styles.
        meta: XML placed inside office:meta; None leaves meta.xml out.
        pictures: Extra archive entries (e.g. {"Pictures/a.png": b"..."}).
        content_xml: Raw content.xml replacing the template.
        meta_xml: Raw meta.xml replacing the template.
        omit_content: Leave content.xml out of the archive.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("mimetype", "application/vnd.oasis.opendocument.text")
        if not omit_content:
            if content_xml is None:
                content_xml = CONTENT_TEMPLATE.replace("__STYLES__", styles).replace(
                    "__BODY__", body
                )
            zf.writestr("content.xml", content_xml)
        if meta_xml is None and meta is not None:
            meta_xml = META_TEMPLATE.replace("__FIELDS__", meta)
        if meta_xml is not None:
            zf.writestr("meta.xml", meta_xml)
        for name, data in (pictures or {}).items():
            zf.writestr(name, data)
    return buffer.getvalue()


def paragraphs(*texts: str) -> str:
    """'<text:p>a</text:p><text:p>b</text:p>' for each text."""
    return "".join(f"<text:p>{text}</text:p>" for text in texts)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> dict:
    """Fixture providing the full test config dict."""
    return load_test_config()


@pytest.fixture
def options_for() -> Callable[[str], ImportOptions]:
    """Fixture returning ImportOptions for a named set in test_config.yaml."""

    def _options(name: str = "default") -> ImportOptions:
        return ImportOptions(**load_test_config()["options"][name])

    return _options


@pytest.fixture
def odt() -> Callable[..., bytes]:
    """Fixture exposing build_odt()."""
    return build_odt


@pytest.fixture
def paras() -> Callable[..., str]:
    """Fixture exposing paragraphs()."""
    return paragraphs


@pytest.fixture
def png_data_uri() -> str:
    return load_test_config()["samples"]["png_data_uri"]
