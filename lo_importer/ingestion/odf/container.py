# lo_importer/ingestion/odf/container.py
"""
Container Reader for ODT archives.

An ODT file is a zip archive. Only two payloads matter here:

    content.xml  - document body and automatic styles (required)
    meta.xml     - metadata such as dc:creator (optional)

Embedded pictures are read lazily from the same open archive while the walker
runs. The archive is scoped to a `with` block, so it is released on every exit
path.

Usage:
    with OdtContainer(payload, source="report.odt") as container:
        body = container.body
        data = container.read_entry("Pictures/1.png")
"""

from __future__ import annotations

import io
import zipfile
from typing import Optional

from lxml import etree

from lo_importer.core.exceptions import (
    ContainerUnreadableError,
    MalformedXmlError,
    MissingEntryError,
)
from lo_importer.ingestion.odf import namespaces as ns
from lo_importer.ingestion.odf.styles import StyleCatalog
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import CONTAINER

logger = get_logger(__name__)

CONTENT_ENTRY = "content.xml"
META_ENTRY = "meta.xml"

XP_BODY_TEXT = etree.XPath("//office:body/office:text", namespaces=ns.NS)
XP_CREATOR = etree.XPath("//office:meta/dc:creator", namespaces=ns.NS)
XP_INITIAL_CREATOR = etree.XPath("//office:meta/meta:initial-creator", namespaces=ns.NS)
XP_META_TITLE = etree.XPath("//office:meta/dc:title", namespaces=ns.NS)


def _xml_parser() -> etree.XMLParser:
    # No DTD/entity expansion and no network: payloads come from uploads
    return etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False)


class OdtContainer:
    """
    Open ODT archive plus its parsed XML payloads.

    Attributes (valid inside the `with` block):
        content: root of content.xml
        meta: root of meta.xml, or None when the entry is absent
        styles: StyleCatalog resolved from content.xml
    """

    def __init__(self, payload: bytes, source: str = "<odt>"):
        self.payload = payload
        self.source = source
        self.content: Optional[etree._Element] = None
        self.meta: Optional[etree._Element] = None
        self.styles: StyleCatalog = StyleCatalog()
        self._zip: Optional[zipfile.ZipFile] = None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def __enter__(self) -> "OdtContainer":
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def open(self) -> None:
        try:
            self._zip = zipfile.ZipFile(io.BytesIO(self.payload))
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as e:
            raise ContainerUnreadableError(
                f"Failed to open ODT archive: {e}", source=self.source, cause=e
            ) from e

        try:
            content_bytes = self._read_required(CONTENT_ENTRY)
            self.content = self._parse(CONTENT_ENTRY, content_bytes)

            meta_bytes = self.read_entry(META_ENTRY)
            if meta_bytes is not None:
                self.meta = self._parse(META_ENTRY, meta_bytes)
            else:
                logger.debug(f"{CONTAINER} No {META_ENTRY} in {self.source}")

            self.styles = StyleCatalog.from_tree(self.content)
        except Exception:
            self.close()
            raise

        logger.debug(
            f"{CONTAINER} Opened {self.source}: {len(self._zip.namelist())} entries, "
            f"{len(self.styles.descriptors)} styles"
        )

    def close(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None

    # -------------------------------------------------------------------------
    # Entry access
    # -------------------------------------------------------------------------

    def _read_required(self, name: str) -> bytes:
        try:
            return self._zip.read(name)
        except KeyError as e:
            raise MissingEntryError(
                f"Could not find {name} in ODT archive", entry=name, source=self.source, cause=e
            ) from e
        except (zipfile.BadZipFile, OSError, RuntimeError) as e:
            raise ContainerUnreadableError(
                f"Failed to read {name}: {e}", source=self.source, cause=e
            ) from e

    def _parse(self, name: str, data: bytes) -> etree._Element:
        try:
            return etree.fromstring(data, parser=_xml_parser())
        except etree.XMLSyntaxError as e:
            raise MalformedXmlError(
                f"Failed to parse {name}: {e}", entry=name, source=self.source, cause=e
            ) from e

    def read_entry(self, name: str) -> Optional[bytes]:
        """
        Bytes of an archive entry, or None if it is absent or unreadable.

        Accepts hrefs as written in content.xml ("./Pictures/a.png").
        """
        if self._zip is None:
            raise RuntimeError("OdtContainer is not open")

        normalized = name
        while normalized.startswith("./"):
            normalized = normalized[2:]
        normalized = normalized.lstrip("/")
        if not normalized:
            return None

        try:
            return self._zip.read(normalized)
        except KeyError:
            return None
        except (zipfile.BadZipFile, OSError, RuntimeError) as e:
            logger.warning(f"{CONTAINER} Unreadable entry {normalized!r} in {self.source}: {e}")
            return None

    # -------------------------------------------------------------------------
    # Typed accessors
    # -------------------------------------------------------------------------

    @property
    def body(self) -> Optional[etree._Element]:
        """The office:text element holding the document body."""
        if self.content is None:
            return None
        found = XP_BODY_TEXT(self.content)
        return found[0] if found else None

    def metadata_author(self) -> str:
        """dc:creator, falling back to meta:initial-creator; '' without meta.xml."""
        if self.meta is None:
            return ""
        for query in (XP_CREATOR, XP_INITIAL_CREATOR):
            for node in query(self.meta):
                text = "".join(node.itertext()).strip()
                if text:
                    return text
        return ""

    def metadata_title(self) -> str:
        if self.meta is None:
            return ""
        for node in XP_META_TITLE(self.meta):
            text = "".join(node.itertext()).strip()
            if text:
                return text
        return ""


__all__ = ["OdtContainer", "CONTENT_ENTRY", "META_ENTRY"]
