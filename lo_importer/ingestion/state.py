# lo_importer/ingestion/state.py
"""
Per-parse mutable extraction state.

One ExtractionState is created for every parse call and threaded explicitly
through the walker's recursive calls. It owns the image and footnote
accumulators; nothing is shared between parses.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator

from lo_importer.core.document import ImageAsset
from lo_importer.ingestion.extraction.footnotes import (
    FOOTNOTE_ANCHOR_RE,
    footnote_anchor,
)
from lo_importer.ingestion.extraction.images import IMAGE_TAG_RE, image_tag
from lo_importer.logging.logger import get_logger
from lo_importer.logging.tags import WALKER

logger = get_logger(__name__)


@dataclass
class ExtractionState:
    """
    Accumulators for artifacts discovered during one walk.

    Ids are assigned sequentially from 1 in discovery order; images and
    footnotes have independent id spaces.
    """

    images: Dict[int, ImageAsset] = field(default_factory=dict)
    footnotes: Dict[int, str] = field(default_factory=dict)
    footnote_depth: int = 0

    def add_image(self, asset: ImageAsset) -> int:
        """Store an image and return its id."""
        image_id = len(self.images) + 1
        self.images[image_id] = asset
        return image_id

    def add_footnote(self, body: str) -> int:
        """Store a footnote body and return its id."""
        footnote_id = len(self.footnotes) + 1
        self.footnotes[footnote_id] = body
        return footnote_id

    @property
    def in_footnote(self) -> bool:
        return self.footnote_depth > 0

    @contextmanager
    def inside_footnote(self) -> Iterator[None]:
        """Mark the walk as rendering a footnote body."""
        self.footnote_depth += 1
        try:
            yield
        finally:
            self.footnote_depth -= 1

    def reconcile(self, content: str) -> str:
        """
        Align the accumulators with the markers that survived in content.

        Artifacts whose marker was dropped along with an empty element are
        discarded, and the remaining ones are renumbered 1..N in order of
        appearance. Returns content with markers rewritten to the new ids.
        """
        image_order = [int(m.group(1)) for m in IMAGE_TAG_RE.finditer(content)]
        footnote_order = [int(m.group(1)) for m in FOOTNOTE_ANCHOR_RE.finditer(content)]

        image_map = _renumber(image_order, self.images)
        footnote_map = _renumber(footnote_order, self.footnotes)

        dropped_images = len(self.images) - len(image_map)
        dropped_footnotes = len(self.footnotes) - len(footnote_map)
        if dropped_images or dropped_footnotes:
            logger.debug(
                f"{WALKER} Reconciled markers: dropped {dropped_images} image(s), "
                f"{dropped_footnotes} footnote(s)"
            )

        def _swap_image(match) -> str:
            new_id = image_map.get(int(match.group(1)))
            return image_tag(new_id, match.group(2)) if new_id else ""

        def _swap_footnote(match) -> str:
            new_id = footnote_map.get(int(match.group(1)))
            return footnote_anchor(new_id) if new_id else ""

        content = IMAGE_TAG_RE.sub(_swap_image, content)
        content = FOOTNOTE_ANCHOR_RE.sub(_swap_footnote, content)

        self.images = {new: self.images[old] for old, new in image_map.items()}
        self.footnotes = {new: self.footnotes[old] for old, new in footnote_map.items()}
        return content


def _renumber(order: list[int], known: Dict[int, object]) -> Dict[int, int]:
    """Map old ids to contiguous new ids, first appearance wins."""
    mapping: Dict[int, int] = {}
    for old in order:
        if old in known and old not in mapping:
            mapping[old] = len(mapping) + 1
    return mapping


__all__ = ["ExtractionState"]
