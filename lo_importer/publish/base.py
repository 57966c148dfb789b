# lo_importer/publish/base.py
"""
Downstream boundary: what a publishing collaborator is expected to do.

The engine stops at the Document. Persisting it, storing image bytes and
matching the author to an account all belong to a PostCreator supplied by
the host application.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from lo_importer.config.schema import ImportOptions
from lo_importer.core.document import Document, ImageAsset


@runtime_checkable
class PostCreator(Protocol):
    """
    Protocol for publishing collaborators.

    Expected flow:
        urls = {image_id: creator.store_image(asset) for image_id, asset in doc.images.items()}
        content = resolve_image_placeholders(doc.content, urls)
        creator.create_post(doc, content, options)
    """

    def store_image(self, image_id: int, asset: ImageAsset) -> str:
        """Persist one image and return the address it is served from."""
        ...

    def create_post(self, document: Document, content: str, options: ImportOptions) -> str:
        """
        Create the published item.

        Args:
            document: The parsed Document (title, author, abstract).
            content: Document content with image placeholders resolved.
            options: Options of the import, including default_post_status.

        Returns:
            Identifier of the created item.
        """
        ...


def store_images(creator: PostCreator, images: Mapping[int, ImageAsset]) -> dict[int, str]:
    """Persist every image through the collaborator; id -> address."""
    return {image_id: creator.store_image(image_id, asset) for image_id, asset in images.items()}


__all__ = ["PostCreator", "store_images"]
