# lo_importer/config/schema.py
"""
Configuration schema for the import engine.

ImportOptions is immutable: it is handed to the parsers at construction time
and never re-read while a document is being walked.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ImportOptions(BaseModel):
    """
    Options consumed by one parse invocation.

    Example YAML:
        lo_importer:
          auto_extract_abstract: true
          abstract_max_paragraphs: 2
          import_images: false
    """

    auto_extract_author: bool = Field(
        default=True,
        description="Recover the author from document text when metadata has none",
    )
    auto_extract_abstract: bool = Field(
        default=True, description="Build an abstract from the leading paragraphs"
    )
    abstract_max_paragraphs: int = Field(
        default=3, ge=1, le=10, description="Maximum paragraphs collected into the abstract"
    )
    import_images: bool = Field(
        default=True, description="Keep extracted images; otherwise drop their placeholders"
    )
    import_footnotes: bool = Field(
        default=True, description="Append the footnote block to the content"
    )
    preserve_formatting: bool = Field(
        default=True, description="Translate inline emphasis into canonical tags"
    )
    default_post_status: Literal["draft", "pending", "publish"] = Field(
        default="draft", description="Status the downstream collaborator publishes with"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


__all__ = ["ImportOptions"]
