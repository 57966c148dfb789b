# lo_importer/ingestion/source.py
"""
Input handed to a parser.

The engine never fetches or uploads anything: transport is the caller's job,
and a SourceDocument already holds the complete payload in memory.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Union


@dataclass(frozen=True)
class SourceDocument:
    """
    One document to import.

    payload is raw bytes for an ODT archive and text (or UTF-8 bytes) for an
    HTML fragment.
    """

    uri: str  # Where the payload came from, for error messages and logs
    payload: Union[bytes, str]
    extension: str  # lowercase, with dot (".odt", ".html")

    @classmethod
    def from_path(cls, path: Path) -> "SourceDocument":
        """Read a file from disk; the extension selects the parser."""
        return cls(uri=str(path), payload=path.read_bytes(), extension=path.suffix.lower())

    @property
    def size(self) -> int:
        if isinstance(self.payload, str):
            return len(self.payload.encode("utf-8"))
        return len(self.payload)

    def as_bytes(self) -> bytes:
        if isinstance(self.payload, str):
            return self.payload.encode("utf-8")
        return self.payload

    def as_text(self) -> str:
        if isinstance(self.payload, bytes):
            return self.payload.decode("utf-8", errors="replace")
        return self.payload

    def __repr__(self) -> str:
        return f"SourceDocument({self.uri!r}, {self.extension}, {self.size} bytes)"


__all__ = ["SourceDocument"]
