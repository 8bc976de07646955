"""
Write directive model: the output of every generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class WriteDirective(BaseModel):
    """A file a generator wants written.

    Attributes:
        file_name: Path relative to the output directory.
        content:   Full file content.
        overwrite: Whether to overwrite if already exists.
        formatted: Whether content went through a source formatter.
        reason:    Why this file was generated.
    """

    file_name: str
    content: str
    overwrite: bool = False
    formatted: bool = False
    reason: str = ""

    def to_bytes(self) -> bytes:
        """Encoded payload, as the writer puts it on disk."""
        return self.content.encode("utf-8")
