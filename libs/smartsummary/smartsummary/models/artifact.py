"""Uploaded audio handle (lives only for one request)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UploadedArtifact:
    path: str
    content_type: str
    size_bytes: int
    original_filename: str = ""

    @property
    def exists(self) -> bool:
        return Path(self.path).exists()
