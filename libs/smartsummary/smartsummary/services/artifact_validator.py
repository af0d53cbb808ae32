"""Audio upload validation and transient storage."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Protocol
from uuid import uuid4

from smartsummary.config import Settings
from smartsummary.exceptions import InvalidArtifactError
from smartsummary.models.artifact import UploadedArtifact

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 1024 * 1024


class AudioUpload(Protocol):
    """What the validator needs from an upload (FastAPI's UploadFile fits)."""

    filename: str | None
    content_type: str | None

    async def read(self, size: int = -1) -> bytes: ...


def _sanitize_filename(filename: str | None) -> str:
    raw = str(filename or "").strip()
    base = Path(raw).name
    base = base.replace("\x00", "")
    if not base:
        return "upload.bin"
    return base[:255]


def _normalize_content_type(value: str | None) -> str:
    # "audio/wav; codecs=1" -> "audio/wav"
    return str(value or "").split(";", 1)[0].strip().lower()


def _declared_size(upload: AudioUpload) -> int | None:
    size = getattr(upload, "size", None)
    if isinstance(size, int) and size >= 0:
        return size
    return None


def _storage_name(original: str) -> str:
    ext = Path(original).suffix.lower()
    return f"audio-{int(time.time() * 1000)}-{uuid4().hex[:8]}{ext}"


class ArtifactValidator:
    """Checks type and size of an audio upload and writes it to the upload dir."""

    def __init__(self, settings: Settings) -> None:
        self.upload_dir = Path(settings.upload_dir)
        self.max_bytes = int(settings.upload_max_bytes)
        self.allowed_types = frozenset(settings.allowed_audio_types)

    def check_type(self, content_type: str | None) -> str:
        normalized = _normalize_content_type(content_type)
        if normalized not in self.allowed_types:
            raise InvalidArtifactError(
                "Invalid file type. Only audio files are allowed.",
                details=f"unsupported content type: {normalized or '<none>'}",
            )
        return normalized

    def _too_large(self, size: int) -> InvalidArtifactError:
        return InvalidArtifactError(
            "File too large",
            details=f"{size} bytes exceeds the {self.max_bytes} byte limit",
            status_code=413,
        )

    async def ingest(self, upload: AudioUpload | None) -> UploadedArtifact:
        if upload is None or not (upload.filename or "").strip():
            raise InvalidArtifactError("No audio file provided")

        content_type = self.check_type(upload.content_type)
        declared = _declared_size(upload)
        if declared is not None and declared > self.max_bytes:
            raise self._too_large(declared)

        safe_name = _sanitize_filename(upload.filename)
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        target = (self.upload_dir / _storage_name(safe_name)).resolve()

        written = 0
        try:
            with target.open("wb") as f:
                while True:
                    chunk = await upload.read(_CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_bytes:
                        raise self._too_large(written)
                    f.write(chunk)
        except BaseException:
            target.unlink(missing_ok=True)
            raise

        logger.info("stored upload %s (%d bytes, %s)", target.name, written, content_type)
        return UploadedArtifact(
            path=str(target),
            content_type=content_type,
            size_bytes=written,
            original_filename=safe_name,
        )

    @staticmethod
    def discard(artifact: UploadedArtifact | None) -> None:
        """Remove the stored file; safe to call more than once."""
        if artifact is None:
            return
        try:
            Path(artifact.path).unlink(missing_ok=True)
        except OSError as exc:
            logger.error("Error deleting file %s: %s", artifact.path, exc)
