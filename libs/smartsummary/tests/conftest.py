from __future__ import annotations

import io
import sys
from typing import Callable

import pytest

from smartsummary.config import Settings
from smartsummary.providers import EngineCommand


class FakeUpload:
    """Minimal UploadFile look-alike."""

    def __init__(
        self,
        data: bytes,
        *,
        filename: str | None = "meeting.wav",
        content_type: str | None = "audio/wav",
        size: int | None = None,
    ) -> None:
        self._buf = io.BytesIO(data)
        self.filename = filename
        self.content_type = content_type
        self.size = size

    async def read(self, size: int = -1) -> bytes:
        return self._buf.read(size)


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(
        upload_dir=str(tmp_path / "uploads"),
        log_dir=str(tmp_path / "logs"),
    )


@pytest.fixture()
def make_upload() -> Callable[..., FakeUpload]:
    return FakeUpload


@pytest.fixture()
def python_command() -> Callable[[str], EngineCommand]:
    def _build(script: str) -> EngineCommand:
        return EngineCommand(argv=(sys.executable, "-c", script))

    return _build
