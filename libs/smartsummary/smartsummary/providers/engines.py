"""Transcription and summarization engines (external processes).

Each engine receives exactly one positional argument (an audio file path or
the raw text), writes its only result to stdout, diagnostics to stderr and
exits 0 on success.
"""

from __future__ import annotations

import logging
import shlex
import shutil
import sys
from dataclasses import dataclass

from smartsummary.config import EngineConfig
from smartsummary.exceptions import ConfigurationError
from smartsummary.utils.subprocess import ProcessRunner

logger = logging.getLogger(__name__)

_PYTHON_ALIASES = {"python", "python3"}


def resolve_executable(name: str) -> str:
    """Prefer the binary on PATH; `python` falls back to the running interpreter."""
    name = (name or "").strip()
    found = shutil.which(name)
    if found:
        return found
    if name in _PYTHON_ALIASES:
        logger.debug("%r not on PATH; using %s", name, sys.executable)
        return sys.executable
    return name


@dataclass(frozen=True)
class EngineCommand:
    argv: tuple[str, ...]

    @classmethod
    def parse(cls, raw: str) -> "EngineCommand":
        try:
            parts = shlex.split(str(raw or ""))
        except ValueError as exc:
            raise ConfigurationError(f"invalid engine command {raw!r}: {exc}") from exc
        if not parts:
            raise ConfigurationError("engine command must not be empty")
        parts[0] = resolve_executable(parts[0])
        return cls(argv=tuple(parts))


class TranscriptionEngine:
    name = "transcription"

    def __init__(self, runner: ProcessRunner, command: EngineCommand) -> None:
        self.runner = runner
        self.command = command

    async def transcribe(self, audio_path: str) -> str:
        outcome = await self.runner.run(self.command.argv, [str(audio_path)], engine=self.name)
        return outcome.output_text


class SummarizationEngine:
    name = "summarization"

    def __init__(self, runner: ProcessRunner, command: EngineCommand) -> None:
        self.runner = runner
        self.command = command

    async def summarize(self, text: str) -> str:
        outcome = await self.runner.run(self.command.argv, [str(text)], engine=self.name)
        return outcome.output_text


def build_engines(cfg: EngineConfig) -> tuple[TranscriptionEngine, SummarizationEngine]:
    runner = ProcessRunner(timeout_s=cfg.effective_timeout_s, cwd=cfg.workdir)
    return (
        TranscriptionEngine(runner, EngineCommand.parse(cfg.transcribe_command)),
        SummarizationEngine(runner, EngineCommand.parse(cfg.summarize_command)),
    )
