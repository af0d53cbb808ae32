"""Async-friendly subprocess helpers for engine invocations.

We prefer `subprocess.run()` executed via `asyncio.to_thread()` instead of
`asyncio.create_subprocess_exec()` since some runtime environments have flaky
child watchers that can cause `.wait()`/`.communicate()` to hang. `run()` drains
stdout and stderr concurrently and kills the child when the timeout expires.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from dataclasses import dataclass
from typing import Sequence

from smartsummary.exceptions import ExternalProcessFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    returncode: int
    stdout: bytes
    stderr: bytes


@dataclass(frozen=True)
class ProcessOutcome:
    output_text: str
    exit_code: int


def _decode(raw: bytes | str | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="replace")


async def run_subprocess(
    args: Sequence[str],
    *,
    timeout_s: float | None = None,
    cwd: str | None = None,
) -> RunResult:
    """Run one process to completion and return both captured streams.

    Raises `subprocess.TimeoutExpired` (child already killed) or `OSError`
    when the executable cannot be started.
    """

    def _run() -> subprocess.CompletedProcess[bytes]:
        return subprocess.run(
            list(args),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            check=False,
            timeout=timeout_s,
            cwd=cwd,
        )

    cp = await asyncio.to_thread(_run)
    return RunResult(
        returncode=int(cp.returncode),
        stdout=cp.stdout or b"",
        stderr=cp.stderr or b"",
    )


class ProcessRunner:
    """Runs an engine command once and turns its exit status into an outcome."""

    def __init__(self, *, timeout_s: float | None = None, cwd: str | None = None) -> None:
        self.timeout_s = timeout_s
        self.cwd = cwd

    async def run(
        self,
        command: Sequence[str],
        args: Sequence[str] = (),
        *,
        engine: str = "process",
    ) -> ProcessOutcome:
        argv = [*command, *args]
        if not argv:
            raise ValueError("empty command")

        try:
            result = await run_subprocess(argv, timeout_s=self.timeout_s, cwd=self.cwd)
        except subprocess.TimeoutExpired as exc:
            stderr = _decode(exc.stderr).strip()
            message = f"{engine} timed out after {self.timeout_s}s"
            logger.warning("%s (cmd=%s)", message, argv[0])
            raise ExternalProcessFailure(
                engine,
                f"{stderr}\n{message}".strip(),
                timed_out=True,
            ) from exc
        except OSError as exc:
            logger.error("%s could not be started (cmd=%s): %s", engine, argv[0], exc)
            raise ExternalProcessFailure(engine, str(exc)) from exc

        stderr = _decode(result.stderr).strip()
        if result.returncode != 0:
            logger.error(
                "%s exited with code %d: %s", engine, result.returncode, stderr or "<no stderr>"
            )
            raise ExternalProcessFailure(engine, stderr, exit_code=result.returncode)

        if stderr:
            logger.debug("%s stderr: %s", engine, stderr)
        return ProcessOutcome(
            output_text=_decode(result.stdout).strip(),
            exit_code=result.returncode,
        )
