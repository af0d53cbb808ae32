import sys

import pytest

from smartsummary.exceptions import ExternalProcessFailure
from smartsummary.utils.subprocess import ProcessRunner, run_subprocess


def _py(script: str) -> list[str]:
    return [sys.executable, "-c", script]


@pytest.mark.asyncio
async def test_run_subprocess_captures_both_streams() -> None:
    result = await run_subprocess(
        _py("import sys; sys.stdout.write('hi'); sys.stderr.write('warn')")
    )
    assert result.returncode == 0
    assert result.stdout == b"hi"
    assert result.stderr == b"warn"


@pytest.mark.asyncio
async def test_runner_returns_trimmed_stdout() -> None:
    outcome = await ProcessRunner().run(_py("print('\\n  hello world \\n')"))
    assert outcome.output_text == "hello world"
    assert outcome.exit_code == 0


@pytest.mark.asyncio
async def test_runner_appends_args_positionally() -> None:
    outcome = await ProcessRunner().run(
        _py("import sys; print('|'.join(sys.argv[1:]))"), ["a b", "c"]
    )
    assert outcome.output_text == "a b|c"


@pytest.mark.asyncio
async def test_runner_keeps_large_output_in_emission_order() -> None:
    outcome = await ProcessRunner().run(
        _py("import sys\nfor i in range(20000): sys.stdout.write(f'{i}\\n'); sys.stderr.write('x')")
    )
    lines = outcome.output_text.splitlines()
    assert lines == [str(i) for i in range(20000)]


@pytest.mark.asyncio
async def test_runner_nonzero_exit_raises_with_stderr() -> None:
    script = "import sys; print('partial'); sys.stderr.write('  boom \\n'); sys.exit(2)"
    with pytest.raises(ExternalProcessFailure) as info:
        await ProcessRunner().run(_py(script), engine="transcription")
    exc = info.value
    assert exc.exit_code == 2
    assert exc.stderr == "boom"
    assert exc.details == "boom"
    assert exc.engine == "transcription"
    assert "partial" not in str(exc)
    assert not exc.timed_out


@pytest.mark.asyncio
async def test_runner_timeout_kills_process() -> None:
    runner = ProcessRunner(timeout_s=0.5)
    with pytest.raises(ExternalProcessFailure) as info:
        await runner.run(_py("import time; time.sleep(30)"), engine="summarization")
    assert info.value.timed_out is True
    assert info.value.exit_code is None
    assert "timed out" in info.value.stderr


@pytest.mark.asyncio
async def test_runner_missing_executable() -> None:
    with pytest.raises(ExternalProcessFailure) as info:
        await ProcessRunner().run(["/nonexistent/engine-binary"], ["x"])
    assert info.value.exit_code is None
    assert info.value.stderr


@pytest.mark.asyncio
async def test_runner_rejects_empty_command() -> None:
    with pytest.raises(ValueError):
        await ProcessRunner().run([])
