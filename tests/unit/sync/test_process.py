# tests/unit/sync/test_process.py — v2
"""Tests for sync/process.py — streaming subprocess runner.

Uses the running interpreter as the child process, so no extra binaries
are needed.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from unittest.mock import patch

import pytest

from dircache.sync.process import CommandError, ProcessResult, run_streaming

PROCESS_LOGGER = "dircache.sync.process"


def _py(code: str) -> list[str]:
    return [sys.executable, "-c", code]


class TestRunStreaming:
    @pytest.mark.asyncio
    async def test_collects_stdout_and_stderr(self):
        result = await run_streaming(
            _py("import sys; print('hello'); print('oops', file=sys.stderr)")
        )
        assert isinstance(result, ProcessResult)
        assert result.returncode == 0
        assert result.stdout == ["hello"]
        assert result.stderr == ["oops"]

    @pytest.mark.asyncio
    async def test_logs_with_prefixes(self, caplog):
        caplog.set_level(logging.INFO, logger=PROCESS_LOGGER)
        await run_streaming(
            _py("import sys; print('out-line'); print('err-line', file=sys.stderr)")
        )
        messages = [(r.levelno, r.getMessage()) for r in caplog.records]
        assert (logging.INFO, "Received chunk out-line") in messages
        assert (logging.ERROR, "Received error chunk err-line") in messages

    @pytest.mark.asyncio
    async def test_fast_exit_keeps_all_output(self):
        result = await run_streaming(
            _py("import sys\nfor i in range(2000): print(i)\nsys.exit(0)")
        )
        assert len(result.stdout) == 2000
        assert result.stdout[-1] == "1999"

    @pytest.mark.asyncio
    async def test_line_longer_than_reader_limit(self):
        result = await run_streaming(
            _py("import sys; sys.stdout.write('x' * 200000); sys.exit(0)")
        )
        assert result.returncode == 0
        assert result.stdout == ["x" * 200000]

    @pytest.mark.asyncio
    async def test_lines_split_across_reads(self):
        result = await run_streaming(
            _py(
                "import sys\n"
                "sys.stdout.write('a' * 70000 + '\\nmid\\r\\n' + 'b' * 70000)"
            )
        )
        assert result.stdout == ["a" * 70000, "mid", "b" * 70000]

    @pytest.mark.asyncio
    async def test_reader_failure_kills_process(self):
        with patch(
            "dircache.sync.process._emit_line", side_effect=ValueError("bad line")
        ):
            with pytest.raises(ValueError, match="bad line"):
                await asyncio.wait_for(
                    run_streaming(
                        _py("import time; print('x', flush=True); time.sleep(30)")
                    ),
                    timeout=10,
                )

    @pytest.mark.asyncio
    async def test_non_zero_exit(self):
        with pytest.raises(CommandError) as exc_info:
            await run_streaming(
                _py("import sys; print('bad', file=sys.stderr); sys.exit(3)")
            )
        assert exc_info.value.returncode == 3
        assert "bad" in exc_info.value.stderr
        assert "status 3" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_spawn_failure_propagates(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            await run_streaming([str(tmp_path / "no-such-binary")])

    @pytest.mark.asyncio
    async def test_timeout_kills_process(self):
        with pytest.raises(TimeoutError, match="timed out"):
            await run_streaming(_py("import time; time.sleep(30)"), timeout_s=0.5)

    @pytest.mark.asyncio
    async def test_argv_stringified(self, tmp_path):
        result = await run_streaming([sys.executable, "-c", "print(1)"])
        assert all(isinstance(a, str) for a in result.argv)


class TestCommandError:
    def test_message_without_stderr(self):
        err = CommandError(["mkdir", "-p", "/x"], 1)
        assert str(err) == "Command 'mkdir -p /x' exited with status 1"

    def test_is_runtime_error(self):
        assert isinstance(CommandError(["x"], 2), RuntimeError)
