# src/sync/process.py — v2
"""Run external commands and stream their output into the log.

Readers for stdout and stderr are attached before the process is awaited,
so output from fast-exiting commands is never dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


class CommandError(RuntimeError):
    """A command exited with a non-zero status."""

    def __init__(self, argv: Sequence[str], returncode: int, stderr: str = ""):
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command {' '.join(self.argv)!r} exited with status {returncode}"
        if stderr:
            message += f": {stderr.strip()}"
        super().__init__(message)


@dataclass
class ProcessResult:
    """Outcome of a completed command."""

    argv: list[str]
    returncode: int
    stdout: list[str] = field(default_factory=list)
    stderr: list[str] = field(default_factory=list)


READ_CHUNK_SIZE = 65536


def _emit_line(raw: bytes, sink: list[str], emit: Callable[[str], None]) -> None:
    line = raw.decode("utf-8", errors="replace").rstrip("\r")
    sink.append(line)
    emit(line)


async def _pump(
    stream: asyncio.StreamReader | None,
    sink: list[str],
    emit: Callable[[str], None],
) -> None:
    """Forward `stream` line by line until EOF.

    Reads fixed-size chunks instead of readline(), so a single line longer
    than the reader's buffer limit is still delivered whole.
    """
    if stream is None:
        return
    pending = bytearray()
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        pending.extend(chunk)
        start = 0
        while (end := pending.find(b"\n", start)) != -1:
            _emit_line(bytes(pending[start:end]), sink, emit)
            start = end + 1
        del pending[:start]
    if pending:
        _emit_line(bytes(pending), sink, emit)


def _log_stdout(line: str) -> None:
    logger.info("Received chunk %s", line)


def _log_stderr(line: str) -> None:
    logger.error("Received error chunk %s", line)


async def run_streaming(
    argv: Sequence[str],
    *,
    timeout_s: float | None = None,
) -> ProcessResult:
    """Run `argv`, stream its output, and return once it has exited.

    Args:
        argv: Program and arguments (no shell involved).
        timeout_s: Kill the process after this many seconds. None = no limit.

    Returns:
        ProcessResult with the collected output lines.

    Raises:
        CommandError: If the command exits non-zero.
        OSError: If the program cannot be spawned.
        TimeoutError: If `timeout_s` expires.
    """
    argv = [str(a) for a in argv]
    logger.debug("Running %s", " ".join(argv))

    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    result = ProcessResult(argv=argv, returncode=-1)
    readers = [
        asyncio.ensure_future(_pump(proc.stdout, result.stdout, _log_stdout)),
        asyncio.ensure_future(_pump(proc.stderr, result.stderr, _log_stderr)),
    ]

    async def _communicate() -> int:
        await asyncio.gather(*readers)
        return await proc.wait()

    try:
        result.returncode = await asyncio.wait_for(_communicate(), timeout=timeout_s)
    except asyncio.TimeoutError:
        raise TimeoutError(
            f"Command {' '.join(argv)!r} timed out after {timeout_s}s"
        ) from None
    finally:
        # Every exit path reaps the child and its readers
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        for task in readers:
            task.cancel()
        await asyncio.gather(*readers, return_exceptions=True)

    if result.returncode != 0:
        raise CommandError(argv, result.returncode, "\n".join(result.stderr))
    return result
