"""Run the annotate executable and capture its output streams."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass

from tfvc_blame.constants import DEFAULT_STREAM_LIMIT, OUTPUT_ENCODING
from tfvc_blame.errors import ProcessExitError, ProcessLaunchError, ProcessOutputError, ProcessTimeoutError
from tfvc_blame.models import AnnotateInvocation

logger = logging.getLogger("tfvc_blame.runner")


@dataclass
class ProcessResult:
    """Container returned by the runner after the process exited successfully."""

    stdout_lines: list[str]
    stderr: str
    returncode: int
    duration_seconds: float
    sanitized_command: list[str]


class ProcessRunner:
    """Execute one annotate invocation, draining stdout and stderr concurrently.

    Standard error is forwarded to the logger line by line while the process runs,
    so diagnostics are visible even when the run later fails.
    """

    def __init__(self, *, stream_limit: int = DEFAULT_STREAM_LIMIT, log: logging.Logger | None = None) -> None:
        self._stream_limit = stream_limit
        self._logger = log or logger

    async def run(self, invocation: AnnotateInvocation) -> ProcessResult:
        sanitized_command = invocation.sanitized_command
        cwd = str(invocation.working_dir) if invocation.working_dir else None

        self._logger.debug("Executing annotate command: %s", " ".join(sanitized_command))
        if cwd:
            self._logger.debug("Working directory: %s", cwd)

        start_time = time.monotonic()
        try:
            process = await asyncio.create_subprocess_exec(
                *invocation.command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                limit=self._stream_limit,
            )
        except OSError as exc:
            raise ProcessLaunchError(invocation.executable, str(exc)) from exc

        stdout_lines: list[str] = []
        stderr_chunks: list[str] = []
        try:
            returncode = await asyncio.wait_for(
                self._communicate(process, stdout_lines, stderr_chunks),
                timeout=invocation.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            await _reap(process)
            raise ProcessTimeoutError(
                invocation.executable,
                invocation.timeout_seconds or 0,
                stderr="".join(stderr_chunks),
            ) from exc
        except (ValueError, asyncio.LimitOverrunError) as exc:
            # readline() raises ValueError once a line outgrows the stream limit.
            await _reap(process)
            raise ProcessOutputError(invocation.executable, str(exc), stderr="".join(stderr_chunks)) from exc
        except BaseException:
            await _reap(process)
            raise

        duration = time.monotonic() - start_time
        stderr_text = "".join(stderr_chunks)
        self._logger.debug("Annotate command exited with status %s after %.2fs", returncode, duration)

        if returncode != 0:
            raise ProcessExitError(invocation.executable, returncode, stderr=stderr_text)

        return ProcessResult(
            stdout_lines=stdout_lines,
            stderr=stderr_text,
            returncode=returncode,
            duration_seconds=duration,
            sanitized_command=sanitized_command,
        )

    async def _communicate(
        self,
        process: asyncio.subprocess.Process,
        stdout_lines: list[str],
        stderr_chunks: list[str],
    ) -> int:
        # Both pipes must be drained together or a chatty process blocks on a full buffer.
        readers = [
            asyncio.ensure_future(self._read_stdout(process.stdout, stdout_lines)),
            asyncio.ensure_future(self._read_stderr(process.stderr, stderr_chunks)),
        ]
        try:
            await asyncio.gather(*readers)
        except BaseException:
            for reader in readers:
                reader.cancel()
            await asyncio.gather(*readers, return_exceptions=True)
            raise
        return await process.wait()

    async def _read_stdout(self, stream: asyncio.StreamReader | None, sink: list[str]) -> None:
        if stream is None:
            return
        while True:
            raw = await stream.readline()
            if not raw:
                break
            sink.append(_decode(raw).rstrip("\r\n"))

    async def _read_stderr(self, stream: asyncio.StreamReader | None, sink: list[str]) -> None:
        if stream is None:
            return
        while True:
            raw = await stream.readline()
            if not raw:
                break
            text = _decode(raw)
            sink.append(text)
            self._logger.error("%s", text)


async def _reap(process: asyncio.subprocess.Process) -> None:
    if process.returncode is None:
        try:
            process.kill()
        except ProcessLookupError:
            pass  # exited between the check and the kill
    await process.wait()


def _decode(raw: bytes) -> str:
    return raw.decode(OUTPUT_ENCODING, errors="replace")
