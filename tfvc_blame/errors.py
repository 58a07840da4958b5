"""Exceptions raised while blaming files through the annotate executable."""

from __future__ import annotations


class TfvcBlameError(RuntimeError):
    """Base class for every failure that aborts a blame batch."""


class ConfigurationError(TfvcBlameError):
    """Raised when configuration files or values are invalid."""


class ProcessLaunchError(TfvcBlameError):
    """Raised when the annotate executable cannot be started."""

    def __init__(self, executable: str, reason: str = "") -> None:
        message = f"Unable to start the TFVC annotate command {executable}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.executable = executable


class ProcessExitError(TfvcBlameError):
    """Raised when the annotate executable exits with a non-zero status."""

    def __init__(self, executable: str, returncode: int | None, *, stderr: str = "", message: str | None = None) -> None:
        super().__init__(message or f"The TFVC annotate command {executable} failed with exit code {returncode}")
        self.executable = executable
        self.returncode = returncode
        self.stderr = stderr


class ProcessOutputError(TfvcBlameError):
    """Raised when the output streams of the annotate executable cannot be read."""

    def __init__(self, executable: str, reason: str, *, stderr: str = "") -> None:
        super().__init__(f"Unable to read the output of the TFVC annotate command {executable}: {reason}")
        self.executable = executable
        self.stderr = stderr


class ProcessTimeoutError(ProcessExitError):
    """Raised when the annotate executable outlives the configured timeout."""

    def __init__(self, executable: str, timeout_seconds: float, *, stderr: str = "") -> None:
        super().__init__(
            executable,
            None,
            stderr=stderr,
            message=f"The TFVC annotate command {executable} timed out after {timeout_seconds} seconds",
        )
        self.timeout_seconds = timeout_seconds


class InvalidOutputError(TfvcBlameError):
    """Raised when the annotate output contains a malformed record."""

    def __init__(self, raw_line: str, file_path: str, line_number: int) -> None:
        super().__init__(
            f'Invalid output from the TFVC annotate command: "{raw_line}" on file: {file_path} at line {line_number}'
        )
        self.raw_line = raw_line
        self.file_path = file_path
        self.line_number = line_number
