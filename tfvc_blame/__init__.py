"""Public helpers for tfvc_blame components."""

from __future__ import annotations

from .blame import TfvcBlameCommand, annotate_last_line
from .configuration import load_configuration, resolve_client
from .errors import (
    ConfigurationError,
    InvalidOutputError,
    ProcessExitError,
    ProcessLaunchError,
    ProcessOutputError,
    ProcessTimeoutError,
    TfvcBlameError,
)
from .models import AnnotationRecord, BlameOutput, InputFile, SourceFile, TfvcConfiguration

__all__ = [
    "AnnotationRecord",
    "BlameOutput",
    "ConfigurationError",
    "InputFile",
    "InvalidOutputError",
    "ProcessExitError",
    "ProcessLaunchError",
    "ProcessOutputError",
    "ProcessTimeoutError",
    "SourceFile",
    "TfvcBlameCommand",
    "TfvcBlameError",
    "TfvcConfiguration",
    "annotate_last_line",
    "load_configuration",
    "resolve_client",
]
