"""Pydantic models for tfvc_blame configuration and runtime structures."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from os import PathLike
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

from tfvc_blame.constants import DEFAULT_EXECUTABLE, DEFAULT_PARSER, LOGIN_FLAG, MASKED_SECRET


class TfvcConfiguration(BaseModel):
    """Raw configuration before the executable and flags are resolved."""

    executable: str = Field(default=DEFAULT_EXECUTABLE, description="Path or name of the annotate executable.")
    username: str | None = None
    password: str | None = None
    domain: str | None = None
    collection_uri: str | None = Field(default=None, description="Team Project Collection URL.")
    additional_args: list[str] = Field(default_factory=list)
    working_dir: str | None = None
    timeout_seconds: PositiveInt | None = Field(
        default=None,
        description="Kill the annotate process after this many seconds. Unset means wait indefinitely.",
    )
    parser: str = DEFAULT_PARSER

    @field_validator("additional_args", mode="before")
    @classmethod
    def _ensure_args_list(cls, value: Any) -> list[str]:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(item) for item in value]
        if isinstance(value, str):
            return [value]
        raise TypeError("additional_args must be a list of strings or a single string")

    @field_validator("username", "password", "domain", "collection_uri", "working_dir", mode="before")
    @classmethod
    def _blank_as_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ResolvedTfvcClient(BaseModel):
    """Runtime configuration after resolving the executable and rendering flags."""

    executable: str
    config_args: list[str] = Field(default_factory=list)
    working_dir: Path | None = None
    timeout_seconds: int | None = None
    parser: str = DEFAULT_PARSER


class AnnotateInvocation(BaseModel):
    """One run of the annotate executable for one file."""

    model_config = ConfigDict(frozen=True)

    executable: str
    arguments: tuple[str, ...]
    working_dir: Path | None = None
    timeout_seconds: int | None = None

    @property
    def command(self) -> list[str]:
        return [self.executable, *self.arguments]

    @property
    def sanitized_command(self) -> list[str]:
        """Command with the password of any login flag masked."""

        sanitized = []
        for arg in self.command:
            if arg.lower().startswith(LOGIN_FLAG) and "," in arg:
                user, _, _ = arg.partition(",")
                arg = f"{user},{MASKED_SECRET}"
            sanitized.append(arg)
        return sanitized


class AnnotationRecord(BaseModel):
    """Revision, author and date of the last change to one source line."""

    model_config = ConfigDict(frozen=True)

    revision: str = Field(..., min_length=1)
    author: str
    date: datetime


class SourceFile(BaseModel):
    """Simple file reference for callers without their own file abstraction."""

    absolute_path: Path
    lines: int = 0


@runtime_checkable
class InputFile(Protocol):
    """Read-only view of a file to blame."""

    @property
    def absolute_path(self) -> str | PathLike[str]: ...

    @property
    def lines(self) -> int: ...


@runtime_checkable
class BlameOutput(Protocol):
    """Receives the blame of each file that was annotated successfully."""

    def report(self, input_file: InputFile, records: Sequence[AnnotationRecord]) -> None: ...
