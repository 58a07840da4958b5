"""Environment lookups for tfvc_blame with optional .env file support."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

ENV_FILE = Path(__file__).resolve().parent.parent / ".env"
FORCE_OVERRIDE_VAR = "TFVC_BLAME_FORCE_ENV_OVERRIDE"


@dataclass(frozen=True)
class _DotenvState:
    values: dict[str, str | None] = field(default_factory=dict)

    @property
    def force_override(self) -> bool:
        return (self.values.get(FORCE_OVERRIDE_VAR) or "false").strip().lower() == "true"


_STATE = _DotenvState()


def reload_env(dotenv_mapping: Mapping[str, str | None] | None = None) -> None:
    """Re-read the .env file, or install ``dotenv_mapping`` in its place.

    When the .env file sets TFVC_BLAME_FORCE_ENV_OVERRIDE=true, its values replace
    the process environment entirely for lookups made through get_env().
    """

    global _STATE

    if dotenv_mapping is not None:
        _STATE = _DotenvState(dict(dotenv_mapping))
        return

    if not ENV_FILE.exists():
        _STATE = _DotenvState()
        return

    _STATE = _DotenvState(dict(dotenv_values(ENV_FILE)))
    load_dotenv(dotenv_path=ENV_FILE, override=_STATE.force_override)


reload_env()


def get_env(key: str, default: str | None = None) -> str | None:
    if not _STATE.force_override:
        return os.getenv(key, default)
    value = _STATE.values.get(key)
    return default if value is None else value
