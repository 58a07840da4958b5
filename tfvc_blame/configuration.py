"""Configuration loading for the TFVC annotate adapter."""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path

from pydantic import ValidationError

from tfvc_blame.constants import COLLECTION_FLAG, CONFIG_ENV_VAR, ENV_OVERRIDES, LOGIN_FLAG
from tfvc_blame.errors import ConfigurationError
from tfvc_blame.models import ResolvedTfvcClient, TfvcConfiguration
from utils.env import get_env
from utils.file_utils import read_json_file

logger = logging.getLogger("tfvc_blame.configuration")


def load_configuration(path: str | Path | None = None) -> TfvcConfiguration:
    """Load configuration from a JSON file and apply environment overrides.

    The file is taken from ``path`` or, when omitted, from TFVC_BLAME_CONFIG_PATH.
    Without either, defaults are used. Environment variables always win over the file.
    """

    data: dict = {}
    config_path = Path(path).expanduser() if path else _env_config_path()
    if config_path is not None:
        if not config_path.is_file():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        try:
            data = read_json_file(str(config_path)) or {}
        except OSError as exc:
            raise ConfigurationError(f"Unable to read configuration file {config_path}: {exc}") from exc
        except (json.JSONDecodeError, ValueError) as exc:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {exc}") from exc
        logger.debug("Loaded TFVC configuration from %s", config_path)

    for env_var, field_name in ENV_OVERRIDES.items():
        value = get_env(env_var)
        if value:
            logger.debug("Overriding '%s' from %s", field_name, env_var)
            data[field_name] = value

    try:
        return TfvcConfiguration.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid TFVC configuration: {exc}") from exc


def resolve_client(config: TfvcConfiguration, *, base_dir: Path | None = None) -> ResolvedTfvcClient:
    """Resolve the executable path and render the flags passed to every invocation."""

    return ResolvedTfvcClient(
        executable=_resolve_executable(config.executable, base_dir or Path.cwd()),
        config_args=build_config_args(config),
        working_dir=Path(config.working_dir).expanduser().resolve() if config.working_dir else None,
        timeout_seconds=config.timeout_seconds,
        parser=config.parser,
    )


def build_config_args(config: TfvcConfiguration) -> list[str]:
    args: list[str] = []
    if config.collection_uri:
        args.append(f"{COLLECTION_FLAG}{config.collection_uri}")
    if config.username:
        user = f"{config.domain}\\{config.username}" if config.domain else config.username
        args.append(f"{LOGIN_FLAG}{user},{config.password or ''}")
    elif config.password:
        logger.warning("A TFVC password is configured without a username; it will be ignored")
    args.extend(config.additional_args)
    return args


def _env_config_path() -> Path | None:
    raw = get_env(CONFIG_ENV_VAR)
    if not raw:
        return None
    return Path(raw).expanduser()


def _resolve_executable(executable: str, base_dir: Path) -> str:
    candidate = Path(executable).expanduser()
    if candidate.is_absolute():
        return str(candidate)

    if candidate.parent != Path("."):
        return str((base_dir / candidate).resolve())

    found = shutil.which(executable)
    if found:
        return str(Path(found).resolve())

    # Left as given so the launch failure names what was configured.
    logger.debug("Executable '%s' not found on PATH", executable)
    return executable
