import json
import logging
from pathlib import Path

import pytest

import utils.env as env_config
from tfvc_blame.configuration import build_config_args, load_configuration, resolve_client
from tfvc_blame.constants import DEFAULT_EXECUTABLE
from tfvc_blame.errors import ConfigurationError
from tfvc_blame.models import TfvcConfiguration


def _write_config(tmp_path: Path, data) -> Path:
    path = tmp_path / "tfvc.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_defaults_without_any_configuration():
    config = load_configuration()
    assert config.executable == DEFAULT_EXECUTABLE
    assert config.timeout_seconds is None
    assert config.additional_args == []


def test_loads_json_file(tmp_path):
    path = _write_config(
        tmp_path,
        {
            "executable": "/opt/tfvc/TfsAnnotate",
            "username": "builder",
            "additional_args": "/noprompt",
            "timeout_seconds": 120,
        },
    )

    config = load_configuration(path)

    assert config.executable == "/opt/tfvc/TfsAnnotate"
    assert config.username == "builder"
    assert config.additional_args == ["/noprompt"]
    assert config.timeout_seconds == 120


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = _write_config(tmp_path, {"domain": "CORP"})
    monkeypatch.setenv("TFVC_BLAME_CONFIG_PATH", str(path))

    assert load_configuration().domain == "CORP"


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = _write_config(tmp_path, {"username": "from-file", "password": "file-secret"})
    monkeypatch.setenv("TFVC_USERNAME", "from-env")
    monkeypatch.setenv("TFVC_TIMEOUT_SECONDS", "30")

    config = load_configuration(path)

    assert config.username == "from-env"
    assert config.password == "file-secret"
    assert config.timeout_seconds == 30


def test_forced_dotenv_override_ignores_process_environment(monkeypatch):
    monkeypatch.setenv("TFVC_USERNAME", "from-process")
    env_config.reload_env({"TFVC_BLAME_FORCE_ENV_OVERRIDE": "true", "TFVC_USERNAME": "from-dotenv"})

    assert load_configuration().username == "from-dotenv"


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "tfvc.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Invalid JSON"):
        load_configuration(path)


def test_non_object_json_raises(tmp_path):
    path = _write_config(tmp_path, ["executable"])

    with pytest.raises(ConfigurationError):
        load_configuration(path)


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError, match="not found"):
        load_configuration(tmp_path / "missing.json")


def test_invalid_timeout_raises(tmp_path):
    path = _write_config(tmp_path, {"timeout_seconds": 0})

    with pytest.raises(ConfigurationError):
        load_configuration(path)


def test_login_flag_includes_domain():
    config = TfvcConfiguration(username="builder", password="s3cret", domain="CORP")
    assert build_config_args(config) == ["/login:CORP\\builder,s3cret"]


def test_collection_and_extra_args_order():
    config = TfvcConfiguration(
        username="builder",
        password="s3cret",
        collection_uri="https://tfs.example.com/tfs/DefaultCollection",
        additional_args=["/noprompt"],
    )
    assert build_config_args(config) == [
        "/collection:https://tfs.example.com/tfs/DefaultCollection",
        "/login:builder,s3cret",
        "/noprompt",
    ]


def test_password_without_username_is_ignored(caplog):
    caplog.set_level(logging.WARNING, logger="tfvc_blame.configuration")
    config = TfvcConfiguration(password="s3cret")

    assert build_config_args(config) == []
    assert "without a username" in caplog.text


def test_blank_credentials_are_treated_as_missing():
    config = TfvcConfiguration(username="  ", password="")
    assert config.username is None
    assert build_config_args(config) == []


def test_resolve_client_makes_relative_executable_absolute(tmp_path):
    config = TfvcConfiguration(executable="tools/TfsAnnotate", timeout_seconds=5)

    client = resolve_client(config, base_dir=tmp_path)

    assert client.executable == str((tmp_path / "tools" / "TfsAnnotate").resolve())
    assert client.timeout_seconds == 5


def test_resolve_client_searches_path(monkeypatch, tmp_path):
    found = tmp_path / "TfsAnnotate"
    monkeypatch.setattr("tfvc_blame.configuration.shutil.which", lambda name: str(found))

    client = resolve_client(TfvcConfiguration())

    assert client.executable == str(found.resolve())


def test_resolve_client_keeps_unknown_executable(monkeypatch):
    monkeypatch.setattr("tfvc_blame.configuration.shutil.which", lambda name: None)

    assert resolve_client(TfvcConfiguration()).executable == DEFAULT_EXECUTABLE


def test_unreadable_file_raises(tmp_path, monkeypatch):
    path = _write_config(tmp_path, {"username": "builder"})

    def deny(_path):
        raise PermissionError(13, "Permission denied", _path)

    monkeypatch.setattr("tfvc_blame.configuration.read_json_file", deny)

    with pytest.raises(ConfigurationError, match="Unable to read configuration file"):
        load_configuration(path)
