"""
Pytest configuration for tfvc_blame tests
"""

import stat
import sys
from pathlib import Path

import pytest

# Ensure the parent directory is in the Python path for imports
parent_dir = Path(__file__).resolve().parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

import utils.env as env_config  # noqa: E402
from tfvc_blame.constants import CONFIG_ENV_VAR, ENV_OVERRIDES  # noqa: E402

# Ensure tests operate with runtime environment rather than .env overrides during imports
env_config.reload_env({"TFVC_BLAME_FORCE_ENV_OVERRIDE": "false"})

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"

FAKE_ANNOTATE = """\
import sys

if len(sys.argv) < 3 or sys.argv[1] != "annotate":
    sys.stderr.write("usage: annotate [flags] <file>\\n")
    sys.exit(2)

path = sys.argv[-1]
try:
    with open(path, "rb") as handle:
        data = handle.read()
except OSError:
    sys.stderr.write("No such file: " + path + "\\n")
    sys.exit(1)

sys.stdout.buffer.write(data)
"""

ERROR_STREAM = """\
import sys

sys.stderr.write("error stream string 1\\r\\nerror stream string 2\\r\\n")
sys.stderr.flush()
sys.exit(1)
"""

HANGING = """\
import time

time.sleep(60)
"""


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line("markers", "asyncio: mark test as async")


def _write_script(directory: Path, name: str, body: str) -> Path:
    if sys.platform == "win32":
        pytest.skip("fake annotate scripts are POSIX shell wrappers")
    source = directory / f"{name}.py"
    source.write_text(body, encoding="utf-8")
    script = directory / name
    script.write_text(f'#!/bin/sh\nexec "{sys.executable}" "{source}" "$@"\n', encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def fake_annotate(tmp_path) -> Path:
    """Executable that echoes the target file as annotate output, exit 1 if it is missing."""
    return _write_script(tmp_path, "fake_annotate", FAKE_ANNOTATE)


@pytest.fixture
def error_stream_annotate(tmp_path) -> Path:
    return _write_script(tmp_path, "error_stream", ERROR_STREAM)


@pytest.fixture
def hanging_annotate(tmp_path) -> Path:
    return _write_script(tmp_path, "hanging", HANGING)


@pytest.fixture(autouse=True)
def clear_tfvc_env(monkeypatch):
    """Ensure per-test isolation from user-defined TFVC settings."""

    monkeypatch.setenv("TFVC_BLAME_FORCE_ENV_OVERRIDE", "false")
    env_config.reload_env({"TFVC_BLAME_FORCE_ENV_OVERRIDE": "false"})
    for var in (CONFIG_ENV_VAR, *ENV_OVERRIDES):
        monkeypatch.delenv(var, raising=False)
