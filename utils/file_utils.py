"""File helpers shared by configuration loaders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any


def read_json_file(file_path: str) -> dict[str, Any] | None:
    """Read a JSON object from disk.

    Returns None when the file is empty. Raises json.JSONDecodeError on malformed
    content and ValueError when the document is not an object.
    """

    text = Path(file_path).read_text(encoding="utf-8")
    if not text.strip():
        return None
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object in {file_path}, got {type(data).__name__}")
    return data
