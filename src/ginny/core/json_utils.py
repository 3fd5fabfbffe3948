#!/usr/bin/env python3
"""
JSON Utilities Module

Central JSON reading and writing for the data directory. Files are
pretty-printed and keep non-ASCII text (bank names, Spanish descriptions)
readable.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def write_json(filepath: str | Path, data: Any, default: Any = None) -> None:
    """
    Write data to a JSON file atomically.

    The data is written to a temporary file in the same directory and then
    moved over the target, so readers never see a half-written file.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        default: Serializer for non-JSON types (default: None)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(dir=filepath.parent, prefix=f".{filepath.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False, default=default)
        os.replace(tmp_name, filepath)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't valid JSON
    """
    with open(filepath, encoding="utf-8") as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {filepath}: {e}") from e


def format_json(data: Any, default: Any = str) -> str:
    """Format data as a pretty-printed JSON string for CLI output."""
    return json.dumps(data, indent=2, ensure_ascii=False, default=default)
