"""Atomic JSON writes for the persisted error-frequency store."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from wordcalc.utils.logging import get_logger

logger = get_logger("utils.atomic")


class AtomicWriteError(Exception):
    """Raised when an atomic write operation fails."""

    pass


def atomic_write_json(
    path: Path,
    data: Any,
    indent: int = 2,
    encoding: str = "utf-8",
) -> None:
    """
    Atomically write JSON data to a file.

    Writes to a temporary file in the target directory, then renames it over
    the target. On failure the temp file is removed and the original file is
    left untouched.

    Args:
        path: Target file path
        data: Data to serialize as JSON
        indent: JSON indentation level
        encoding: Text encoding

    Raises:
        AtomicWriteError: If the write or rename fails
    """
    path = Path(path)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
        )
    except OSError as e:
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise AtomicWriteError(f"Failed to create temp file for {path}: {e}") from e

    temp_path = Path(temp_name)
    success = False

    try:
        with os.fdopen(fd, "w", encoding=encoding) as f:
            json.dump(data, f, indent=indent)

        temp_path.replace(path)
        success = True

        logger.debug("atomic_write_success", path=str(path))

    except (OSError, TypeError, ValueError) as e:
        logger.error("atomic_write_failed", path=str(path), error=str(e))
        raise AtomicWriteError(f"Failed to atomically write {path}: {e}") from e

    finally:
        if not success and temp_path.exists():
            try:
                temp_path.unlink()
            except OSError:
                pass
