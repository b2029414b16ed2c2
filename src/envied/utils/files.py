"""File output helpers."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from envied.utils.errors import GenerationError


def write_atomic(path: Path | str, content: str) -> Path:
    """Replace ``path`` with ``content`` in a single rename.

    The text is written to a temporary file in the destination directory
    and moved over the target, so readers never observe a partial file.

    Raises:
        GenerationError: If the directory or file cannot be written
    """
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    except OSError as e:
        raise GenerationError(f"Cannot create output in {path.parent}: {e}", path=path) from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    except OSError as e:
        Path(tmp_name).unlink(missing_ok=True)
        raise GenerationError(f"Failed to write {path}: {e}", path=path) from e
    return path
