"""Atomic output writing for the command line front end."""

import os
import tempfile
from pathlib import Path

from .errors import OutputError


def atomic_write(path: Path | str, content: str, encoding: str = "utf-8") -> None:
    """Write content to path so readers never see a partial file.

    The content goes to a temporary file next to the target, which then
    replaces the target in one rename.

    Raises:
        OutputError: If the write fails. The original file is unchanged.
    """
    target = Path(path)
    tmp_name = None
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w", encoding=encoding, dir=target.parent,
            prefix=f".{target.name}.", suffix=".tmp", delete=False,
        ) as f:
            tmp_name = f.name
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise OutputError(f"Failed to write {target}: {exc}") from exc
