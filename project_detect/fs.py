"""Filesystem helpers: symlink resolution and separator normalization."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


def to_posix_separators(path: str) -> str:
    return path.replace("\\", "/")


def canonicalize_path(location: str | os.PathLike[str] | None) -> str | None:
    """Return the real absolute path of ``location`` using ``/`` separators.

    Returns None when the location is empty, missing, a broken symlink, a
    symlink loop, or otherwise unresolvable.
    """

    if location is None:
        return None
    raw = os.fspath(location)
    if not raw.strip():
        return None
    try:
        resolved = Path(raw).expanduser().resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as exc:
        # RuntimeError: symlink loops before 3.13; ValueError: embedded NUL
        logger.debug("Cannot resolve %s: %s", raw, exc)
        return None
    return to_posix_separators(str(resolved))


__all__ = ["canonicalize_path", "to_posix_separators"]
