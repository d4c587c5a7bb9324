"""Detect the project a working location belongs to.

Detection resolves symlinks first, then tries each tier in
:data:`DETECTION_TIERS` until one returns an identifier:

1. a known hosting domain in the real path (``.../github.com/owner/repo/...``)
2. the code root anchor (``.../Code/<a>/<b>/<c>/...``)
3. the origin remote of the enclosing git repository

Every failure collapses to ``None``.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from .fs import canonicalize_path
from .git import detect_from_metadata
from .models import DEFAULT_CONFIG, DetectorConfig
from .patterns import match_code_root, match_known_host

logger = logging.getLogger(__name__)

Location = str | os.PathLike[str]
DetectionTier = Callable[[str, DetectorConfig], str | None]

DETECTION_TIERS: tuple[DetectionTier, ...] = (
    match_known_host,
    match_code_root,
    detect_from_metadata,
)


def detect_project(location: Location | None = None, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    canonical = canonicalize_path(location)
    if canonical is None:
        return None
    for tier in DETECTION_TIERS:
        project = tier(canonical, config)
        if project:
            logger.debug("%s -> %s via %s", canonical, project, tier.__name__)
            return project
    logger.debug("No project detected for %s", canonical)
    return None


def detect_project_from_file(file_path: Location, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Detect using the directory containing ``file_path``."""

    if not os.fspath(file_path):
        return None
    return detect_project(Path(file_path).parent, config)


def is_in_project(location: Location | None, project: str | None, config: DetectorConfig = DEFAULT_CONFIG) -> bool:
    """True only when detection succeeds and equals ``project``."""

    if not project:
        return False
    detected = detect_project(location, config)
    return detected is not None and detected == project


__all__ = ["DETECTION_TIERS", "detect_project", "detect_project_from_file", "is_in_project"]
