"""Extract project identifiers from code-root style paths.

A code root mirrors the hosting layout on disk, e.g.
``~/Code/github.com/acme/widget/src``. Paths are expected to be canonical
(see :func:`project_detect.fs.canonicalize_path`), i.e. ``/`` separated.
"""

from __future__ import annotations

import logging
import re

from .models import DEFAULT_CONFIG, DetectorConfig

logger = logging.getLogger(__name__)

_SEGMENT = r"([^/]+)"


def _known_host_pattern(hosts: tuple[str, ...]) -> re.Pattern[str]:
    alternatives = "|".join(re.escape(host) for host in hosts)
    return re.compile(rf"(?:^|/)({alternatives})/{_SEGMENT}/{_SEGMENT}")


def _code_root_pattern(code_root: str) -> re.Pattern[str]:
    return re.compile(rf"(?:^|/){re.escape(code_root)}/{_SEGMENT}/{_SEGMENT}/{_SEGMENT}")


def match_known_host(path: str, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Return ``host/owner/repo`` for the leftmost known host segment in ``path``."""

    if not config.known_hosts:
        return None
    match = _known_host_pattern(config.known_hosts).search(path)
    if not match:
        return None
    host, owner, repo = match.groups()
    logger.debug("Matched known host %s in %s", host, path)
    return f"{host}/{owner}/{repo}"


def match_code_root(path: str, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Return the three segments below the code root anchor, joined verbatim."""

    match = _code_root_pattern(config.code_root).search(path)
    if not match:
        return None
    logger.debug("Matched %s/ anchor in %s", config.code_root, path)
    return "/".join(match.groups())


def match_path(path: str, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    return match_known_host(path, config) or match_code_root(path, config)


__all__ = ["match_code_root", "match_known_host", "match_path"]
