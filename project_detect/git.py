"""Read-only helpers for locating git metadata and parsing its origin remote.

Nothing here shells out to git; the metadata directory is found by walking
up from a path and its ``config`` file is scanned as text.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator
from urllib.parse import urlparse

from .exceptions import RemoteParseError
from .models import DEFAULT_CONFIG, DetectorConfig, RemoteSpec

logger = logging.getLogger(__name__)

_SECTION_RE = re.compile(r"^\s*\[")
_ORIGIN_SECTION_RE = re.compile(r'^\s*\[\s*(?i:remote)\s+"origin"\s*\]')
_URL_ASSIGN_RE = re.compile(r"^\s*url\s*=\s*(?P<value>.*?)\s*$", re.IGNORECASE)
_SCP_LIKE_RE = re.compile(r"^(?:(?P<user>[^@/:]+)@)?(?P<host>[^@/:]+):(?P<path>.+)$")


def iter_ancestors(start: Path) -> Iterator[Path]:
    """Yield ``start`` and each parent up to the filesystem root."""

    yield start
    yield from start.parents


def find_metadata_dir(start: Path, config: DetectorConfig = DEFAULT_CONFIG) -> Path | None:
    """Return the metadata directory owning ``start``.

    The walk stops at the first ancestor holding ``config.metadata_dir``, even
    when that entry turns out to be unusable.
    """

    for directory in iter_ancestors(start):
        candidate = directory / config.metadata_dir
        try:
            if candidate.is_dir():
                return candidate
            if candidate.is_file():
                return _follow_gitdir_file(candidate)
        except OSError as exc:
            logger.debug("Cannot inspect %s: %s", candidate, exc)
            return None
    logger.debug("No %s directory above %s", config.metadata_dir, start)
    return None


def _follow_gitdir_file(pointer: Path) -> Path | None:
    # worktrees and submodules write "gitdir: <path>" instead of a directory
    content = pointer.read_text(encoding="utf-8", errors="replace").strip()
    key, _, value = content.partition(":")
    if key.strip() != "gitdir" or not value.strip():
        logger.debug("Unrecognised metadata file %s", pointer)
        return None
    target = Path(value.strip())
    if not target.is_absolute():
        target = pointer.parent / target
    commondir = target / "commondir"
    if commondir.is_file():
        common = Path(commondir.read_text(encoding="utf-8", errors="replace").strip())
        target = common if common.is_absolute() else target / common
    if not target.is_dir():
        logger.debug("gitdir %s referenced by %s does not exist", target, pointer)
        return None
    return target


def read_config_text(metadata_dir: Path) -> str | None:
    config_path = metadata_dir / "config"
    try:
        return config_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        logger.debug("Cannot read %s: %s", config_path, exc)
        return None


def origin_url_from_config(text: str) -> str | None:
    """Return the first ``url`` value of the ``[remote "origin"]`` section."""

    in_origin = False
    for line in text.splitlines():
        if _SECTION_RE.match(line):
            if in_origin:
                break
            in_origin = bool(_ORIGIN_SECTION_RE.match(line))
            continue
        if not in_origin:
            continue
        match = _URL_ASSIGN_RE.match(line)
        if match:
            value = match.group("value").strip('"')
            if value:
                return value
    return None


def parse_remote(url: str, config: DetectorConfig = DEFAULT_CONFIG) -> RemoteSpec:
    """Parse ``scheme://host/owner/repo`` or ``[user@]host:owner/repo`` remotes."""

    remote = url.strip()
    if "://" in remote:
        try:
            parsed = urlparse(remote)
            host = parsed.hostname or ""
        except ValueError as exc:
            raise RemoteParseError(url, str(exc)) from exc
        path = parsed.path
    else:
        match = _SCP_LIKE_RE.match(remote)
        if not match:
            raise RemoteParseError(url)
        host = match.group("host").lower()
        path = match.group("path")
    known = {known_host.lower() for known_host in config.known_hosts}
    if host not in known:
        raise RemoteParseError(url, f"host {host or '?'} is not a known host")
    parts = path.strip("/").split("/")
    if len(parts) != 2 or not all(parts):
        raise RemoteParseError(url, "expected <owner>/<repo>")
    owner, name = parts
    while name.endswith(".git"):
        name = name[: -len(".git")]
    if not name:
        raise RemoteParseError(url, "empty repository name")
    return RemoteSpec(host=host, owner=owner, name=name)


def detect_from_metadata(path: str, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Derive an identifier from the origin remote of the enclosing repository."""

    start = Path(path)
    try:
        if not start.is_dir():
            start = start.parent
    except OSError as exc:
        logger.debug("Cannot inspect %s: %s", start, exc)
        return None
    metadata_dir = find_metadata_dir(start, config)
    if metadata_dir is None:
        return None
    text = read_config_text(metadata_dir)
    if text is None:
        return None
    url = origin_url_from_config(text)
    if not url:
        logger.debug("No origin remote in %s", metadata_dir)
        return None
    try:
        return parse_remote(url, config).slug
    except RemoteParseError as exc:
        logger.debug("%s", exc)
        return None


__all__ = [
    "detect_from_metadata",
    "find_metadata_dir",
    "iter_ancestors",
    "origin_url_from_config",
    "parse_remote",
    "read_config_text",
]
