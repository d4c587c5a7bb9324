"""Map user-supplied project references onto ``host/owner/repo``."""

from __future__ import annotations

import re

from .models import DEFAULT_CONFIG, DetectorConfig

_PART = r"([^/\s]+)"
_URL_PART = r"([^/\s?#]+)"
_TRAILING_PUNCTUATION = ".,;:!?)]}\"'`"


def _strip_git_suffix(name: str) -> str:
    while name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def _compose(host: str, owner: str, repo: str) -> str | None:
    repo = _strip_git_suffix(repo)
    if not owner or not repo:
        return None
    return f"{host}/{owner}/{repo}"


def normalize_project(value: str | None = None, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Return the canonical identifier for ``value`` or None.

    Handles, in order:

    - ``github.com/owner/repo`` (returned as-is)
    - ``https://github.com/owner/repo.git`` and deeper URLs
    - paths such as ``~/Code/github.com/owner/repo/src``
    - ``owner/repo``
    """

    if not value:
        return None
    candidate = value.strip()
    if not candidate:
        return None
    host = config.default_host
    escaped = re.escape(host)

    canonical = re.match(rf"^{escaped}/{_PART}/{_PART}$", candidate)
    if canonical:
        return _compose(host, *canonical.groups())

    url = re.search(rf"https?://{escaped}/{_URL_PART}/{_URL_PART}", candidate)
    if url:
        return _compose(host, *url.groups())

    embedded = re.search(rf"(?<![\w.-]){escaped}/{_PART}/{_PART}", candidate)
    if embedded:
        return _compose(host, *embedded.groups())

    short = re.match(rf"^{_PART}/{_PART}$", candidate)
    if short:
        return _compose(host, *short.groups())
    return None


def extract_project_from_source(text: str | None = None, config: DetectorConfig = DEFAULT_CONFIG) -> str | None:
    """Best-effort scan of free text such as ``"oracle_learn from github.com/o/r"``."""

    if not text:
        return None
    host = config.default_host
    escaped = re.escape(host)
    patterns = (
        re.compile(rf"from\s+{escaped}/{_PART}/{_PART}"),
        re.compile(rf"^{re.escape(config.source_tag)}\s*{_PART}/{_PART}"),
        re.compile(rf"{escaped}/{_PART}/{_PART}"),
    )
    for pattern in patterns:
        for match in pattern.finditer(text):
            owner, repo = match.groups()
            project = _compose(host, owner, repo.rstrip(_TRAILING_PUNCTUATION))
            if project:
                return project
    return None


__all__ = ["extract_project_from_source", "normalize_project"]
