"""Environment-driven configuration for the CLI.

The detection functions never read the environment themselves; the CLI
builds a :class:`DetectorConfig` here and passes it down explicitly.
"""

from __future__ import annotations

import logging
import os
import re
from typing import Mapping

from .exceptions import ConfigError
from .models import DEFAULT_CONFIG, DetectorConfig

ENV_HOSTS = "PROJECT_DETECT_HOSTS"
ENV_CODE_ROOT = "PROJECT_DETECT_CODE_ROOT"
ENV_DEFAULT_HOST = "PROJECT_DETECT_DEFAULT_HOST"
ENV_SOURCE_TAG = "PROJECT_DETECT_SOURCE_TAG"

_INVALID_SEGMENT_RE = re.compile(r"[/\\\s]")


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def load_config(environ: Mapping[str, str] | None = None) -> DetectorConfig:
    env = os.environ if environ is None else environ
    hosts = list(DEFAULT_CONFIG.known_hosts)
    for raw in (env.get(ENV_HOSTS) or "").split(","):
        host = raw.strip().lower()
        if not host:
            continue
        _validate_segment(ENV_HOSTS, host)
        if host not in hosts:
            hosts.append(host)

    code_root = _optional(env, ENV_CODE_ROOT) or DEFAULT_CONFIG.code_root
    _validate_segment(ENV_CODE_ROOT, code_root)

    default_host = (_optional(env, ENV_DEFAULT_HOST) or DEFAULT_CONFIG.default_host).lower()
    _validate_segment(ENV_DEFAULT_HOST, default_host)

    source_tag = _optional(env, ENV_SOURCE_TAG) or DEFAULT_CONFIG.source_tag
    return DetectorConfig(
        known_hosts=tuple(hosts),
        code_root=code_root,
        default_host=default_host,
        source_tag=source_tag,
    )


def _optional(env: Mapping[str, str], var: str) -> str | None:
    raw = env.get(var)
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _validate_segment(var: str, value: str) -> None:
    if _INVALID_SEGMENT_RE.search(value):
        raise ConfigError(
            f"{var} must be a single path segment without slashes or whitespace, got {value!r}."
        )


__all__ = ["configure_logging", "load_config"]
