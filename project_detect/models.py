"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_KNOWN_HOSTS = ("github.com", "gitlab.com", "bitbucket.org")


@dataclass(frozen=True)
class DetectorConfig:
    """Knobs for the detection tiers. Defaults match the ghq layout."""

    known_hosts: tuple[str, ...] = DEFAULT_KNOWN_HOSTS
    code_root: str = "Code"
    default_host: str = "github.com"
    source_tag: str = "rrr:"
    metadata_dir: str = ".git"


@dataclass(frozen=True)
class RemoteSpec:
    """Host, owner and repository parsed out of a remote URL."""

    host: str
    owner: str
    name: str

    @property
    def slug(self) -> str:
        return f"{self.host}/{self.owner}/{self.name}"


DEFAULT_CONFIG = DetectorConfig()

__all__ = ["DEFAULT_CONFIG", "DEFAULT_KNOWN_HOSTS", "DetectorConfig", "RemoteSpec"]
