"""Custom error hierarchy for project-detect."""

from __future__ import annotations


class ProjectDetectError(RuntimeError):
    """Base error for the package."""


class RemoteParseError(ProjectDetectError):
    """Raised when a remote URL does not look like <host>/<owner>/<repo>."""

    def __init__(self, url: str, reason: str | None = None):
        self.url = url
        message = f"Unsupported remote URL: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigError(ProjectDetectError):
    """Raised when environment configuration is invalid."""


__all__ = ["ProjectDetectError", "RemoteParseError", "ConfigError"]
