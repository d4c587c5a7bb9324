"""Top-level package for project-detect."""

from importlib import metadata


try:  # pragma: no cover - best effort metadata lookup
    __version__ = metadata.version("project-detect")
except metadata.PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

from .detector import detect_project, detect_project_from_file, is_in_project
from .models import DetectorConfig
from .normalize import extract_project_from_source, normalize_project

__all__ = [
    "__version__",
    "DetectorConfig",
    "detect_project",
    "detect_project_from_file",
    "extract_project_from_source",
    "is_in_project",
    "normalize_project",
]
