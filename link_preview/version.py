"""Package version lookup."""

from __future__ import annotations

import logging
import tomllib
from importlib import metadata
from pathlib import Path

logger = logging.getLogger(__name__)

DISTRIBUTION_NAME = "link-preview"
FALLBACK_VERSION = "0.0.0"
MAX_PARENT_DIRECTORIES = 10


def _version_from_pyproject(start: Path) -> str | None:
    directory = start
    for _ in range(MAX_PARENT_DIRECTORIES):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            try:
                data = tomllib.loads(candidate.read_text(encoding="utf-8"))
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.debug("Could not read %s: %s", candidate, e)
            else:
                version = (data.get("project") or {}).get("version")
                if isinstance(version, str) and version.strip():
                    return version.strip()

        if directory.parent == directory:
            break
        directory = directory.parent
    return None


def resolve_package_version(start: Path | None = None) -> str:
    """Return the installed version, else the nearest pyproject.toml version.

    Falls back to "0.0.0" when neither is available.
    """
    if start is None:
        try:
            return metadata.version(DISTRIBUTION_NAME)
        except metadata.PackageNotFoundError:
            start = Path(__file__).resolve().parent

    return _version_from_pyproject(start) or FALLBACK_VERSION
