"""Swagger UI library discovery.

Finds the Swagger UI distribution under the application root and reads its
version. Only positive lookups are memoized: while the library is missing,
every call scans the filesystem again, so a library installed later is
picked up without a cache flush.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .cache import LIBRARY_PATH_KEY, CacheBackend

logger = logging.getLogger(__name__)

# Candidate locations relative to the application root, in search order.
LIBRARY_DIRECTORIES = (
    "/libraries/swagger-ui",
    "/libraries/swagger_ui",
)

# Every one of these must exist for a directory to count as the library.
REQUIRED_FILES = (
    "package.json",
    "dist/swagger-ui.css",
    "dist/swagger-ui-bundle.js",
    "dist/swagger-ui-standalone-preset.js",
)


def is_library_directory(directory: Path) -> bool:
    """Check whether a directory holds a usable Swagger UI distribution.

    Args:
        directory: Filesystem path to the candidate directory.

    Returns:
        True only if all REQUIRED_FILES exist under the directory.
    """
    directory = Path(directory)
    return all((directory / name).is_file() for name in REQUIRED_FILES)


class LibraryLocator:
    """Resolve the app-root-relative path of the Swagger UI library.

    Args:
        app_root: Application root the library directories live under.
        cache: Shared cache store for the resolved path.
    """

    def __init__(self, app_root: Path, cache: CacheBackend) -> None:
        self.app_root = Path(app_root)
        self.cache = cache

    def absolute_path(self, path: str) -> Path:
        """Map a library path like ``/libraries/swagger-ui`` onto the disk."""
        return self.app_root / path.lstrip("/")

    def locate(self) -> str | None:
        """Return the library path, or None if no candidate is valid.

        A cached path is returned as-is, even if the files have since been
        removed. Not-found results are never cached.
        """
        cached = self.cache.get(LIBRARY_PATH_KEY)
        if cached is not None:
            logger.debug("Library path cache hit: %s", cached)
            return cached

        for candidate in LIBRARY_DIRECTORIES:
            if is_library_directory(self.absolute_path(candidate)):
                logger.debug("Found Swagger UI library at %s", candidate)
                self.cache.set(LIBRARY_PATH_KEY, candidate)
                return candidate

        logger.debug("Swagger UI library not found under %s", self.app_root)
        return None

    def get_version(self) -> str:
        """Return the ``version`` from the library's package.json.

        Returns:
            The version string, or "" when the library or manifest is
            missing, unreadable, malformed, or has no version.
        """
        path = self.locate()
        if path is None:
            return ""

        manifest = self.absolute_path(path) / "package.json"
        try:
            data = json.loads(manifest.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return ""
        except (OSError, ValueError) as e:
            logger.warning("Cannot read Swagger UI manifest %s: %s", manifest, e)
            return ""

        if not isinstance(data, dict) or data.get("version") is None:
            return ""
        return str(data["version"])
