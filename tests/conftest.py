"""Shared fixtures for swagger-ui-formatter tests."""

import json

import pytest

from swagger_ui_formatter.cache import MemoryCache
from swagger_ui_formatter.library import REQUIRED_FILES, LibraryLocator

SAMPLE_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" style="position:absolute;width:0;height:0">\n'
    '  <defs>\n'
    '    <symbol viewBox="0 0 20 20" id="unlocked">\n'
    '      <path d="M15.8 8H14V5.6C14 2.703 12.665 1 10 1"></path>\n'
    "    </symbol>\n"
    "  </defs>\n"
    "</svg>"
)

SAMPLE_INDEX = f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <title>Swagger UI</title>
</head>
<body>
{SAMPLE_SVG}
<div id="swagger-ui"></div>
<svg id="second"><circle r="1"></circle></svg>
</body>
</html>
"""


def _install_library(app_root, name="swagger-ui", version="3.14.2", index=SAMPLE_INDEX):
    """Create a Swagger UI distribution under app_root/libraries/name."""
    library = app_root / "libraries" / name
    for relative in REQUIRED_FILES:
        path = library / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("/* stub */")
    if version is not None:
        (library / "package.json").write_text(json.dumps({"name": "swagger-ui", "version": version}))
    if index is not None:
        (library / "dist" / "index.html").write_text(index)
    return library


@pytest.fixture
def install_library():
    """Factory creating Swagger UI distributions."""
    return _install_library


@pytest.fixture
def sample_svg():
    return SAMPLE_SVG


@pytest.fixture
def sample_index():
    return SAMPLE_INDEX


@pytest.fixture
def cache():
    """Empty in-memory cache."""
    return MemoryCache()


@pytest.fixture
def locator(tmp_path, cache):
    """Locator rooted at an empty tmp_path."""
    return LibraryLocator(tmp_path, cache)
