"""Front-end asset bundle definitions for Swagger UI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .library import LibraryLocator

LIBRARY_BUNDLE = "swagger_ui"
INTEGRATION_BUNDLE = "swagger_ui_integration"

INTEGRATION_VERSION = "1.0"
INTEGRATION_SCRIPT = "js/swagger-ui-formatter.js"
INTEGRATION_DEPENDENCIES = ("core/jquery", "core/drupal", "core/drupalSettings")


@dataclass
class AssetBundle:
    """Declarative description of one asset bundle.

    ``css`` and ``js`` map file paths to per-file flags such as
    ``{"minified": True}``.
    """

    version: str
    css: dict[str, dict[str, Any]] = field(default_factory=dict)
    js: dict[str, dict[str, Any]] = field(default_factory=dict)
    dependencies: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Render the bundle in the host's library definition format."""
        result: dict[str, Any] = {"version": self.version}
        if self.css:
            result["css"] = {"theme": {path: dict(flags) for path, flags in self.css.items()}}
        if self.js:
            result["js"] = {path: dict(flags) for path, flags in self.js.items()}
        if self.dependencies:
            result["dependencies"] = list(self.dependencies)
        return result


def build_bundles(locator: LibraryLocator) -> dict[str, AssetBundle]:
    """Build the asset bundles contributed by this package.

    Args:
        locator: Locator used to find the Swagger UI library.

    Returns:
        Empty dict when the library is missing, otherwise the Swagger UI
        bundle and the integration bundle keyed by name.
    """
    path = locator.locate()
    if path is None:
        return {}

    return {
        LIBRARY_BUNDLE: AssetBundle(
            version=locator.get_version(),
            css={f"{path}/dist/swagger-ui.css": {"minified": True}},
            js={
                f"{path}/dist/swagger-ui-bundle.js": {"minified": True},
                f"{path}/dist/swagger-ui-standalone-preset.js": {"minified": True},
            },
        ),
        INTEGRATION_BUNDLE: AssetBundle(
            version=INTEGRATION_VERSION,
            js={INTEGRATION_SCRIPT: {}},
            dependencies=list(INTEGRATION_DEPENDENCIES),
        ),
    }
