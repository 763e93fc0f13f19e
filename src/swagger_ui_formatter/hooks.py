"""Entry points the host framework calls into.

``SwaggerUIIntegration`` wires the locator, the SVG extractor and the help
renderer around one cache store and exposes them as the host's hooks:
asset library discovery, cache flush, theme registration and help.
"""

from __future__ import annotations

import html
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import markdown

from .assets import build_bundles
from .cache import LIBRARY_PATH_KEY, SVG_DEFINITIONS_KEY, CacheBackend, MemoryCache
from .library import LibraryLocator
from .svg import SvgExtractor

logger = logging.getLogger(__name__)

HELP_ROUTE = "help.page.swagger_ui_formatter"
README_PATH = Path(__file__).parent / "README.md"

FIELD_ITEM_THEME = "swagger_ui_field_item"

MarkdownRenderer = Callable[[str], str]


class SwaggerUIIntegration:
    """Host-facing facade for the Swagger UI field formatter.

    Args:
        app_root: Application root the Swagger UI library is installed under.
        cache: Shared cache store. Defaults to a private in-memory cache.
        markdown_renderer: Optional Markdown-to-HTML callable for the help
            page. Without one, the README is shown preformatted.
        readme_path: README rendered by the help page.
    """

    def __init__(
        self,
        app_root: Path,
        cache: CacheBackend | None = None,
        markdown_renderer: MarkdownRenderer | None = None,
        readme_path: Path = README_PATH,
    ) -> None:
        self.cache = cache if cache is not None else MemoryCache()
        self.locator = LibraryLocator(app_root, self.cache)
        self.svg = SvgExtractor(self.locator, self.cache)
        self.markdown_renderer = markdown_renderer
        self.readme_path = Path(readme_path)

    def library_info_build(self) -> dict[str, dict[str, Any]]:
        """Return asset library definitions keyed by library name."""
        return {name: bundle.to_dict() for name, bundle in build_bundles(self.locator).items()}

    def cache_flush(self) -> None:
        """Forget the memoized library path and SVG definitions."""
        self.cache.invalidate(LIBRARY_PATH_KEY)
        self.cache.invalidate(SVG_DEFINITIONS_KEY)
        logger.debug("Flushed Swagger UI formatter caches")

    def theme(self) -> dict[str, dict[str, Any]]:
        """Return the render templates this package declares."""
        return {
            FIELD_ITEM_THEME: {
                "variables": {"field_name": None, "delta": None},
            },
        }

    def help(self, route_name: str) -> str | None:
        """Render the help page for the given route.

        Returns:
            HTML for this package's help route, None for any other route or
            when the README cannot be read.
        """
        if route_name != HELP_ROUTE:
            return None

        try:
            text = self.readme_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot read help text %s: %s", self.readme_path, e)
            return None

        if self.markdown_renderer is not None:
            return self.markdown_renderer(text)
        return f"<pre>{html.escape(text)}</pre>"


def markdown_renderer() -> MarkdownRenderer:
    """Return a renderer backed by the ``markdown`` package."""

    def render(text: str) -> str:
        return markdown.markdown(text, extensions=["fenced_code", "tables"])

    return render
