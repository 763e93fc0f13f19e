"""Extraction of the SVG icon definitions shipped with Swagger UI.

Newer Swagger UI releases expect the host page to provide the inline
``<svg>`` symbol sheet that their ``dist/index.html`` carries. This module
pulls that element out of the distribution so it can be printed next to
each rendered field.
"""

from __future__ import annotations

import logging
from html.parser import HTMLParser

from bs4 import BeautifulSoup, Tag

from .cache import SVG_DEFINITIONS_KEY, CacheBackend
from .library import LibraryLocator

logger = logging.getLogger(__name__)

INDEX_FILE = "dist/index.html"


class SvgExtractor:
    """Extract and memoize the first ``<svg>`` inside ``<body>``.

    Args:
        locator: Locator used to find the Swagger UI library.
        cache: Shared cache store for the extracted fragment.
    """

    def __init__(self, locator: LibraryLocator, cache: CacheBackend) -> None:
        self.locator = locator
        self.cache = cache

    def get_svg(self) -> str | None:
        """Return the SVG fragment, or None if it cannot be found.

        Only a found fragment is cached; every miss reparses on the next call.
        """
        cached = self.cache.get(SVG_DEFINITIONS_KEY)
        if cached is not None:
            logger.debug("SVG definitions cache hit")
            return cached

        path = self.locator.locate()
        if path is None:
            return None

        index = self.locator.absolute_path(path) / INDEX_FILE
        if not index.is_file():
            logger.debug("No %s in Swagger UI library at %s", INDEX_FILE, path)
            return None

        try:
            # newline="" keeps CRLF line endings as they are on disk.
            with index.open(encoding="utf-8", newline="") as f:
                html = f.read()
        except (OSError, ValueError) as e:
            logger.warning("Cannot read %s: %s", index, e)
            return None

        svg = extract_svg(html)
        if svg is None:
            logger.debug("No <svg> element under <body> in %s", index)
            return None

        self.cache.set(SVG_DEFINITIONS_KEY, svg)
        return svg


def extract_svg(html: str) -> str | None:
    """Return the markup of the first ``<svg>`` within ``<body>``.

    The document is parsed as HTML. Without an explicit ``<body>`` tag,
    everything outside ``<head>`` counts as body content. The selected
    element is returned exactly as written in the source.

    Args:
        html: HTML document.

    Returns:
        The element's outer HTML, or None if there is no match or its
        source span cannot be recovered.
    """
    # html.parser records source positions; other tree builders don't.
    soup = BeautifulSoup(html, "html.parser")

    svg = _first_body_svg(soup)
    if svg is None or svg.sourceline is None or svg.sourcepos is None:
        return None

    start = _line_starts(html)[svg.sourceline - 1] + svg.sourcepos
    end = _SvgSpanParser.spans(html).get(start)
    if end is None:
        logger.debug("Unterminated <svg> at line %d", svg.sourceline)
        return None
    return html[start:end]


def _first_body_svg(soup: BeautifulSoup) -> Tag | None:
    if soup.body is not None:
        return soup.body.find("svg")
    for svg in soup.find_all("svg"):
        if svg.find_parent("head") is None:
            return svg
    return None


def _line_starts(html: str) -> list[int]:
    """Offsets of each line start, counting lines the way HTMLParser does."""
    starts = [0]
    position = html.find("\n")
    while position != -1:
        starts.append(position + 1)
        position = html.find("\n", position + 1)
    return starts


class _SvgSpanParser(HTMLParser):
    """Map each ``<svg>`` start offset to the offset just past its end tag.

    Tokenizes like BeautifulSoup's ``html.parser`` builder, so ``</svg>``
    text inside comments, CDATA, ``<style>`` or ``<script>`` is not taken
    for an end tag.
    """

    def __init__(self, html: str) -> None:
        super().__init__(convert_charrefs=False)
        self.html = html
        self.line_starts = _line_starts(html)
        self.open: list[int] = []
        self.closed: dict[int, int] = {}

    @classmethod
    def spans(cls, html: str) -> dict[int, int]:
        parser = cls(html)
        parser.feed(html)
        parser.close()
        return parser.closed

    def _offset(self) -> int:
        line, column = self.getpos()
        return self.line_starts[line - 1] + column

    def handle_starttag(self, tag, attrs):
        if tag == "svg":
            self.open.append(self._offset())

    def handle_startendtag(self, tag, attrs):
        if tag == "svg":
            start = self._offset()
            self.closed[start] = start + len(self.get_starttag_text())

    def handle_endtag(self, tag):
        if tag != "svg" or not self.open:
            return
        start = self.open.pop()
        close = self.html.find(">", self._offset())
        if close != -1:
            self.closed[start] = close + 1
