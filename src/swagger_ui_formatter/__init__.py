"""swagger-ui-formatter - Render API documents in fields with Swagger UI."""

__version__ = "1.0.0"

from .assets import AssetBundle, build_bundles
from .cache import CacheBackend, FileCache, MemoryCache
from .config import FormatterSettings, SwaggerUIFormatterError
from .hooks import SwaggerUIIntegration, markdown_renderer
from .library import LibraryLocator, is_library_directory
from .svg import SvgExtractor, extract_svg

__all__ = [
    "AssetBundle",
    "build_bundles",
    "CacheBackend",
    "FileCache",
    "MemoryCache",
    "FormatterSettings",
    "SwaggerUIFormatterError",
    "SwaggerUIIntegration",
    "markdown_renderer",
    "LibraryLocator",
    "is_library_directory",
    "SvgExtractor",
    "extract_svg",
    "__version__",
]
