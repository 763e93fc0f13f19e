"""Configuration management for swagger-ui-formatter.

Handles loading .swagger-ui-formatter.yaml files with directory traversal,
environment variable overrides, and default values.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

CONFIG_FILENAME = ".swagger-ui-formatter.yaml"
ENV_APP_ROOT = "SWAGGER_UI_FORMATTER_APP_ROOT"
ENV_CACHE_FILE = "SWAGGER_UI_FORMATTER_CACHE"

DEFAULT_CACHE_FILE = ".swagger-ui-formatter-cache.json"

VALIDATORS = ("default", "none", "custom")
DOC_EXPANSIONS = ("list", "full", "none")
SUBMIT_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class SwaggerUIFormatterError(Exception):
    """Raised for invalid configuration or formatter settings."""


@dataclass
class FormatterSettings:
    """Display settings passed to Swagger UI for each rendered field."""

    validator: str = "default"  # "default", "none", "custom"
    validator_url: str = ""  # Only used with validator "custom"
    doc_expansion: str = "list"  # "list", "full", "none"
    show_top_bar: bool = False
    sort_tags_by_name: bool = False
    supported_submit_methods: list[str] = field(default_factory=lambda: list(SUBMIT_METHODS))
    oauth2_redirect_url: str = ""  # Empty = the library's oauth2-redirect.html

    def validate(self) -> None:
        """Validate settings.

        Raises:
            SwaggerUIFormatterError: If a setting is invalid.
        """
        if self.validator not in VALIDATORS:
            raise SwaggerUIFormatterError(
                f"Invalid validator: {self.validator}. "
                f"Must be one of: {', '.join(VALIDATORS)}"
            )
        if self.validator == "custom" and not self.validator_url:
            raise SwaggerUIFormatterError("validator_url is required for a custom validator")
        if self.doc_expansion not in DOC_EXPANSIONS:
            raise SwaggerUIFormatterError(
                f"Invalid doc_expansion: {self.doc_expansion}. "
                f"Must be one of: {', '.join(DOC_EXPANSIONS)}"
            )
        unknown = [m for m in self.supported_submit_methods if m not in SUBMIT_METHODS]
        if unknown:
            raise SwaggerUIFormatterError(
                f"Invalid submit method(s): {', '.join(unknown)}. "
                f"Must be among: {', '.join(SUBMIT_METHODS)}"
            )


@dataclass
class SwaggerUIFormatterConfig:
    """Complete swagger-ui-formatter configuration."""

    app_root: Path = field(default_factory=Path.cwd)
    cache_file: Path | None = None  # None = in-memory cache only
    formatter: FormatterSettings = field(default_factory=FormatterSettings)
    config_path: Path | None = None  # Path where config was loaded from

    def validate(self) -> None:
        """Validate configuration.

        Raises:
            SwaggerUIFormatterError: If configuration is invalid.
        """
        if not self.app_root.is_dir():
            raise SwaggerUIFormatterError(f"Application root is not a directory: {self.app_root}")
        self.formatter.validate()


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find .swagger-ui-formatter.yaml by traversing up from start_path.

    Args:
        start_path: Directory to start searching from. Defaults to cwd.

    Returns:
        Path to config file if found, None otherwise.
    """
    if start_path is None:
        start_path = Path.cwd()
    else:
        start_path = Path(start_path).resolve()

    if start_path.is_file():
        start_path = start_path.parent

    current = start_path
    while True:
        config_path = current / CONFIG_FILENAME
        if config_path.is_file():
            return config_path

        parent = current.parent
        if parent == current:
            return None
        current = parent


def load_config(
    config_path: Path | None = None,
    start_path: Path | None = None,
    app_root_override: Path | None = None,
) -> SwaggerUIFormatterConfig:
    """Load configuration from file, environment, and overrides.

    Priority (highest to lowest):
    1. Function arguments (app_root_override)
    2. Environment variables (SWAGGER_UI_FORMATTER_APP_ROOT,
       SWAGGER_UI_FORMATTER_CACHE)
    3. Config file (.swagger-ui-formatter.yaml)
    4. Defaults

    Args:
        config_path: Explicit path to config file. If None, searches.
        start_path: Directory to start config file search from.
        app_root_override: Override application root from CLI argument.

    Returns:
        Loaded and validated configuration.
    """
    config = SwaggerUIFormatterConfig()

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.is_file():
            raise SwaggerUIFormatterError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file(start_path)

    if config_path is not None:
        config = _load_config_file(config_path)
        config.config_path = config_path

    env_app_root = os.environ.get(ENV_APP_ROOT)
    if env_app_root:
        config.app_root = Path(env_app_root)

    env_cache = os.environ.get(ENV_CACHE_FILE)
    if env_cache:
        config.cache_file = Path(env_cache)

    if app_root_override is not None:
        config.app_root = Path(app_root_override)

    config.validate()
    return config


def _load_config_file(config_path: Path) -> SwaggerUIFormatterConfig:
    """Load configuration from a YAML file.

    Relative paths in the file resolve against the file's directory.

    Raises:
        SwaggerUIFormatterError: If file cannot be read or parsed.
    """
    try:
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SwaggerUIFormatterError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise SwaggerUIFormatterError(f"Cannot read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise SwaggerUIFormatterError(f"Config file {config_path} must contain a mapping")

    base = config_path.parent
    config = SwaggerUIFormatterConfig(app_root=base, config_path=config_path)

    if "app_root" in data:
        config.app_root = _resolve(base, data["app_root"])

    if data.get("cache_file"):
        config.cache_file = _resolve(base, data["cache_file"])

    if "formatter" in data and isinstance(data["formatter"], dict):
        fmt = data["formatter"]
        defaults = config.formatter
        methods = fmt.get("supported_submit_methods", defaults.supported_submit_methods)
        if not isinstance(methods, list):
            raise SwaggerUIFormatterError("supported_submit_methods must be a list")
        config.formatter = FormatterSettings(
            validator=str(fmt.get("validator", defaults.validator)),
            validator_url=str(fmt.get("validator_url", defaults.validator_url) or ""),
            doc_expansion=str(fmt.get("doc_expansion", defaults.doc_expansion)),
            show_top_bar=bool(fmt.get("show_top_bar", defaults.show_top_bar)),
            sort_tags_by_name=bool(fmt.get("sort_tags_by_name", defaults.sort_tags_by_name)),
            supported_submit_methods=[str(m).lower() for m in methods],
            oauth2_redirect_url=str(
                fmt.get("oauth2_redirect_url", defaults.oauth2_redirect_url) or ""
            ),
        )

    return config


def _resolve(base: Path, value: Any) -> Path:
    path = Path(str(value))
    return path if path.is_absolute() else base / path


def create_default_config(path: Path | None = None) -> Path:
    """Create a default .swagger-ui-formatter.yaml config file.

    Args:
        path: Directory to create config in. Defaults to cwd.

    Returns:
        Path to created config file.

    Raises:
        SwaggerUIFormatterError: If file already exists or cannot be written.
    """
    path = Path.cwd() if path is None else Path(path)
    config_path = path / CONFIG_FILENAME

    if config_path.exists():
        raise SwaggerUIFormatterError(f"Config file already exists: {config_path}")

    config_content = f'''# swagger-ui-formatter configuration

# Application root containing libraries/swagger-ui (relative to this file)
app_root: "."

# Shared cache file for library lookups (omit for no persistence)
cache_file: "{DEFAULT_CACHE_FILE}"

# Swagger UI display settings
formatter:
  validator: "default"       # "default", "none", "custom"
  # validator_url: "https://validator.example.com/validator"
  doc_expansion: "list"      # "list", "full", "none"
  show_top_bar: false
  sort_tags_by_name: false
  supported_submit_methods: [get, put, post, delete, options, head, patch]
  # oauth2_redirect_url: "/libraries/swagger-ui/dist/oauth2-redirect.html"
'''

    try:
        config_path.write_text(config_content)
    except OSError as e:
        raise SwaggerUIFormatterError(f"Cannot write config file: {e}") from e

    return config_path


def config_to_dict(config: SwaggerUIFormatterConfig) -> dict[str, Any]:
    """Convert config to dictionary for display."""
    fmt = config.formatter
    return {
        "app_root": str(config.app_root),
        "cache_file": str(config.cache_file) if config.cache_file else None,
        "formatter": {
            "validator": fmt.validator,
            "validator_url": fmt.validator_url or None,
            "doc_expansion": fmt.doc_expansion,
            "show_top_bar": fmt.show_top_bar,
            "sort_tags_by_name": fmt.sort_tags_by_name,
            "supported_submit_methods": list(fmt.supported_submit_methods),
            "oauth2_redirect_url": fmt.oauth2_redirect_url or None,
        },
        "config_path": str(config.config_path) if config.config_path else None,
    }
