"""Command-line interface for swagger-ui-formatter."""

import logging
from pathlib import Path

import click
import yaml

from . import __version__
from .cache import FileCache, MemoryCache
from .config import (
    CONFIG_FILENAME,
    SwaggerUIFormatterError,
    config_to_dict,
    create_default_config,
    find_config_file,
    load_config,
)
from .formatter import render_elements, view_elements
from .hooks import HELP_ROUTE, SwaggerUIIntegration, markdown_renderer


def _config_option(f):
    return click.option(
        "-c",
        "--config",
        "config_path",
        type=click.Path(exists=True),
        help="Config file path",
    )(f)


def _app_root_option(f):
    return click.option(
        "--app-root",
        type=click.Path(exists=True, file_okay=False),
        help="Application root (overrides config)",
    )(f)


@click.group()
@click.version_option(version=__version__, prog_name="swagger-ui-formatter")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose):
    """Locate and integrate the Swagger UI library.

    \b
    Quick start:
      swagger-ui-formatter config init     # Create .swagger-ui-formatter.yaml
      swagger-ui-formatter locate          # Find libraries/swagger-ui
      swagger-ui-formatter bundles         # Show asset library definitions
      swagger-ui-formatter render api openapi.json
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def _integration(config_path, app_root, **kwargs):
    """Load config and build an integration around its cache store."""
    try:
        cfg = load_config(
            config_path=Path(config_path) if config_path else None,
            app_root_override=Path(app_root) if app_root else None,
        )
    except SwaggerUIFormatterError as e:
        raise click.ClickException(str(e))

    cache = FileCache(cfg.cache_file) if cfg.cache_file else MemoryCache()
    return cfg, SwaggerUIIntegration(cfg.app_root, cache, **kwargs)


@main.command()
@_config_option
@_app_root_option
def locate(config_path, app_root):
    """Print the Swagger UI library path."""
    _, integration = _integration(config_path, app_root)
    path = integration.locator.locate()
    if path is None:
        raise click.ClickException(
            f"Swagger UI library not found under {integration.locator.app_root}"
        )
    click.echo(path)


@main.command()
@_config_option
@_app_root_option
def version(config_path, app_root):
    """Print the installed Swagger UI version."""
    _, integration = _integration(config_path, app_root)
    found = integration.locator.get_version()
    if not found:
        raise click.ClickException("Swagger UI version unknown")
    click.echo(found)


@main.command()
@_config_option
@_app_root_option
def bundles(config_path, app_root):
    """Show the asset library definitions as YAML."""
    _, integration = _integration(config_path, app_root)
    libraries = integration.library_info_build()
    if not libraries:
        click.echo("No asset libraries (Swagger UI not installed)")
        return
    click.echo(yaml.dump(libraries, default_flow_style=False, sort_keys=False))


@main.command()
@_config_option
@_app_root_option
def svg(config_path, app_root):
    """Print the SVG definitions from the Swagger UI distribution."""
    _, integration = _integration(config_path, app_root)
    fragment = integration.svg.get_svg()
    if fragment is None:
        raise click.ClickException("No SVG definitions found")
    click.echo(fragment)


@main.command("help")
@click.option("--plain", is_flag=True, help="Do not render Markdown")
@_config_option
@_app_root_option
def help_cmd(plain, config_path, app_root):
    """Print the help page HTML."""
    renderer = None if plain else markdown_renderer()
    _, integration = _integration(config_path, app_root, markdown_renderer=renderer)
    page = integration.help(HELP_ROUTE)
    if page is None:
        raise click.ClickException("Help text unavailable")
    click.echo(page)


@main.command()
@click.argument("field_name")
@click.argument("urls", nargs=-1, required=True)
@_config_option
@_app_root_option
def render(field_name, urls, config_path, app_root):
    """Render Swagger UI containers for API document URLs.

    \b
    Examples:
      swagger-ui-formatter render field_api /files/openapi.json
      swagger-ui-formatter render field_api a.yaml b.yaml
    """
    cfg, integration = _integration(config_path, app_root)
    try:
        items = view_elements(integration, field_name, list(urls), cfg.formatter)
    except SwaggerUIFormatterError as e:
        raise click.ClickException(str(e))
    click.echo(render_elements(integration, items))


@main.group()
def cache():
    """Manage the shared lookup cache."""
    pass


@cache.command("clear")
@_config_option
@_app_root_option
def cache_clear(config_path, app_root):
    """Forget the cached library path and SVG definitions."""
    _, integration = _integration(config_path, app_root)
    integration.cache_flush()
    click.echo("Cache cleared")


@main.group()
def config():
    """Manage swagger-ui-formatter configuration."""
    pass


@config.command("init")
@click.option(
    "-d",
    "--directory",
    type=click.Path(),
    default=".",
    help="Directory to create config in",
)
def config_init(directory):
    """Create a new .swagger-ui-formatter.yaml configuration file."""
    try:
        config_path = create_default_config(Path(directory))
        click.echo(f"Created: {config_path}")
    except SwaggerUIFormatterError as e:
        raise click.ClickException(str(e))


@config.command("show")
@_config_option
def config_show(config_path):
    """Display current configuration.

    Shows merged configuration from file, environment, and defaults.
    """
    try:
        cfg = load_config(config_path=Path(config_path) if config_path else None)
        click.echo(yaml.dump(config_to_dict(cfg), default_flow_style=False, sort_keys=False))
    except SwaggerUIFormatterError as e:
        raise click.ClickException(str(e))


@config.command("where")
@click.option(
    "-d",
    "--directory",
    type=click.Path(exists=True),
    help="Directory to search from",
)
def config_where(directory):
    """Show which config file would be used."""
    start = Path(directory) if directory else Path.cwd()
    config_path = find_config_file(start)

    if config_path:
        click.echo(f"Config file: {config_path}")
    else:
        click.echo(f"No {CONFIG_FILENAME} found (searched from {start})")
