"""Field formatter output: one Swagger UI container per API document."""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from typing import Any

from .assets import INTEGRATION_BUNDLE, LIBRARY_BUNDLE
from .config import FormatterSettings
from .hooks import FIELD_ITEM_THEME, SwaggerUIIntegration

logger = logging.getLogger(__name__)

MODULE_NAME = "swagger_ui_formatter"
SETTINGS_NAMESPACE = "swaggerUIFormatter"
MISSING_LIBRARY_MESSAGE = (
    "The Swagger UI library is missing, incorrectly defined or not supported."
)


@dataclass
class FieldItem:
    """Render element for one field value.

    ``settings`` holds the client-side settings under the
    ``swaggerUIFormatter`` namespace; ``error`` is set instead when the
    field cannot be rendered.
    """

    theme: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)
    libraries: list[str] = field(default_factory=list)
    settings: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


def view_elements(
    integration: SwaggerUIIntegration,
    field_name: str,
    urls: list[str],
    settings: FormatterSettings | None = None,
) -> list[FieldItem]:
    """Build render elements for a field holding API document URLs.

    Args:
        integration: Integration the library lookup goes through.
        field_name: Machine name of the field being rendered.
        urls: URL of each API document, in field order.
        settings: Display settings. Defaults to FormatterSettings().

    Returns:
        One FieldItem per URL, or a single error item if the Swagger UI
        library is not installed.
    """
    settings = settings or FormatterSettings()
    settings.validate()

    library_path = integration.locator.locate()
    if library_path is None:
        logger.error("Swagger UI library not found under %s", integration.locator.app_root)
        return [FieldItem(error=MISSING_LIBRARY_MESSAGE)]

    items = []
    for delta, url in enumerate(urls):
        key = f"{field_name}-{delta}"
        items.append(
            FieldItem(
                theme=FIELD_ITEM_THEME,
                variables={"field_name": field_name, "delta": delta},
                libraries=[
                    f"{MODULE_NAME}/{INTEGRATION_BUNDLE}",
                    f"{MODULE_NAME}/{LIBRARY_BUNDLE}",
                ],
                settings={
                    SETTINGS_NAMESPACE: {key: client_settings(url, settings, library_path)}
                },
            )
        )
    return items


def client_settings(url: str, settings: FormatterSettings, library_path: str) -> dict[str, Any]:
    """Translate formatter settings into Swagger UI's option names."""
    result: dict[str, Any] = {
        "swaggerFile": url,
        "docExpansion": settings.doc_expansion,
        "showTopBar": settings.show_top_bar,
        "sortTagsByName": settings.sort_tags_by_name,
        "supportedSubmitMethods": list(settings.supported_submit_methods),
        "oauth2RedirectUrl": settings.oauth2_redirect_url
        or f"{library_path}/dist/oauth2-redirect.html",
    }
    # Swagger UI uses its public validator when validatorUrl is left out.
    if settings.validator == "none":
        result["validatorUrl"] = None
    elif settings.validator == "custom":
        result["validatorUrl"] = settings.validator_url
    return result


def render_field_item(field_name: str, delta: int, svg: str | None = None) -> str:
    """Render the container markup Swagger UI mounts into.

    The SVG definitions, when given, are printed before the container
    since Swagger UI references their symbols from its icons.
    """
    item_id = html.escape(f"{field_name}-{delta}")
    container = (
        f'<div id="swagger-ui-{item_id}" class="swagger-ui-formatter-item" '
        f'data-swagger-ui-formatter="{item_id}"></div>'
    )
    return f'<div class="swagger-ui-formatter">{svg or ""}{container}</div>'


def render_elements(integration: SwaggerUIIntegration, items: list[FieldItem]) -> str:
    """Render a list of FieldItems to HTML."""
    parts = []
    for item in items:
        if item.error is not None:
            parts.append(f'<div class="messages messages--error">{html.escape(item.error)}</div>')
            continue
        parts.append(
            render_field_item(
                item.variables["field_name"],
                item.variables["delta"],
                integration.svg.get_svg(),
            )
        )
    return "\n".join(parts)
