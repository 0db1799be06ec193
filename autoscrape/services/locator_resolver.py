"""Translate declarative selectors into Playwright locator queries.

Resolution is split in two so the mapping stays pure and testable without a
browser:

- ``resolve`` turns a SelectorSpec into an ``ElementQuery`` (page method + argument)
- ``to_locator`` binds an ``ElementQuery`` to a live page
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from autoscrape.schemas.automation import SelectorDef, SelectorModeEnum, SelectorSpec
from autoscrape.services.errors import UnknownSelectorMode

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page


@dataclass(frozen=True)
class ElementQuery:
    """Engine-native description of an element query.

    Attributes:
        method: Name of the Playwright ``Page`` method to call
        argument: Single positional argument for that method
    """

    method: str
    argument: str


# mode -> (page method, argument template)
_MODE_QUERIES: dict[SelectorModeEnum, tuple[str, str]] = {
    SelectorModeEnum.CSS: ("locator", "{value}"),
    SelectorModeEnum.XPATH: ("locator", "xpath={value}"),
    SelectorModeEnum.TEXT: ("get_by_text", "{value}"),
    SelectorModeEnum.ID: ("locator", "#{value}"),
    SelectorModeEnum.TEST_ID: ("get_by_test_id", "{value}"),
    SelectorModeEnum.ROLE: ("get_by_role", "{value}"),
    SelectorModeEnum.LABEL: ("get_by_label", "{value}"),
    SelectorModeEnum.PLACEHOLDER: ("get_by_placeholder", "{value}"),
    SelectorModeEnum.NAME: ("locator", '[name="{value}"]'),
}


def resolve(spec: SelectorSpec | dict[str, Any]) -> ElementQuery:
    """Resolve a selector spec into an element query.

    Args:
        spec: Raw selector string, SelectorDef, or ``{"mode": ..., "value": ...}`` mapping

    Returns:
        ElementQuery for the selector

    Raises:
        UnknownSelectorMode: If the mode is not supported

    Example:
        >>> resolve(SelectorDef(mode="id", value="q"))
        ElementQuery(method='locator', argument='#q')
    """
    if isinstance(spec, str):
        return ElementQuery("locator", spec)

    if isinstance(spec, dict):
        mode, value = spec.get("mode"), spec.get("value", "")
    elif isinstance(spec, SelectorDef):
        mode, value = spec.mode, spec.value
    else:
        raise UnknownSelectorMode(type(spec).__name__)

    try:
        selector_mode = SelectorModeEnum(mode)
    except ValueError:
        raise UnknownSelectorMode(mode) from None

    method, template = _MODE_QUERIES[selector_mode]
    return ElementQuery(method, template.format(value=value))


def to_locator(page: Page, query: ElementQuery) -> Locator:
    """Bind an element query to a page."""
    return getattr(page, query.method)(query.argument)


def describe(spec: SelectorSpec | dict[str, Any]) -> str:
    """Render a selector for log lines and error messages."""
    if isinstance(spec, str):
        return spec
    if isinstance(spec, SelectorDef):
        return f"{spec.mode}={spec.value}"
    if isinstance(spec, dict):
        return f"{spec.get('mode')}={spec.get('value')}"
    return repr(spec)
