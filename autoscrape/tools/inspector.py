"""Job file skeleton generator.

Opens a page, lists its interactive elements and turns them into a starter
``steps:`` block. Values the inspector cannot know are left as ``TODO``
placeholders for the user to fill in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import yaml
from bs4 import BeautifulSoup, Tag
from playwright.async_api import async_playwright

from autoscrape.core.browser_config import (
    CHROMIUM_IGNORE_DEFAULT_ARGS,
    CHROMIUM_LAUNCH_ARGS,
    DEFAULT_VIEWPORT,
)
from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import StepKindEnum
from config import Settings, get_settings

logger = get_logger(__name__)

INTERACTIVE_SELECTOR = "input, select, button, textarea"

BUTTON_INPUT_TYPES = {"submit", "button"}
TOGGLE_INPUT_TYPES = {"checkbox", "radio"}
TEXT_INPUT_TYPES = {"text", "password", "email", "number"}
# Types a browser keeps as the input.type property; anything else reads as "text"
KNOWN_INPUT_TYPES = {
    "button", "checkbox", "color", "date", "datetime-local", "email", "file", "hidden",
    "image", "month", "number", "password", "radio", "range", "reset", "search",
    "submit", "tel", "text", "time", "url", "week",
}

TEXT_PLACEHOLDER = "TODO: Input value"
OPTION_PLACEHOLDER = "TODO: Option value"


@dataclass(frozen=True)
class ElementInfo:
    """An interactive element found on the page."""

    tag: str
    selector: str
    input_type: str | None = None
    element_id: str | None = None
    name: str | None = None
    placeholder: str | None = None


def best_selector(element: Tag) -> str:
    """Pick a selector for ``element``, preferring id, then name, then first class."""
    element_id = element.get("id")
    if element_id:
        return f"#{element_id}"

    name = element.get("name")
    if name:
        return f'[name="{name}"]'

    classes = element.get("class") or []
    if classes:
        return f".{classes[0]}"

    return element.name


def normalize_input_type(raw: str | None) -> str:
    """Return the type a browser reports for an input with attribute ``raw``."""
    input_type = (raw or "").lower()
    return input_type if input_type in KNOWN_INPUT_TYPES else "text"


def collect_elements(html: str, parser: str = "lxml") -> list[ElementInfo]:
    """List the interactive elements of an HTML document in document order."""
    soup = BeautifulSoup(html, parser)
    elements = []

    for element in soup.select(INTERACTIVE_SELECTOR):
        input_type = None
        if element.name == "input":
            input_type = normalize_input_type(element.get("type"))

        elements.append(
            ElementInfo(
                tag=element.name,
                selector=best_selector(element),
                input_type=input_type,
                element_id=element.get("id") or None,
                name=element.get("name") or None,
                placeholder=element.get("placeholder") or None,
            )
        )

    return elements


def step_kind_for(element: ElementInfo) -> StepKindEnum | None:
    """Map an element to the step kind that drives it, or None if unsupported."""
    if element.tag == "button" or (
        element.tag == "input" and element.input_type in BUTTON_INPUT_TYPES
    ):
        return StepKindEnum.BUTTON
    if element.tag == "input" and element.input_type in TOGGLE_INPUT_TYPES:
        return StepKindEnum.RADIO
    if element.tag == "select":
        return StepKindEnum.SELECT
    if element.tag == "textarea" or (
        element.tag == "input" and element.input_type in TEXT_INPUT_TYPES
    ):
        return StepKindEnum.TEXT_BOX
    return None


def element_to_step(element: ElementInfo) -> dict[str, Any] | None:
    """Build a job file step for ``element``."""
    kind = step_kind_for(element)
    if kind is None:
        return None

    step: dict[str, Any] = {"type": kind.value, "selector": element.selector}
    if kind == StepKindEnum.TEXT_BOX:
        step["value"] = TEXT_PLACEHOLDER
    elif kind == StepKindEnum.BUTTON:
        step["action"] = "click"
    elif kind == StepKindEnum.SELECT:
        step["value"] = OPTION_PLACEHOLDER
    return step


def build_skeleton(url: str, elements: list[ElementInfo]) -> dict[str, Any]:
    """Build a job file skeleton from the page's elements."""
    steps = [step for step in map(element_to_step, elements) if step is not None]
    return {"target_url": url, "steps": steps}


def dump_yaml(document: dict[str, Any]) -> str:
    """Render a job file document as YAML, keeping key order."""
    return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)


async def inspect_page(url: str, settings: Settings | None = None) -> dict[str, Any]:
    """Visit ``url`` headless and return a job file skeleton for it.

    Args:
        url: Page to inspect
        settings: Runtime settings (default: get_settings())

    Returns:
        Skeleton document with ``target_url`` and ``steps``
    """
    settings = settings or get_settings()

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=True,
            args=CHROMIUM_LAUNCH_ARGS,
            ignore_default_args=CHROMIUM_IGNORE_DEFAULT_ARGS,
        )
        try:
            page = await browser.new_page(viewport=DEFAULT_VIEWPORT)
            logger.info("inspector_navigating", url=url)
            await page.goto(url, timeout=settings.navigation_timeout_ms)
            await page.wait_for_load_state("networkidle")
            html = await page.content()
        finally:
            await browser.close()

    elements = collect_elements(html)
    skeleton = build_skeleton(url, elements)
    logger.info(
        "inspector_finished",
        url=url,
        elements=len(elements),
        steps=len(skeleton["steps"]),
    )
    return skeleton
