"""Interactive step recorder.

Opens a visible browser, listens to the user's clicks and form changes, and
turns them into job file steps. Recording ends when the page or the browser
is closed.
"""

from __future__ import annotations

import asyncio
from typing import Any

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

BINDING_NAME = "recordAction"

# Injected into every document before page scripts run. Clicks are recorded
# on the nearest button/link ancestor; inputs are recorded on "change".
RECORDER_SCRIPT = """
(() => {
  const selectorFor = (el) => {
    if (el.id) return `#${el.id}`;
    const name = el.getAttribute('name');
    if (name) return `[name="${name}"]`;
    if (typeof el.className === 'string') {
      const cls = el.className.split(' ')[0];
      if (cls) return `.${cls}`;
    }
    return el.tagName.toLowerCase();
  };

  const interactiveAncestor = (target) => {
    let el = target;
    while (el && el.tagName !== 'BODY') {
      if (['BUTTON', 'A'].includes(el.tagName) || el.onclick || el.getAttribute('role') === 'button') {
        return el;
      }
      el = el.parentElement;
    }
    return null;
  };

  document.addEventListener('click', (event) => {
    if (event.target.tagName === 'INPUT') return;
    const el = interactiveAncestor(event.target);
    if (el) {
      window.recordAction({type: 'button', selector: selectorFor(el), action: 'click'});
    }
  }, true);

  const TEXT_TYPES = ['text', 'password', 'email', 'number', 'search', 'tel', 'url'];

  document.addEventListener('change', (event) => {
    const el = event.target;
    if (!el.tagName) return;
    const selector = selectorFor(el);
    if (el.type === 'checkbox' || el.type === 'radio') {
      window.recordAction({type: 'radio', selector, action: el.checked ? 'check' : 'uncheck'});
    } else if (el.tagName === 'SELECT') {
      window.recordAction({type: 'select', selector, value: el.value});
    } else if (TEXT_TYPES.includes(el.type) || el.tagName === 'TEXTAREA') {
      window.recordAction({type: 'text_box', selector, value: el.value});
    }
  }, true);
})();
"""

RECORDABLE_KINDS = {
    StepKindEnum.TEXT_BOX.value,
    StepKindEnum.BUTTON.value,
    StepKindEnum.RADIO.value,
    StepKindEnum.SELECT.value,
}


def normalize_url(url: str) -> str:
    """Prefix ``https://`` when the URL has no http(s) scheme."""
    url = url.strip()
    if not url.startswith("http"):
        return f"https://{url}"
    return url


class StepRecorder:
    """Collects steps reported by the injected page script."""

    def __init__(self) -> None:
        self.steps: list[dict[str, Any]] = []

    def record(self, payload: dict[str, Any]) -> None:
        """Append one reported action, ignoring payloads that are not steps."""
        if not isinstance(payload, dict):
            return
        kind = payload.get("type")
        selector = payload.get("selector")
        if kind not in RECORDABLE_KINDS or not selector:
            logger.debug("recorder_payload_ignored", payload=payload)
            return

        step: dict[str, Any] = {"type": kind, "selector": selector}
        for key in ("value", "action"):
            if payload.get(key) is not None:
                step[key] = str(payload[key])

        self.steps.append(step)
        logger.info("recorder_step_recorded", index=len(self.steps) - 1, **step)

    def to_document(self, url: str) -> dict[str, Any]:
        """Build a job file document from the recorded steps."""
        return {"target_url": url, "steps": list(self.steps)}


async def record_session(url: str, settings: Settings | None = None) -> dict[str, Any]:
    """Record user actions on ``url`` until the page or browser closes.

    Args:
        url: Page to start from (``https://`` is added when missing)
        settings: Runtime settings (default: get_settings())

    Returns:
        Job file document with ``target_url`` and the recorded ``steps``
    """
    settings = settings or get_settings()
    url = normalize_url(url)
    recorder = StepRecorder()
    closed = asyncio.Event()

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(
            headless=False,
            args=CHROMIUM_LAUNCH_ARGS,
            ignore_default_args=CHROMIUM_IGNORE_DEFAULT_ARGS,
        )
        try:
            context = await browser.new_context(viewport=DEFAULT_VIEWPORT)
            page = await context.new_page()

            await page.expose_function(BINDING_NAME, recorder.record)
            await page.add_init_script(script=RECORDER_SCRIPT)
            page.on("close", lambda _: closed.set())
            browser.on("disconnected", lambda _: closed.set())

            logger.info("recorder_started", url=url)
            await page.goto(url, timeout=settings.navigation_timeout_ms)
            await closed.wait()
        finally:
            if browser.is_connected():
                await browser.close()

    logger.info("recorder_finished", url=url, steps=len(recorder.steps))
    return recorder.to_document(url)
