"""Option select action: picks an option in a <select>."""

from __future__ import annotations

from playwright.async_api import Error as PlaywrightError

from autoscrape.core.logging import get_logger
from autoscrape.services.actions.base import BaseAction
from autoscrape.services.errors import MissingValue

logger = get_logger(__name__)


class OptionSelectAction(BaseAction):
    """Select an option by visible label, falling back to its value attribute."""

    name = "OptionSelectAction"

    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        if value is None:
            raise MissingValue(self.name, self.selector_description)

        self._log_action("select", value=value)
        locator = self.locator
        try:
            await locator.select_option(label=value)
        except PlaywrightError as e:
            logger.debug(
                "select_by_label_failed",
                selector=self.selector_description,
                value=value,
                error=str(e),
            )
            # Second failure propagates to the step executor
            await locator.select_option(value=value)
