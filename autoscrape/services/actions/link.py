"""Link action: clicks a link."""

from __future__ import annotations

from autoscrape.services.actions.base import BaseAction


class LinkAction(BaseAction):
    """Click a link.

    ``value`` is accepted but not compared against the element's href; the link
    is always just clicked.
    """

    name = "LinkAction"

    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        self._log_action("click")
        await self.locator.click()
