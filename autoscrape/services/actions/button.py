"""Button action: clicks an element."""

from __future__ import annotations

from autoscrape.services.actions.base import BaseAction
from autoscrape.services.errors import UnsupportedAction


class ButtonAction(BaseAction):
    """Click a button. ``click`` is the only accepted action override."""

    name = "ButtonAction"

    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        verb = action or "click"
        if verb != "click":
            raise UnsupportedAction(self.name, verb)

        self._log_action("click")
        await self.locator.click()
