"""Radio/checkbox action: checks or unchecks a control."""

from __future__ import annotations

from autoscrape.services.actions.base import BaseAction


class RadioToggleAction(BaseAction):
    """Check a radio button or checkbox, or uncheck it with ``action: uncheck``.

    Any action other than ``uncheck`` (including none) checks the control.
    """

    name = "RadioToggleAction"

    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        if action == "uncheck":
            self._log_action("uncheck")
            await self.locator.uncheck()
        else:
            self._log_action("check")
            await self.locator.check()
