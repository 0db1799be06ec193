"""Text input action: replaces a field's content."""

from __future__ import annotations

from autoscrape.services.actions.base import BaseAction
from autoscrape.services.errors import MissingValue


class TextInputAction(BaseAction):
    """Fill a text field, textarea or contenteditable element."""

    name = "TextInputAction"

    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        if value is None:
            raise MissingValue(self.name, self.selector_description)

        self._log_action("fill", value=value)
        await self.locator.fill(value)
