"""Base action interface.

Defines the interface that all step actions must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import SelectorSpec
from autoscrape.services.locator_resolver import describe, resolve, to_locator

if TYPE_CHECKING:
    from playwright.async_api import Locator, Page

logger = get_logger(__name__)


class BaseAction(ABC):
    """Abstract base class for step actions.

    An action is bound to one page and one selector at construction. The
    selector is resolved lazily on each ``locator`` access, so a bad selector
    mode fails the step that uses it and nothing earlier.

    Actions never poll for readiness themselves: Playwright's ``fill``/``click``/
    ``check``/``select_option`` wait until the element is actionable.
    """

    name: str = "BaseAction"

    def __init__(self, page: Page, selector: SelectorSpec):
        """Initialize action.

        Args:
            page: Page the action runs against
            selector: Raw selector string or SelectorDef
        """
        self.page = page
        self.selector = selector

    @property
    def locator(self) -> Locator:
        """Resolve the selector against the page."""
        return to_locator(self.page, resolve(self.selector))

    @property
    def selector_description(self) -> str:
        """Selector rendered for logs."""
        return describe(self.selector)

    @abstractmethod
    async def execute(self, value: str | None = None, action: str | None = None) -> None:
        """Perform the action.

        Args:
            value: Input value, when the action takes one
            action: Optional verb override (e.g. "uncheck")

        Raises:
            NotImplementedError: Must be implemented by subclass
        """
        raise NotImplementedError("Subclass must implement execute()")

    def _log_action(self, verb: str, **context: object) -> None:
        logger.info(
            "step_action",
            action=self.name,
            verb=verb,
            selector=self.selector_description,
            **context,
        )
