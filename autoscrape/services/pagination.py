"""Next-button pagination for the extraction pipeline.

Pagination state only changes in ``NextButtonPaginator.decide``: either the
next control is clicked and the page index advances, or the state becomes
terminal with a stop reason. A visible and enabled next control is the normal
continue signal; ``max_pages`` and ``PageRepeatDetector`` bound the loop when a
site keeps offering a next control forever.
"""

from __future__ import annotations

import asyncio
import hashlib
import json
from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from autoscrape.core.logging import get_logger
from autoscrape.services.locator_resolver import resolve, to_locator

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)

# Stop reasons
STOP_NO_PAGINATION = "no_pagination"
STOP_NEXT_UNAVAILABLE = "next_button_unavailable"
STOP_MAX_PAGES = "max_pages_reached"
STOP_REPEATED_PAGE = "repeated_page"


@dataclass(frozen=True)
class PaginationState:
    """Position in the pagination loop.

    Attributes:
        page_index: 1-based index of the current page
        has_next: False once the loop is terminal
        stop_reason: Why the loop stopped (empty while running)
    """

    page_index: int = 1
    has_next: bool = True
    stop_reason: str = ""

    def advance(self) -> PaginationState:
        """Move to the next page."""
        return replace(self, page_index=self.page_index + 1)

    def stop(self, reason: str) -> PaginationState:
        """Make the state terminal."""
        return replace(self, has_next=False, stop_reason=reason)


class PageRepeatDetector:
    """Detect a page whose rows were already seen.

    A next control that keeps "working" while the list never changes (or cycles
    back to an earlier page) would otherwise paginate forever.

    Example:
        >>> detector = PageRepeatDetector()
        >>> detector.is_repeat([{"title": "A"}])
        False
        >>> detector.is_repeat([{"title": "A"}])
        True
    """

    def __init__(self) -> None:
        self.visited_hashes: set[str] = set()

    def is_repeat(self, rows: Sequence[dict[str, str]]) -> bool:
        """Record ``rows`` and report whether an identical page was seen before.

        Empty pages are never treated as repeats.
        """
        if not rows:
            return False

        payload = json.dumps([sorted(row.items()) for row in rows], ensure_ascii=False)
        content_hash = hashlib.sha256(payload.encode("utf-8")).hexdigest()
        if content_hash in self.visited_hashes:
            return True
        self.visited_hashes.add(content_hash)
        return False

    def reset(self) -> None:
        """Reset detector state for a new pagination sequence."""
        self.visited_hashes.clear()


class NextButtonPaginator:
    """Decides whether to continue and moves to the next page.

    Example:
        >>> paginator = NextButtonPaginator(page, "a.next", max_pages=10)
        >>> state = PaginationState()
        >>> state = await paginator.decide(state)
        >>> state.has_next, state.page_index
        (True, 2)
    """

    def __init__(
        self,
        page: Page,
        next_button_selector: str | None,
        max_pages: int | None = None,
        settle_ms: int = 1000,
    ):
        """Initialize paginator.

        Args:
            page: Page showing the result list
            next_button_selector: Selector of the next control; None disables pagination
            max_pages: Maximum number of pages to visit; None for no limit
            settle_ms: Pause after the next page reaches network idle
        """
        self.page = page
        self.next_button_selector = next_button_selector
        self.max_pages = max_pages
        self.settle_ms = settle_ms

    async def decide(self, state: PaginationState) -> PaginationState:
        """Advance to the next page or return a terminal state.

        Args:
            state: Current state (must not be terminal)

        Returns:
            Advanced state after a successful click, else a terminal state
        """
        if not self.next_button_selector:
            return state.stop(STOP_NO_PAGINATION)

        if self.max_pages is not None and state.page_index >= self.max_pages:
            logger.warning(
                "pagination_max_pages_reached",
                page_index=state.page_index,
                max_pages=self.max_pages,
            )
            return state.stop(STOP_MAX_PAGES)

        # Sites often render the same pager above and below the list
        next_button = to_locator(self.page, resolve(self.next_button_selector)).first

        if await next_button.is_visible() and await next_button.is_enabled():
            logger.info("pagination_next_click", page_index=state.page_index)
            await next_button.click()
            await self.page.wait_for_load_state("networkidle")
            if self.settle_ms:
                await asyncio.sleep(self.settle_ms / 1000)
            return state.advance()

        logger.info(
            "pagination_next_unavailable",
            page_index=state.page_index,
            selector=self.next_button_selector,
        )
        return state.stop(STOP_NEXT_UNAVAILABLE)
