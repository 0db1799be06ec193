"""Paginated extraction pipeline.

Runs the scrape loop for one page/session:

1. ListWait: wait until the list selector is present (bounded by a timeout)
2. Extract: build one row per list item matched in the live page
3. PaginateDecision: click "next" if it is visible and enabled, else stop
4. Done: hand the finalized, read-only rows to the sinks
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from autoscrape.core import metrics
from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import ScrapingConfig
from autoscrape.services.errors import ExtractionTimeout
from autoscrape.services.pagination import (
    STOP_REPEATED_PAGE,
    NextButtonPaginator,
    PageRepeatDetector,
    PaginationState,
)
from autoscrape.services.row_extractor import Row, RowExtractor
from autoscrape.services.run_events import LoggingEventSink, RunEventSink

if TYPE_CHECKING:
    from collections.abc import Mapping

    from playwright.async_api import Page

logger = get_logger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """Finalized output of one scrape run.

    Attributes:
        rows: Rows from all visited pages, in page then document order (read-only)
        columns: Output column names in configured order
        pages_visited: Number of pages extracted
        state: Terminal pagination state
    """

    rows: tuple[Mapping[str, str], ...]
    columns: tuple[str, ...]
    pages_visited: int
    state: PaginationState

    @property
    def stop_reason(self) -> str:
        """Why pagination stopped."""
        return self.state.stop_reason

    def __len__(self) -> int:
        return len(self.rows)


class ExtractionPipeline:
    """Scrapes a result list across pages.

    The pipeline owns its row accumulator until ``run`` returns; the returned
    ExtractionResult is immutable and safe to share with every sink.

    Example:
        >>> pipeline = ExtractionPipeline(page)
        >>> result = await pipeline.run(scraping_config)
        >>> len(result), result.pages_visited
        (60, 3)
    """

    DEFAULT_LIST_WAIT_TIMEOUT_MS = 10000
    DEFAULT_PAGINATION_SETTLE_MS = 1000

    def __init__(
        self,
        page: Page,
        list_wait_timeout_ms: int | None = None,
        pagination_settle_ms: int | None = None,
        default_max_pages: int | None = None,
        row_extractor: RowExtractor | None = None,
        events: RunEventSink | None = None,
    ):
        """Initialize extraction pipeline.

        Args:
            page: Page showing the result list
            list_wait_timeout_ms: Timeout for the list to appear on each page
            pagination_settle_ms: Pause after each next-page transition
            default_max_pages: Page cap when the job config sets none
            row_extractor: Row extractor for matched list items
            events: Milestone sink (default: structured log)
        """
        self.page = page
        self.list_wait_timeout_ms = (
            self.DEFAULT_LIST_WAIT_TIMEOUT_MS
            if list_wait_timeout_ms is None
            else list_wait_timeout_ms
        )
        self.pagination_settle_ms = (
            self.DEFAULT_PAGINATION_SETTLE_MS
            if pagination_settle_ms is None
            else pagination_settle_ms
        )
        self.default_max_pages = default_max_pages
        self.row_extractor = row_extractor or RowExtractor()
        self.events = events or LoggingEventSink()

    def _build_paginator(self, scraping: ScrapingConfig) -> NextButtonPaginator:
        pagination = scraping.pagination
        next_button_selector = pagination.next_button_selector if pagination else None
        max_pages = (
            pagination.max_pages
            if pagination and pagination.max_pages is not None
            else self.default_max_pages
        )
        return NextButtonPaginator(
            self.page,
            next_button_selector,
            max_pages=max_pages,
            settle_ms=self.pagination_settle_ms,
        )

    async def run(self, scraping: ScrapingConfig) -> ExtractionResult:
        """Run the scrape loop until pagination stops.

        Args:
            scraping: List selector, fields and pagination settings

        Returns:
            Finalized extraction result

        Raises:
            ExtractionTimeout: If the list never appears on a page
        """
        paginator = self._build_paginator(scraping)
        repeat_detector = (
            PageRepeatDetector()
            if scraping.pagination is None or scraping.pagination.stop_on_repeat
            else None
        )
        accumulated: list[Row] = []
        state = PaginationState()
        pages_visited = 0

        logger.info(
            "scraping_starting",
            list_selector=scraping.list_selector,
            fields=scraping.columns,
            paginated=paginator.next_button_selector is not None,
        )

        while state.has_next:
            await self._wait_for_list(scraping.list_selector, state.page_index)
            page_rows = await self._extract_page(scraping)

            if repeat_detector is not None and repeat_detector.is_repeat(page_rows):
                logger.warning("pagination_repeated_page", page_index=state.page_index)
                state = state.stop(STOP_REPEATED_PAGE)
                break

            accumulated.extend(page_rows)
            pages_visited += 1
            metrics.pages_scraped_total.inc()
            metrics.rows_extracted_total.inc(len(page_rows))
            self.events.emit("page_extracted", page_index=state.page_index, rows=len(page_rows))

            state = await paginator.decide(state)

        metrics.pagination_stops_total.labels(reason=state.stop_reason).inc()
        self.events.emit(
            "pagination_stopped", page_index=state.page_index, reason=state.stop_reason
        )

        result = ExtractionResult(
            rows=tuple(MappingProxyType(row) for row in accumulated),
            columns=tuple(scraping.columns),
            pages_visited=pages_visited,
            state=state,
        )
        self.events.emit(
            "scrape_completed", total_items=len(result), pages_visited=pages_visited
        )
        return result

    async def _wait_for_list(self, list_selector: str, page_index: int) -> None:
        try:
            await self.page.wait_for_selector(
                list_selector, state="attached", timeout=self.list_wait_timeout_ms
            )
        except PlaywrightTimeoutError as e:
            raise ExtractionTimeout(list_selector, page_index, self.list_wait_timeout_ms) from e

    async def _extract_page(self, scraping: ScrapingConfig) -> list[Row]:
        return await self.row_extractor.extract_from_page(
            self.page, scraping.list_selector, scraping.fields
        )
