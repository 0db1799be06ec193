"""Automation runner.

Owns the browser session for one job and sequences the stages:

1. Launch the browser and open a single page
2. Navigate to the target URL
3. Run the declared steps
4. Scrape the result list, if configured
5. Fan the rows out to the configured sinks, if scraping succeeded
6. Close the browser, whatever happened above
"""

from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from playwright.async_api import Browser, Playwright, async_playwright

from autoscrape.core import metrics
from autoscrape.core.browser_config import (
    CHROMIUM_IGNORE_DEFAULT_ARGS,
    CHROMIUM_LAUNCH_ARGS,
    DEFAULT_VIEWPORT,
)
from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import AutomationConfig
from autoscrape.services.extraction import ExtractionPipeline, ExtractionResult
from autoscrape.services.run_events import LoggingEventSink, RunEventSink
from autoscrape.services.sinks import BaseSink, SinkFanOut, SinkOutcome, build_sinks
from autoscrape.services.step_executor import StepExecutor
from config import Settings, get_settings

if TYPE_CHECKING:
    from playwright.async_api import Page

    from autoscrape.services.step_execution_context import StepExecutionContext

logger = get_logger(__name__)


@dataclass
class RunReport:
    """Summary of one automation run.

    Attributes:
        run_id: Run identifier
        target_url: Page the run started from
        steps_executed: Number of steps that completed
        extraction: Scrape result, None when no scraping is configured
        sink_outcomes: One outcome per sink, empty when no scraping ran
        duration_seconds: Wall time of the run
    """

    run_id: str
    target_url: str
    steps_executed: int = 0
    extraction: ExtractionResult | None = None
    sink_outcomes: list[SinkOutcome] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def total_items(self) -> int:
        return len(self.extraction.rows) if self.extraction is not None else 0

    @property
    def failed_sinks(self) -> list[str]:
        return [outcome.sink for outcome in self.sink_outcomes if not outcome.success]


class AutomationRunner:
    """Runs one automation job end to end in a single browser session."""

    def __init__(
        self,
        config: AutomationConfig,
        settings: Settings | None = None,
        events: RunEventSink | None = None,
        sinks: list[BaseSink] | None = None,
    ):
        """Initialize automation runner.

        Args:
            config: Validated job configuration
            settings: Runtime settings (default: get_settings())
            events: Milestone sink (default: structured log bound to the run ID)
            sinks: Sinks to deliver rows to (default: built from config)
        """
        self.config = config
        self.settings = settings or get_settings()
        self.run_id = str(uuid.uuid4())
        self.events = events or LoggingEventSink(self.run_id)
        self.sinks = sinks if sinks is not None else build_sinks(config, self.settings)
        self.step_executor: StepExecutor | None = None

    async def run(self) -> RunReport:
        """Execute the job.

        Returns:
            RunReport for the completed run

        Raises:
            AutomationError: If a step, the scrape or its validation fails
            playwright.async_api.Error: If navigation or the browser itself fails
        """
        report = RunReport(run_id=self.run_id, target_url=self.config.target_url)
        start_time = time.monotonic()
        playwright: Playwright | None = None
        browser: Browser | None = None
        status = "failed"
        error: str | None = None

        try:
            playwright = await async_playwright().start()
            browser = await self._launch_browser(playwright)
            context = await browser.new_context(viewport=DEFAULT_VIEWPORT)
            page = await context.new_page()

            self.events.emit("navigation_started", url=self.config.target_url)
            await page.goto(
                self.config.target_url,
                wait_until=self.settings.navigation_wait_until,
                timeout=self.settings.navigation_timeout_ms,
            )

            await self._run_steps(page)

            if self.config.scraping is not None:
                pipeline = ExtractionPipeline(
                    page,
                    list_wait_timeout_ms=self.settings.list_wait_timeout_ms,
                    pagination_settle_ms=self.settings.pagination_settle_ms,
                    default_max_pages=self.settings.pagination_max_pages,
                    events=self.events,
                )
                report.extraction = await pipeline.run(self.config.scraping)
                report.sink_outcomes = await SinkFanOut(self.sinks, self.events).dispatch(
                    report.extraction
                )

            status = "success"
            return report

        except Exception as e:
            error = f"{type(e).__name__}: {e}"
            raise

        finally:
            await self._close(browser, playwright)
            if self.step_executor is not None:
                # Includes the failing step when a step aborts the run
                report.steps_executed = self.step_executor.context.executed_count
            report.duration_seconds = time.monotonic() - start_time
            metrics.automation_runs_total.labels(status=status).inc()
            metrics.automation_run_duration_seconds.observe(report.duration_seconds)
            self.events.emit(
                "automation_finished",
                status=status,
                steps_executed=report.steps_executed,
                total_items=report.total_items,
                failed_sinks=report.failed_sinks,
                duration_seconds=round(report.duration_seconds, 3),
                error=error,
            )

    async def _run_steps(self, page: Page) -> StepExecutionContext:
        self.step_executor = StepExecutor(
            page,
            settle_ms=self.settings.step_settle_ms,
            events=self.events,
            run_id=self.run_id,
        )
        return await self.step_executor.execute(self.config.steps)

    async def _launch_browser(self, playwright: Playwright) -> Browser:
        browser_type = self.settings.browser_type
        headless = self.settings.headless
        logger.info("browser_launching", browser_type=browser_type, headless=headless)

        if browser_type == "firefox":
            return await playwright.firefox.launch(headless=headless)
        if browser_type == "webkit":
            return await playwright.webkit.launch(headless=headless)
        return await playwright.chromium.launch(
            headless=headless,
            args=CHROMIUM_LAUNCH_ARGS,
            ignore_default_args=CHROMIUM_IGNORE_DEFAULT_ARGS,
        )

    async def _close(self, browser: Browser | None, playwright: Playwright | None) -> None:
        # Close errors must not mask the run's own outcome
        if browser is not None:
            try:
                await browser.close()
            except Exception as e:
                logger.debug("browser_close_error", error=str(e))

        if playwright is not None:
            try:
                await playwright.stop()
            except Exception as e:
                logger.debug("playwright_stop_error", error=str(e))
