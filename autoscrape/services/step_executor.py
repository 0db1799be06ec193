"""Step executor for running declarative UI steps in order.

Steps run strictly in the order they are declared. Each step gets a fresh
action bound to its selector, and a fixed settle pause follows every action so
asynchronous page reactions (XHR, re-renders) can finish before the next step.
There is no retry: the first failing step aborts the run.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from collections.abc import Sequence
from typing import TYPE_CHECKING

from autoscrape.core import metrics
from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import Step
from autoscrape.services.action_factory import create_action, validate_steps
from autoscrape.services.errors import AutomationError, StepExecutionError
from autoscrape.services.locator_resolver import describe
from autoscrape.services.run_events import LoggingEventSink, RunEventSink
from autoscrape.services.step_execution_context import StepExecutionContext, StepResult

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)


class StepExecutor:
    """Executes a step list against one page.

    The executor:
    1. Rejects unknown step kinds before anything runs
    2. Builds the action for each step from its kind
    3. Runs the action with the step's value and action override
    4. Pauses ``settle_ms`` after each action
    5. Records every outcome in a StepExecutionContext
    """

    DEFAULT_SETTLE_MS = 500

    def __init__(
        self,
        page: Page,
        settle_ms: int | None = None,
        events: RunEventSink | None = None,
        run_id: str | None = None,
    ):
        """Initialize step executor.

        Args:
            page: Page the steps run against
            settle_ms: Pause after each action in milliseconds (default: 500)
            events: Milestone sink (default: structured log)
            run_id: Run identifier for the execution context
        """
        self.page = page
        self.settle_ms = self.DEFAULT_SETTLE_MS if settle_ms is None else settle_ms
        self.events = events or LoggingEventSink(run_id)
        self.context = StepExecutionContext(run_id=run_id or str(uuid.uuid4()))

    async def execute(self, steps: Sequence[Step]) -> StepExecutionContext:
        """Execute all steps in order.

        Args:
            steps: Steps in declared order

        Returns:
            Execution context with one result per executed step

        Raises:
            UnknownStepKind: If any step kind is unsupported (before any step runs)
            AutomationError: Step validation errors (MissingValue, UnsupportedAction,
                UnknownSelectorMode) from the failing step
            StepExecutionError: If a browser action fails
        """
        validate_steps(steps)

        logger.info("steps_starting", run_id=self.context.run_id, total_steps=len(steps))

        for index, step in enumerate(steps, 1):
            await self._execute_step(index, step)

        logger.info(
            "steps_completed",
            run_id=self.context.run_id,
            executed_steps=self.context.executed_count,
        )
        return self.context

    async def _execute_step(self, index: int, step: Step) -> None:
        """Execute a single step followed by the settle pause.

        Args:
            index: 1-based step position
            step: Step to run
        """
        selector = describe(step.selector)
        action = create_action(step.kind, self.page, step.selector)

        start_time = time.monotonic()
        try:
            await action.execute(step.value, step.action)
        except Exception as e:
            execution_time = time.monotonic() - start_time
            self.context.add_result(
                StepResult(
                    index=index,
                    kind=step.kind,
                    selector=selector,
                    error=str(e),
                    metadata={"execution_time_seconds": round(execution_time, 3)},
                )
            )
            metrics.steps_executed_total.labels(kind=step.kind, status="failed").inc()
            self.events.emit(
                "step_failed",
                index=index,
                kind=step.kind,
                selector=selector,
                error=str(e),
            )
            if isinstance(e, AutomationError):
                raise
            raise StepExecutionError(index, step.kind, selector, e) from e

        execution_time = time.monotonic() - start_time
        self.context.add_result(
            StepResult(
                index=index,
                kind=step.kind,
                selector=selector,
                metadata={
                    "execution_time_seconds": round(execution_time, 3),
                    "action": step.action,
                },
            )
        )
        metrics.steps_executed_total.labels(kind=step.kind, status="success").inc()
        self.events.emit(
            "step_completed",
            index=index,
            kind=step.kind,
            selector=selector,
            execution_time_seconds=round(execution_time, 3),
        )

        if self.settle_ms:
            await asyncio.sleep(self.settle_ms / 1000)
