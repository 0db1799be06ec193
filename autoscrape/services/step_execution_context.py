"""Step execution context for tracking what each step did during a run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from autoscrape.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class StepResult:
    """Result from executing a single step.

    Attributes:
        index: 1-based position of the step in the job file
        kind: Step kind
        selector: Selector rendered for logs
        metadata: Additional metadata (timing, value, action)
        error: Error message if step failed
    """

    index: int
    kind: str
    selector: str
    metadata: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @property
    def success(self) -> bool:
        """Check if step executed successfully."""
        return self.error is None


@dataclass
class StepExecutionContext:
    """Accumulates step results for one run.

    Attributes:
        run_id: Identifier of the automation run
        step_results: Results in execution order
        metadata: Run-level metadata
    """

    run_id: str
    step_results: list[StepResult] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)

    def add_result(self, result: StepResult) -> None:
        """Add a step result to the context."""
        self.step_results.append(result)
        logger.debug(
            "step_result_added",
            run_id=self.run_id,
            index=result.index,
            success=result.success,
        )

    @property
    def executed_count(self) -> int:
        """Number of steps that ran (successfully or not)."""
        return len(self.step_results)

    def get_failed_steps(self) -> list[int]:
        """Indices of steps that failed."""
        return [result.index for result in self.step_results if not result.success]

    def get_successful_steps(self) -> list[int]:
        """Indices of steps that succeeded."""
        return [result.index for result in self.step_results if result.success]

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            "run_id": self.run_id,
            "step_results": [
                {
                    "index": result.index,
                    "kind": result.kind,
                    "selector": result.selector,
                    "metadata": result.metadata,
                    "error": result.error,
                    "success": result.success,
                }
                for result in self.step_results
            ],
            "failed_steps": self.get_failed_steps(),
            "successful_steps": self.get_successful_steps(),
            "metadata": self.metadata,
        }
