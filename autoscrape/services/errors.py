"""Error taxonomy for step execution, extraction and sinks.

Step validation errors and extraction errors abort the run. Sink errors are
caught by the fan-out and never abort the run or other sinks.
"""

from __future__ import annotations

from typing import Any


class AutomationError(Exception):
    """Base class for all automation failures."""


# ============================================================================
# Step construction / validation errors
# ============================================================================


class UnknownSelectorMode(AutomationError, ValueError):
    """Raised when a selector mode is outside the supported set."""

    def __init__(self, mode: Any):
        self.mode = mode
        super().__init__(f"Unknown selector mode: {mode}")


class UnknownStepKind(AutomationError, ValueError):
    """Raised when a step kind has no matching action."""

    def __init__(self, kind: Any):
        self.kind = kind
        super().__init__(f"Unknown component type: {kind}")


class MissingValue(AutomationError, ValueError):
    """Raised when an action that needs a value gets none."""

    def __init__(self, action_name: str, selector: str):
        self.action_name = action_name
        self.selector = selector
        super().__init__(f"{action_name} requires a value for selector: {selector}")


class UnsupportedAction(AutomationError, ValueError):
    """Raised when an action override is not supported by the step kind."""

    def __init__(self, action_name: str, action: str):
        self.action_name = action_name
        self.action = action
        super().__init__(f"{action_name} unknown action: {action}")


class StepExecutionError(AutomationError):
    """Raised when a step fails; wraps the underlying cause."""

    def __init__(self, index: int, kind: str, selector: str, cause: BaseException):
        """Initialize step execution error.

        Args:
            index: 1-based position of the failing step
            kind: Step kind
            selector: Human readable selector description
            cause: Original exception
        """
        self.index = index
        self.kind = kind
        self.selector = selector
        self.cause = cause
        super().__init__(f"Step {index} ({kind} {selector}) failed: {cause}")


# ============================================================================
# Extraction errors
# ============================================================================


class ExtractionTimeout(AutomationError):
    """Raised when the list selector never appears on a result page."""

    def __init__(self, list_selector: str, page_index: int, timeout_ms: int):
        self.list_selector = list_selector
        self.page_index = page_index
        self.timeout_ms = timeout_ms
        super().__init__(
            f"List selector '{list_selector}' not found on page {page_index} "
            f"within {timeout_ms}ms"
        )


# ============================================================================
# Sink errors
# ============================================================================


class SinkError(AutomationError):
    """Raised by a sink that could not deliver rows."""

    def __init__(self, sink_name: str, message: str):
        self.sink_name = sink_name
        super().__init__(f"{sink_name}: {message}")


class SinkConfigurationError(SinkError):
    """Raised when a sink's credentials or target are not configured."""
