"""Services package."""

from .action_factory import create_action, get_action_class, validate_steps
from .errors import (
    AutomationError,
    ExtractionTimeout,
    MissingValue,
    SinkConfigurationError,
    SinkError,
    StepExecutionError,
    UnknownSelectorMode,
    UnknownStepKind,
    UnsupportedAction,
)
from .extraction import ExtractionPipeline, ExtractionResult
from .locator_resolver import ElementQuery, resolve, to_locator
from .run_events import LoggingEventSink, RunEventSink
from .runner import AutomationRunner, RunReport
from .step_executor import StepExecutor

__all__ = [
    "AutomationError",
    "AutomationRunner",
    "ElementQuery",
    "ExtractionPipeline",
    "ExtractionResult",
    "ExtractionTimeout",
    "LoggingEventSink",
    "MissingValue",
    "RunEventSink",
    "RunReport",
    "SinkConfigurationError",
    "SinkError",
    "StepExecutionError",
    "StepExecutor",
    "UnknownSelectorMode",
    "UnknownStepKind",
    "UnsupportedAction",
    "create_action",
    "get_action_class",
    "validate_steps",
]
