"""Run milestone events.

The runner, step executor, extraction pipeline and sink fan-out report
milestones through a ``RunEventSink`` instead of printing. The default sink
writes them to the structured log; tests inject a recording sink.

Milestones emitted during a run, in order:
``navigation_started``, ``step_completed`` (per step), ``page_extracted``
(per page), ``pagination_stopped``, ``scrape_completed``, ``sink_completed`` /
``sink_skipped`` / ``sink_failed`` (per sink), ``automation_finished``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from autoscrape.core.logging import get_logger

logger = get_logger(__name__)


class RunEventSink(ABC):
    """Receives run milestones."""

    @abstractmethod
    def emit(self, event: str, **fields: Any) -> None:
        """Record one milestone with its context."""
        raise NotImplementedError("Subclass must implement emit()")


class LoggingEventSink(RunEventSink):
    """Writes milestones to the structured log.

    Failure milestones (``*_failed``) are logged at error level, everything
    else at info.
    """

    def __init__(self, run_id: str | None = None):
        self._logger = logger.bind(run_id=run_id) if run_id else logger

    def emit(self, event: str, **fields: Any) -> None:
        if event.endswith("_failed"):
            self._logger.error(event, **fields)
        else:
            self._logger.info(event, **fields)
