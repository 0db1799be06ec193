"""Sink fan-out: delivers one finalized result to every configured sink."""

from __future__ import annotations

from typing import TYPE_CHECKING

from autoscrape.core import metrics
from autoscrape.core.logging import get_logger
from autoscrape.services.run_events import LoggingEventSink, RunEventSink
from autoscrape.services.sinks.base import BaseSink, SinkOutcome, SinkStatusEnum

if TYPE_CHECKING:
    from autoscrape.services.extraction import ExtractionResult

logger = get_logger(__name__)


class SinkFanOut:
    """Invokes sinks one after another with per-sink failure isolation.

    A sink that raises is reported as FAILED; the remaining sinks still run
    against the same result, and nothing is re-raised to the caller.
    """

    def __init__(self, sinks: list[BaseSink], events: RunEventSink | None = None):
        self.sinks = list(sinks)
        self.events = events or LoggingEventSink()

    async def dispatch(self, result: ExtractionResult) -> list[SinkOutcome]:
        """Deliver ``result`` to every sink in order.

        Args:
            result: Finalized extraction result (read-only)

        Returns:
            One outcome per sink, in sink order
        """
        outcomes: list[SinkOutcome] = []

        for sink in self.sinks:
            try:
                outcome = await sink.deliver(result)
            except Exception as e:
                outcome = SinkOutcome(
                    sink=sink.name,
                    status=SinkStatusEnum.FAILED,
                    detail=str(e) or type(e).__name__,
                )
                self.events.emit(
                    "sink_failed",
                    sink=sink.name,
                    error=outcome.detail,
                    error_type=type(e).__name__,
                )
            else:
                if outcome.status == SinkStatusEnum.SKIPPED:
                    self.events.emit("sink_skipped", sink=sink.name, reason=outcome.detail)
                else:
                    self.events.emit(
                        "sink_completed", sink=sink.name, rows=outcome.rows, **outcome.metadata
                    )

            metrics.sink_deliveries_total.labels(
                sink=outcome.sink, status=outcome.status.value
            ).inc()
            outcomes.append(outcome)

        logger.debug(
            "sink_fan_out_finished",
            sent=sum(1 for o in outcomes if o.status == SinkStatusEnum.SENT),
            failed=sum(1 for o in outcomes if not o.success),
        )
        return outcomes
