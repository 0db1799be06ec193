"""Base sink interface.

Defines the interface that all sinks must implement.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from autoscrape.services.extraction import ExtractionResult


class SinkStatusEnum(str, Enum):
    """Outcome of a single sink delivery."""

    SENT = "sent"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SinkOutcome:
    """Result from delivering rows to one sink.

    Attributes:
        sink: Sink name
        status: Delivery status
        rows: Number of rows delivered
        detail: Skip reason or error message
        metadata: Additional metadata (path, sheet name, ...)
    """

    sink: str
    status: SinkStatusEnum
    rows: int = 0
    detail: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def success(self) -> bool:
        """Check if the sink did not fail."""
        return self.status != SinkStatusEnum.FAILED


class BaseSink(ABC):
    """Abstract base class for sinks.

    ``deliver`` returns a SENT or SKIPPED outcome, and raises on failure; the
    fan-out turns exceptions into FAILED outcomes. Sinks must treat the
    extraction result as read-only.
    """

    name: str = "sink"

    @abstractmethod
    async def deliver(self, result: ExtractionResult) -> SinkOutcome:
        """Deliver the finalized rows.

        Args:
            result: Finalized extraction result

        Returns:
            SinkOutcome with SENT or SKIPPED status

        Raises:
            NotImplementedError: Must be implemented by subclass
        """
        raise NotImplementedError("Subclass must implement deliver()")

    def _skipped(self, reason: str) -> SinkOutcome:
        """Create a skipped outcome."""
        return SinkOutcome(sink=self.name, status=SinkStatusEnum.SKIPPED, detail=reason)

    def _sent(self, rows: int, **metadata: Any) -> SinkOutcome:
        """Create a successful outcome."""
        return SinkOutcome(
            sink=self.name,
            status=SinkStatusEnum.SENT,
            rows=rows,
            metadata=metadata,
        )
