"""Chatwork sink: posts a completion message with the row count."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import ChatworkConfig
from autoscrape.services.credentials import resolve_chatwork_target
from autoscrape.services.sinks.base import BaseSink, SinkOutcome
from config import Settings

if TYPE_CHECKING:
    from autoscrape.services.extraction import ExtractionResult

logger = get_logger(__name__)

DEFAULT_MESSAGE_TEMPLATE = "Scraping Completed.\nTotal Items: {count}"


def render_message(template: str | None, count: int) -> str:
    """Substitute the first ``{count}`` placeholder in ``template``.

    Example:
        >>> render_message("Done: {count} rows", 3)
        'Done: 3 rows'
    """
    return (template or DEFAULT_MESSAGE_TEMPLATE).replace("{count}", str(count), 1)


class ChatworkSink(BaseSink):
    """Posts one templated message to a Chatwork room.

    Runs even when no rows were extracted, so a zero count is reported too.
    """

    name = "chatwork"

    def __init__(
        self,
        settings: Settings,
        chatwork_config: ChatworkConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize Chatwork sink.

        Args:
            settings: Runtime settings holding the API token and default room
            chatwork_config: Job file ``chatwork`` block
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.settings = settings
        self.chatwork_config = chatwork_config
        self.transport = transport

    async def deliver(self, result: ExtractionResult) -> SinkOutcome:
        target = resolve_chatwork_target(self.settings, self.chatwork_config)
        count = len(result.rows)
        body = render_message(self.chatwork_config.message_template, count)

        logger.info("chatwork_sending", room_id=target.room_id, count=count)
        async with httpx.AsyncClient(
            timeout=self.settings.http_timeout,
            transport=self.transport,
        ) as client:
            response = await client.post(
                target.messages_url,
                data={"body": body},
                headers={"X-ChatWorkToken": target.api_token},
            )
            response.raise_for_status()

        return self._sent(count, room_id=target.room_id, status_code=response.status_code)
