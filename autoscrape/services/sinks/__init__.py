"""Result sinks and the fan-out that drives them."""

from autoscrape.schemas.automation import AutomationConfig
from autoscrape.services.sinks.base import BaseSink, SinkOutcome, SinkStatusEnum
from autoscrape.services.sinks.chatwork_sink import ChatworkSink, render_message
from autoscrape.services.sinks.fan_out import SinkFanOut
from autoscrape.services.sinks.file_sink import FileSink
from autoscrape.services.sinks.google_sheet_sink import GoogleSheetSink
from config import Settings


def build_sinks(config: AutomationConfig, settings: Settings) -> list[BaseSink]:
    """Construct the sinks configured for a job, in delivery order.

    The file sink is always present (it skips itself when no output file is
    set); the spreadsheet and chat sinks only when their blocks are configured.
    """
    output_file = config.scraping.output_file if config.scraping else None
    sinks: list[BaseSink] = [FileSink(output_file)]

    if config.google_sheet is not None:
        sinks.append(GoogleSheetSink(settings, config.google_sheet))
    if config.chatwork is not None:
        sinks.append(ChatworkSink(settings, config.chatwork))

    return sinks


__all__ = [
    "BaseSink",
    "ChatworkSink",
    "FileSink",
    "GoogleSheetSink",
    "SinkFanOut",
    "SinkOutcome",
    "SinkStatusEnum",
    "build_sinks",
    "render_message",
]
