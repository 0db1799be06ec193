"""Credential resolution for the spreadsheet and chat sinks.

Resolution only combines runtime settings (environment / .env) with the job
file's sink blocks; it performs no I/O, so it can be tested without network
access. Job file values win over settings.
"""

from __future__ import annotations

from dataclasses import dataclass

from autoscrape.schemas.automation import ChatworkConfig, GoogleSheetConfig
from autoscrape.services.errors import SinkConfigurationError
from config import Settings


@dataclass(frozen=True)
class GoogleSheetTarget:
    """Where and how to append rows in Google Sheets.

    Attributes:
        spreadsheet_id: Spreadsheet document ID
        service_account_file: Path to the service account JSON key
        sheet_name: Preferred tab title; first tab when None or absent
    """

    spreadsheet_id: str
    service_account_file: str
    sheet_name: str | None = None


@dataclass(frozen=True)
class ChatworkTarget:
    """Chatwork room and token for notifications."""

    api_token: str
    room_id: str
    api_base_url: str = "https://api.chatwork.com/v2"

    @property
    def messages_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}/rooms/{self.room_id}/messages"


def resolve_google_sheet_target(
    settings: Settings, sheet_config: GoogleSheetConfig
) -> GoogleSheetTarget:
    """Combine settings and job config into a Google Sheets target.

    Raises:
        SinkConfigurationError: If the spreadsheet ID or service account key is missing
    """
    spreadsheet_id = sheet_config.spread_sheet_id or settings.google_sheet_id
    if not spreadsheet_id:
        raise SinkConfigurationError("google_sheet", "Google Sheet ID not configured")

    if not settings.google_service_account_json:
        raise SinkConfigurationError(
            "google_sheet", "GOOGLE_SERVICE_ACCOUNT_JSON not configured"
        )

    return GoogleSheetTarget(
        spreadsheet_id=spreadsheet_id,
        service_account_file=settings.google_service_account_json,
        sheet_name=sheet_config.kpis_sheet_name,
    )


def resolve_chatwork_target(settings: Settings, chatwork_config: ChatworkConfig) -> ChatworkTarget:
    """Combine settings and job config into a Chatwork target.

    Raises:
        SinkConfigurationError: If the token or room ID is missing
    """
    token = settings.chatwork_api_token
    room_id = chatwork_config.room_id or settings.chatwork_room_id
    if not token or not room_id:
        raise SinkConfigurationError("chatwork", "Chatwork credentials missing")

    return ChatworkTarget(
        api_token=token,
        room_id=room_id,
        api_base_url=settings.chatwork_api_base_url,
    )
