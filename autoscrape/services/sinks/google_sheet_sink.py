"""Google Sheets sink: appends rows to a spreadsheet tab."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

from google.auth.exceptions import TransportError
from google.oauth2.service_account import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error

from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import GoogleSheetConfig
from autoscrape.services.credentials import GoogleSheetTarget, resolve_google_sheet_target
from autoscrape.services.errors import SinkError
from autoscrape.services.sinks.base import BaseSink, SinkOutcome
from config import Settings

if TYPE_CHECKING:
    from autoscrape.services.extraction import ExtractionResult

logger = get_logger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def build_sheets_service(target: GoogleSheetTarget) -> Any:
    """Authenticate with the service account key and build a Sheets v4 client."""
    info = json.loads(Path(target.service_account_file).read_text(encoding="utf-8"))
    # Keys pasted through env files often carry escaped newlines
    if "private_key" in info:
        info["private_key"] = info["private_key"].replace("\\n", "\n")
    credentials = Credentials.from_service_account_info(info, scopes=SCOPES)
    return build("sheets", "v4", credentials=credentials, cache_discovery=False)


def _a1_range(sheet_title: str, cells: str) -> str:
    escaped = sheet_title.replace("'", "''")
    return f"'{escaped}'!{cells}"


class GoogleSheetSink(BaseSink):
    """Appends rows to a Google Sheets tab.

    - Tab: the configured ``kpis_sheet_name``, else the first tab
    - Header: row 1 of the tab; when empty (or unreadable) the field names are
      written as the header first
    - Rows are appended in header order; values for unknown headers are blank
    """

    name = "google_sheet"

    def __init__(
        self,
        settings: Settings,
        sheet_config: GoogleSheetConfig,
        service_factory: Callable[[GoogleSheetTarget], Any] | None = None,
    ):
        """Initialize Google Sheets sink.

        Args:
            settings: Runtime settings holding the key path and default sheet ID
            sheet_config: Job file ``google_sheet`` block
            service_factory: Builds the Sheets API client (default: service account auth)
        """
        self.settings = settings
        self.sheet_config = sheet_config
        self.service_factory = service_factory or build_sheets_service

    async def deliver(self, result: ExtractionResult) -> SinkOutcome:
        if not result.rows:
            return self._skipped("no rows extracted")

        target = resolve_google_sheet_target(self.settings, self.sheet_config)
        logger.info("google_sheet_sending", spreadsheet_id=target.spreadsheet_id)
        sheet_title = await asyncio.to_thread(self._append_rows, target, result)
        return self._sent(
            len(result.rows), spreadsheet_id=target.spreadsheet_id, sheet=sheet_title
        )

    def _append_rows(self, target: GoogleSheetTarget, result: ExtractionResult) -> str:
        service = self.service_factory(target)
        spreadsheets = service.spreadsheets()

        sheet_title = self._select_sheet(spreadsheets, target)
        header = self._load_header(spreadsheets, target.spreadsheet_id, sheet_title)

        if not header:
            header = list(result.columns)
            logger.info("google_sheet_header_initialized", sheet=sheet_title, header=header)
            spreadsheets.values().update(
                spreadsheetId=target.spreadsheet_id,
                range=_a1_range(sheet_title, "A1"),
                valueInputOption="RAW",
                body={"values": [header]},
            ).execute()

        values = [
            [row.get(column, "") if column.strip() else "" for column in header]
            for row in result.rows
        ]
        spreadsheets.values().append(
            spreadsheetId=target.spreadsheet_id,
            range=_a1_range(sheet_title, "A1"),
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": values},
        ).execute()

        logger.info("google_sheet_rows_appended", sheet=sheet_title, rows=len(values))
        return sheet_title

    def _select_sheet(self, spreadsheets: Any, target: GoogleSheetTarget) -> str:
        spreadsheet = spreadsheets.get(
            spreadsheetId=target.spreadsheet_id, fields="sheets.properties.title"
        ).execute()
        titles = [sheet["properties"]["title"] for sheet in spreadsheet.get("sheets", [])]
        if not titles:
            raise SinkError(self.name, "spreadsheet has no sheets")

        if target.sheet_name and target.sheet_name in titles:
            return target.sheet_name

        if target.sheet_name:
            logger.warning(
                "google_sheet_not_found_using_first",
                requested=target.sheet_name,
                using=titles[0],
            )
        return titles[0]

    def _load_header(self, spreadsheets: Any, spreadsheet_id: str, sheet_title: str) -> list[str]:
        try:
            response = spreadsheets.values().get(
                spreadsheetId=spreadsheet_id,
                range=_a1_range(sheet_title, "1:1"),
            ).execute()
        except (HttpError, TransportError, HttpLib2Error, OSError) as e:
            logger.info(
                "google_sheet_header_unreadable",
                sheet=sheet_title,
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        rows = response.get("values", [])
        if not rows:
            return []
        # Positional: a blank heading still owns its column
        header = [str(cell) for cell in rows[0]]
        if not any(cell.strip() for cell in header):
            return []
        return header
