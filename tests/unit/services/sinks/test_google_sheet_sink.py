"""Unit tests for the Google Sheets sink."""

from unittest.mock import MagicMock

import pytest
from google.auth.exceptions import TransportError
from googleapiclient.errors import HttpError
from httplib2 import HttpLib2Error, Response

from autoscrape.schemas.automation import GoogleSheetConfig
from autoscrape.services.errors import SinkConfigurationError
from autoscrape.services.sinks.base import SinkStatusEnum
from autoscrape.services.sinks.google_sheet_sink import GoogleSheetSink

ROWS = [
    {"title": "First", "link": "/first"},
    {"title": "Second", "link": "/second"},
]


def _fake_service(sheet_titles, header=None, header_error=None):
    """Build a MagicMock mirroring spreadsheets().get/values().get/update/append."""
    service = MagicMock()
    spreadsheets = service.spreadsheets.return_value
    spreadsheets.get.return_value.execute.return_value = {
        "sheets": [{"properties": {"title": title}} for title in sheet_titles]
    }

    values = spreadsheets.values.return_value
    if header_error is not None:
        values.get.return_value.execute.side_effect = header_error
    else:
        values.get.return_value.execute.return_value = (
            {"values": [header]} if header else {}
        )
    return service, values


@pytest.fixture
def sheet_settings(settings):
    return settings.model_copy(
        update={"google_service_account_json": "/secrets/service-account.json"}
    )


class TestGoogleSheetSink:
    """Tests for GoogleSheetSink.deliver()."""

    @pytest.mark.asyncio
    async def test_appends_to_named_sheet_with_existing_header(
        self, sheet_settings, result_factory
    ):
        """Test that rows follow the sheet's header order."""
        service, values = _fake_service(["Summary", "KPIs"], header=["link", "title"])
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1", kpis_sheet_name="KPIs"),
            service_factory=lambda target: service,
        )

        outcome = await sink.deliver(result_factory(ROWS))

        assert outcome.status == SinkStatusEnum.SENT
        assert outcome.metadata["sheet"] == "KPIs"
        values.update.assert_not_called()
        append_kwargs = values.append.call_args.kwargs
        assert append_kwargs["spreadsheetId"] == "sheet-1"
        assert append_kwargs["range"] == "'KPIs'!A1"
        assert append_kwargs["body"] == {
            "values": [["/first", "First"], ["/second", "Second"]]
        }

    @pytest.mark.asyncio
    async def test_falls_back_to_first_sheet(self, sheet_settings, result_factory):
        service, values = _fake_service(["Sheet1", "Other"], header=["title", "link"])
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1", kpis_sheet_name="Missing"),
            service_factory=lambda target: service,
        )

        outcome = await sink.deliver(result_factory(ROWS))

        assert outcome.metadata["sheet"] == "Sheet1"
        assert values.append.call_args.kwargs["range"] == "'Sheet1'!A1"

    @pytest.mark.asyncio
    async def test_empty_sheet_gets_header_first(self, sheet_settings, result_factory):
        service, values = _fake_service(["Sheet1"])
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1"),
            service_factory=lambda target: service,
        )

        await sink.deliver(result_factory(ROWS))

        assert values.update.call_args.kwargs["body"] == {"values": [["title", "link"]]}
        assert values.append.call_args.kwargs["body"]["values"][0] == ["First", "/first"]

    @pytest.mark.asyncio
    async def test_blank_heading_keeps_its_column(self, sheet_settings, result_factory):
        """Test that a gap in the header does not shift later columns."""
        service, values = _fake_service(["Sheet1"], header=["title", "", "link"])
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1"),
            service_factory=lambda target: service,
        )

        await sink.deliver(result_factory([{"title": "T", "link": "/l"}]))

        values.update.assert_not_called()
        assert values.append.call_args.kwargs["body"] == {"values": [["T", "", "/l"]]}

    @pytest.mark.asyncio
    async def test_all_blank_header_is_treated_as_no_header(
        self, sheet_settings, result_factory
    ):
        service, values = _fake_service(["Sheet1"], header=["", " "])
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1"),
            service_factory=lambda target: service,
        )

        await sink.deliver(result_factory(ROWS))

        assert values.update.call_args.kwargs["body"] == {"values": [["title", "link"]]}

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "error",
        [
            HttpError(Response({"status": "400"}), b"Unable to parse range"),
            TransportError("connection reset"),
            HttpLib2Error("server not found"),
            TimeoutError("timed out"),
        ],
    )
    async def test_header_load_failure_is_treated_as_no_header(
        self, error, sheet_settings, result_factory
    ):
        service, values = _fake_service(["Sheet1"], header_error=error)
        sink = GoogleSheetSink(
            sheet_settings,
            GoogleSheetConfig(spread_sheet_id="sheet-1"),
            service_factory=lambda target: service,
        )

        outcome = await sink.deliver(result_factory(ROWS))

        assert outcome.status == SinkStatusEnum.SENT
        values.update.assert_called_once()
        values.append.assert_called_once()

    @pytest.mark.asyncio
    async def test_empty_result_is_skipped(self, sheet_settings, result_factory):
        factory = MagicMock()
        sink = GoogleSheetSink(
            sheet_settings, GoogleSheetConfig(spread_sheet_id="sheet-1"), service_factory=factory
        )

        outcome = await sink.deliver(result_factory([]))

        assert outcome.status == SinkStatusEnum.SKIPPED
        factory.assert_not_called()

    @pytest.mark.asyncio
    async def test_sheet_id_falls_back_to_settings(self, sheet_settings, result_factory):
        service, values = _fake_service(["Sheet1"], header=["title", "link"])
        settings = sheet_settings.model_copy(update={"google_sheet_id": "from-env"})
        sink = GoogleSheetSink(
            settings, GoogleSheetConfig(), service_factory=lambda target: service
        )

        await sink.deliver(result_factory(ROWS))

        assert values.append.call_args.kwargs["spreadsheetId"] == "from-env"

    @pytest.mark.asyncio
    async def test_missing_sheet_id_raises(self, sheet_settings, result_factory):
        sink = GoogleSheetSink(
            sheet_settings, GoogleSheetConfig(), service_factory=MagicMock()
        )

        with pytest.raises(SinkConfigurationError, match="Google Sheet ID not configured"):
            await sink.deliver(result_factory(ROWS))
