"""Pytest configuration and fixtures."""

from __future__ import annotations

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from autoscrape.services.extraction import ExtractionResult
from autoscrape.services.pagination import PaginationState
from autoscrape.services.run_events import RunEventSink
from config import Settings


class RecordingEventSink(RunEventSink):
    """Event sink that keeps every milestone for assertions."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def emit(self, event: str, **fields: Any) -> None:
        self.events.append((event, fields))

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.events]

    def fields_for(self, event: str) -> list[dict[str, Any]]:
        return [fields for name, fields in self.events if name == event]


def make_locator() -> MagicMock:
    """Create a mock Playwright locator with async action methods."""
    locator = MagicMock()
    locator.fill = AsyncMock()
    locator.click = AsyncMock()
    locator.check = AsyncMock()
    locator.uncheck = AsyncMock()
    locator.select_option = AsyncMock()
    locator.is_visible = AsyncMock(return_value=True)
    locator.is_enabled = AsyncMock(return_value=True)
    locator.evaluate_all = AsyncMock(return_value=[])
    locator.first = locator
    return locator


def make_page(locator: MagicMock | None = None) -> MagicMock:
    """Create a mock Playwright page whose query methods all return ``locator``."""
    locator = locator or make_locator()
    page = MagicMock()
    for method in (
        "locator",
        "get_by_text",
        "get_by_test_id",
        "get_by_role",
        "get_by_label",
        "get_by_placeholder",
    ):
        getattr(page, method).return_value = locator
    page.goto = AsyncMock()
    page.wait_for_selector = AsyncMock()
    page.wait_for_load_state = AsyncMock()
    page.content = AsyncMock(return_value="<html><body></body></html>")
    return page


def make_result(rows: list[dict[str, str]], columns: list[str] | None = None) -> ExtractionResult:
    """Build a finalized extraction result for sink tests."""
    if columns is None:
        columns = list(rows[0]) if rows else ["title", "link"]
    return ExtractionResult(
        rows=tuple(rows),
        columns=tuple(columns),
        pages_visited=1,
        state=PaginationState().stop("no_pagination"),
    )


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from .env files, with no delays."""
    return Settings(
        _env_file=None,
        headless=True,
        step_settle_ms=0,
        pagination_settle_ms=0,
        list_wait_timeout_ms=1000,
        google_service_account_json=None,
        google_sheet_id=None,
        chatwork_api_token=None,
        chatwork_room_id=None,
    )


@pytest.fixture
def events() -> RecordingEventSink:
    return RecordingEventSink()


@pytest.fixture
def locator() -> MagicMock:
    return make_locator()


@pytest.fixture
def page(locator: MagicMock) -> MagicMock:
    return make_page(locator)


@pytest.fixture
def page_factory():
    """Factory for extra mock pages (``page_factory(locator=None)``)."""
    return make_page


@pytest.fixture
def locator_factory():
    return make_locator


@pytest.fixture
def result_factory():
    """Factory for ExtractionResult (``result_factory(rows, columns=None)``)."""
    return make_result
