"""Unit tests for row extraction."""

from unittest.mock import AsyncMock

import pytest

from autoscrape.schemas.automation import ExtractionField
from autoscrape.services.row_extractor import ITEM_HTML_SCRIPT, RowExtractor

ITEMS_HTML = [
    """<li class="item">
      <span class="title">  First result  </span>
      <a href="/first">open</a>
    </li>""",
    """<li class="item">
      <span class="title">Second
        result</span>
    </li>""",
    """<li class="item">
      <a href="/third" class="link primary">open</a>
    </li>""",
]

FIELDS = {
    "title": ExtractionField(selector=".title"),
    "link": ExtractionField(selector="a", attribute="href"),
}


@pytest.fixture
def extractor():
    return RowExtractor()


class TestExtractItems:
    """Tests for RowExtractor.extract_items()."""

    def test_one_row_per_item_in_order(self, extractor):
        rows = extractor.extract_items(ITEMS_HTML, FIELDS)

        assert len(rows) == 3
        assert rows[0] == {"title": "First result", "link": "/first"}

    def test_missing_sub_element_gives_empty_string(self, extractor):
        """Test that missing optional fields never fail extraction."""
        rows = extractor.extract_items(ITEMS_HTML, FIELDS)

        assert rows[1]["link"] == ""
        assert rows[2]["title"] == ""

    def test_every_key_present_in_configured_order(self, extractor):
        rows = extractor.extract_items(ITEMS_HTML, FIELDS)

        for row in rows:
            assert list(row) == ["title", "link"]

    def test_text_is_trimmed(self, extractor):
        rows = extractor.extract_items(ITEMS_HTML, FIELDS)

        assert rows[1]["title"].startswith("Second")
        assert not rows[1]["title"].endswith(" ")

    def test_missing_attribute_gives_empty_string(self, extractor):
        fields = {"target": ExtractionField(selector="a", attribute="target")}

        rows = extractor.extract_items(ITEMS_HTML, fields)

        assert [row["target"] for row in rows] == ["", "", ""]

    def test_multi_valued_attribute_is_joined(self, extractor):
        fields = {"classes": ExtractionField(selector="a", attribute="class")}

        rows = extractor.extract_items(ITEMS_HTML, fields)

        assert rows[2]["classes"] == "link primary"

    def test_no_items_gives_no_rows(self, extractor):
        assert extractor.extract_items([], FIELDS) == []

    def test_item_itself_is_not_a_field_match(self, extractor):
        """Test that field selectors only search inside the item."""
        fields = {"kind": ExtractionField(selector=".item", attribute="class")}

        rows = extractor.extract_items(ITEMS_HTML, fields)

        assert [row["kind"] for row in rows] == ["", "", ""]

    def test_table_row_items(self, extractor):
        items = ['<tr class="row"><td class="title">Alpha</td><td><a href="/a">x</a></td></tr>']

        rows = extractor.extract_items(items, FIELDS)

        assert rows == [{"title": "Alpha", "link": "/a"}]

    def test_invalid_field_selector_gives_empty_string(self, extractor):
        fields = {"broken": ExtractionField(selector="span[")}

        rows = extractor.extract_items(ITEMS_HTML, fields)

        assert [row["broken"] for row in rows] == ["", "", ""]


class TestExtractFromPage:
    """Tests for RowExtractor.extract_from_page()."""

    @pytest.mark.asyncio
    async def test_items_matched_by_driver(self, extractor, page, locator):
        locator.evaluate_all = AsyncMock(return_value=ITEMS_HTML)

        rows = await extractor.extract_from_page(page, ".item", FIELDS)

        page.locator.assert_called_once_with(".item")
        locator.evaluate_all.assert_awaited_once_with(ITEM_HTML_SCRIPT)
        assert [row["title"] for row in rows] == ["First result", "Second\n        result", ""]

    @pytest.mark.asyncio
    async def test_xpath_list_selector(self, extractor, page, locator):
        """Test that a Playwright-only selector is passed through to the driver."""
        locator.evaluate_all = AsyncMock(return_value=ITEMS_HTML[:1])

        rows = await extractor.extract_from_page(page, "xpath=//li[@class='item']", FIELDS)

        page.locator.assert_called_once_with("xpath=//li[@class='item']")
        assert rows == [{"title": "First result", "link": "/first"}]
