"""Row extraction from the live page.

List items are matched by the browser driver, so ``list_selector`` accepts
everything ``page.wait_for_selector`` accepts (CSS, ``xpath=``, ``text=``,
``>>`` chains, open shadow roots). Each matched item's HTML is then read with
BeautifulSoup, and every configured field is looked up inside that item only.
A missing sub-element or attribute yields an empty string, so each row always
carries every configured key.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from autoscrape.core.logging import get_logger
from autoscrape.schemas.automation import ExtractionField

if TYPE_CHECKING:
    from playwright.async_api import Page

logger = get_logger(__name__)

Row = dict[str, str]

# Serializes every matched list item in document order
ITEM_HTML_SCRIPT = "elements => elements.map(element => element.outerHTML)"


class RowExtractor:
    """Builds rows from list items using CSS field selectors.

    Item fragments are parsed with ``html.parser``, which keeps fragments such
    as ``<tr>`` intact outside their table. Text values are the element's full
    text content with surrounding whitespace trimmed; attribute values are
    returned raw.

    Example:
        >>> extractor = RowExtractor()
        >>> item = '<li class="item"><b class="t"> A </b><a href="/a">x</a></li>'
        >>> extractor.extract_items(
        ...     [item],
        ...     {"title": ExtractionField(selector=".t"),
        ...      "link": ExtractionField(selector="a", attribute="href")},
        ... )
        [{'title': 'A', 'link': '/a'}]
    """

    def __init__(self, parser: str = "html.parser"):
        """Initialize row extractor.

        Args:
            parser: BeautifulSoup tree builder for item fragments
        """
        self.parser = parser

    async def extract_from_page(
        self,
        page: Page,
        list_selector: str,
        fields: Mapping[str, ExtractionField],
    ) -> list[Row]:
        """Extract one row per list item on the page, in document order.

        Args:
            page: Page showing the list
            list_selector: Playwright selector matching list items
            fields: Output column -> extraction rule

        Returns:
            Rows with every key of ``fields`` present
        """
        items_html = await page.locator(list_selector).evaluate_all(ITEM_HTML_SCRIPT)
        rows = self.extract_items(items_html, fields)
        logger.debug("rows_extracted", list_selector=list_selector, rows=len(rows))
        return rows

    def extract_items(
        self,
        items_html: Sequence[str],
        fields: Mapping[str, ExtractionField],
    ) -> list[Row]:
        """Extract one row from each serialized list item."""
        rows = []
        for html in items_html:
            item = BeautifulSoup(html, self.parser).find(True)
            if item is None:
                rows.append({key: "" for key in fields})
                continue
            rows.append(self.extract_row(item, fields))
        return rows

    def extract_row(self, item: Tag, fields: Mapping[str, ExtractionField]) -> Row:
        """Extract a single row from one list item."""
        return {key: self._extract_field(item, key, field) for key, field in fields.items()}

    def _extract_field(self, item: Tag, key: str, field: ExtractionField) -> str:
        try:
            target = item.select_one(field.selector)
        except SelectorSyntaxError as e:
            logger.error(
                "field_selector_error",
                field=key,
                selector=field.selector,
                error=str(e),
            )
            return ""

        if target is None:
            return ""

        if field.attribute is None:
            return target.get_text().strip()

        value = target.get(field.attribute)
        if value is None:
            return ""
        # Multi-valued attributes (e.g. class) come back as lists
        if isinstance(value, list):
            return " ".join(value)
        return str(value)
