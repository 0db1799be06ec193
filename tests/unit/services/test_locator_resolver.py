"""Unit tests for the locator resolver."""

import pytest

from autoscrape.schemas.automation import SelectorDef
from autoscrape.services.errors import UnknownSelectorMode
from autoscrape.services.locator_resolver import ElementQuery, describe, resolve, to_locator


class TestResolve:
    """Tests for resolve()."""

    def test_raw_string_is_used_verbatim(self):
        """Test that a raw string selector goes straight to page.locator."""
        assert resolve("div.result > a") == ElementQuery("locator", "div.result > a")

    @pytest.mark.parametrize(
        ("mode", "value", "expected"),
        [
            ("css", ".item", ElementQuery("locator", ".item")),
            ("xpath", "//button[1]", ElementQuery("locator", "xpath=//button[1]")),
            ("text", "Search", ElementQuery("get_by_text", "Search")),
            ("id", "q", ElementQuery("locator", "#q")),
            ("testId", "submit-btn", ElementQuery("get_by_test_id", "submit-btn")),
            ("role", "button", ElementQuery("get_by_role", "button")),
            ("label", "Email", ElementQuery("get_by_label", "Email")),
            ("placeholder", "Search...", ElementQuery("get_by_placeholder", "Search...")),
            ("name", "keyword", ElementQuery("locator", '[name="keyword"]')),
        ],
    )
    def test_every_mode_maps_to_query(self, mode, value, expected):
        """Test each supported mode resolves to its engine query."""
        assert resolve(SelectorDef(mode=mode, value=value)) == expected

    def test_mapping_spec_is_accepted(self):
        """Test that a plain dict spec resolves like a SelectorDef."""
        assert resolve({"mode": "id", "value": "q"}) == ElementQuery("locator", "#q")

    def test_unknown_mode_raises(self):
        """Test that an unsupported mode raises UnknownSelectorMode."""
        with pytest.raises(UnknownSelectorMode) as exc_info:
            resolve(SelectorDef(mode="shadow", value="x"))

        assert exc_info.value.mode == "shadow"
        assert "shadow" in str(exc_info.value)

    def test_mode_is_case_sensitive(self):
        """Test that 'testid' is not accepted for 'testId'."""
        with pytest.raises(UnknownSelectorMode):
            resolve({"mode": "testid", "value": "x"})

    def test_resolve_is_pure(self):
        """Test that resolving twice yields equal queries."""
        spec = SelectorDef(mode="label", value="Name")
        assert resolve(spec) == resolve(spec)


class TestToLocator:
    """Tests for to_locator()."""

    def test_calls_page_method_with_argument(self, page, locator):
        """Test that the query's method is called on the page."""
        result = to_locator(page, ElementQuery("get_by_role", "button"))

        page.get_by_role.assert_called_once_with("button")
        assert result is locator


class TestDescribe:
    """Tests for describe()."""

    def test_describe_raw_string(self):
        assert describe("#submit") == "#submit"

    def test_describe_selector_def(self):
        assert describe(SelectorDef(mode="id", value="q")) == "id=q"
