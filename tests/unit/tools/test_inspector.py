"""Unit tests for the job file skeleton inspector."""

import pytest
import yaml

from autoscrape.schemas.automation import AutomationConfig, StepKindEnum
from autoscrape.tools.inspector import (
    OPTION_PLACEHOLDER,
    TEXT_PLACEHOLDER,
    ElementInfo,
    build_skeleton,
    collect_elements,
    dump_yaml,
    element_to_step,
    step_kind_for,
)

FORM_HTML = """
<form>
  <input id="q" type="text" placeholder="Search">
  <input name="email" type="email">
  <input class="check primary" type="checkbox">
  <input type="radio" name="sort">
  <input type="file" id="upload">
  <input type="hidden" name="csrf">
  <textarea name="notes"></textarea>
  <select id="year"><option>2024</option></select>
  <input type="submit" value="Go">
  <button>Search</button>
  <input>
</form>
"""


class TestCollectElements:
    """Tests for collect_elements()."""

    def test_selector_preference(self):
        elements = collect_elements(FORM_HTML)
        selectors = [e.selector for e in elements]

        assert selectors[0] == "#q"
        assert selectors[1] == '[name="email"]'
        assert selectors[2] == ".check"
        assert selectors[9] == "button"

    def test_input_type_defaults_to_text(self):
        elements = collect_elements(FORM_HTML)

        assert elements[-1].input_type == "text"
        assert elements[-1].tag == "input"

    @pytest.mark.parametrize(
        "attribute, expected",
        [
            (None, "text"),
            ("", "text"),
            ("foo", "text"),
            ("EMAIL", "email"),
            ("search", "search"),
        ],
    )
    def test_input_type_normalized_like_browser(self, attribute, expected):
        html = "<input>" if attribute is None else f'<input type="{attribute}">'

        assert collect_elements(html)[0].input_type == expected

    def test_unknown_input_type_becomes_text_box_step(self):
        elements = collect_elements('<input id="x" type="foo">')

        assert element_to_step(elements[0]) == {
            "type": "text_box",
            "selector": "#x",
            "value": TEXT_PLACEHOLDER,
        }

    def test_document_order(self):
        tags = [e.tag for e in collect_elements(FORM_HTML)]

        assert tags[6:10] == ["textarea", "select", "input", "button"]


class TestStepKindFor:
    """Tests for element -> step kind mapping."""

    @pytest.mark.parametrize(
        ("tag", "input_type", "expected"),
        [
            ("input", "text", StepKindEnum.TEXT_BOX),
            ("input", "password", StepKindEnum.TEXT_BOX),
            ("textarea", None, StepKindEnum.TEXT_BOX),
            ("select", None, StepKindEnum.SELECT),
            ("input", "checkbox", StepKindEnum.RADIO),
            ("input", "radio", StepKindEnum.RADIO),
            ("input", "submit", StepKindEnum.BUTTON),
            ("input", "button", StepKindEnum.BUTTON),
            ("button", None, StepKindEnum.BUTTON),
            ("input", "file", None),
            ("input", "hidden", None),
        ],
    )
    def test_mapping(self, tag, input_type, expected):
        element = ElementInfo(tag=tag, selector=tag, input_type=input_type)

        assert step_kind_for(element) == expected


class TestElementToStep:
    """Tests for element_to_step()."""

    def test_text_box_gets_placeholder_value(self):
        step = element_to_step(ElementInfo(tag="input", selector="#q", input_type="text"))

        assert step == {"type": "text_box", "selector": "#q", "value": TEXT_PLACEHOLDER}

    def test_button_gets_click_action(self):
        step = element_to_step(ElementInfo(tag="button", selector="button"))

        assert step == {"type": "button", "selector": "button", "action": "click"}

    def test_select_gets_option_placeholder(self):
        step = element_to_step(ElementInfo(tag="select", selector="#year"))

        assert step["value"] == OPTION_PLACEHOLDER

    def test_unsupported_element(self):
        assert element_to_step(ElementInfo(tag="input", selector="#f", input_type="file")) is None


class TestBuildSkeleton:
    """Tests for skeleton building and rendering."""

    def test_skeleton_skips_unsupported_elements(self):
        skeleton = build_skeleton("https://example.com", collect_elements(FORM_HTML))

        assert skeleton["target_url"] == "https://example.com"
        assert len(skeleton["steps"]) == 9

    def test_rendered_yaml_loads_as_job_file(self):
        skeleton = build_skeleton("https://example.com", collect_elements(FORM_HTML))

        config = AutomationConfig.model_validate(yaml.safe_load(dump_yaml(skeleton)))

        assert config.steps[0].kind == "text_box"
        assert config.steps[0].value == TEXT_PLACEHOLDER

    def test_yaml_keeps_key_order(self):
        rendered = dump_yaml({"target_url": "https://example.com", "steps": []})

        assert rendered.index("target_url") < rendered.index("steps")
