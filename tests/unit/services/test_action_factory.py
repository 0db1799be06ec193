"""Unit tests for the action factory."""

import pytest

from autoscrape.schemas.automation import Step, StepKindEnum
from autoscrape.services.action_factory import (
    ACTION_CLASSES,
    create_action,
    get_action_class,
    validate_steps,
)
from autoscrape.services.actions import (
    ButtonAction,
    LinkAction,
    OptionSelectAction,
    RadioToggleAction,
    TextInputAction,
)
from autoscrape.services.errors import UnknownStepKind


class TestGetActionClass:
    """Tests for kind -> action class lookup."""

    @pytest.mark.parametrize(
        ("kind", "expected"),
        [
            ("text_box", TextInputAction),
            ("button", ButtonAction),
            ("link", LinkAction),
            ("radio", RadioToggleAction),
            ("check", RadioToggleAction),
            ("select", OptionSelectAction),
        ],
    )
    def test_known_kinds(self, kind, expected):
        assert get_action_class(kind) is expected

    def test_every_kind_is_mapped(self):
        """Test that every declared kind has an action."""
        assert set(ACTION_CLASSES) == set(StepKindEnum)

    def test_unknown_kind_raises(self):
        with pytest.raises(UnknownStepKind, match="Unknown component type: slider"):
            get_action_class("slider")


class TestCreateAction:
    """Tests for create_action()."""

    def test_binds_page_and_selector(self, page):
        action = create_action("button", page, "#go")

        assert isinstance(action, ButtonAction)
        assert action.page is page
        assert action.selector == "#go"


class TestValidateSteps:
    """Tests for validate_steps()."""

    def test_valid_steps_pass(self):
        validate_steps(
            [
                Step(kind="text_box", selector="#q", value="x"),
                Step(kind="button", selector="#go"),
            ]
        )

    def test_unknown_kind_anywhere_fails(self):
        """Test that the offending kind is reported even after valid steps."""
        steps = [
            Step(kind="button", selector="#go"),
            Step(kind="hover", selector="#menu"),
        ]

        with pytest.raises(UnknownStepKind) as exc_info:
            validate_steps(steps)

        assert exc_info.value.kind == "hover"
