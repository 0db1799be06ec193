"""Map step kinds to action classes."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from autoscrape.schemas.automation import SelectorSpec, Step, StepKindEnum
from autoscrape.services.actions import (
    BaseAction,
    ButtonAction,
    LinkAction,
    OptionSelectAction,
    RadioToggleAction,
    TextInputAction,
)
from autoscrape.services.errors import UnknownStepKind

if TYPE_CHECKING:
    from playwright.async_api import Page

ACTION_CLASSES: dict[StepKindEnum, type[BaseAction]] = {
    StepKindEnum.TEXT_BOX: TextInputAction,
    StepKindEnum.BUTTON: ButtonAction,
    StepKindEnum.LINK: LinkAction,
    StepKindEnum.RADIO: RadioToggleAction,
    StepKindEnum.CHECK: RadioToggleAction,
    StepKindEnum.SELECT: OptionSelectAction,
}


def get_action_class(kind: str | StepKindEnum) -> type[BaseAction]:
    """Look up the action class for a step kind.

    Raises:
        UnknownStepKind: If no action handles ``kind``
    """
    try:
        return ACTION_CLASSES[StepKindEnum(kind)]
    except ValueError:
        raise UnknownStepKind(kind) from None


def create_action(kind: str | StepKindEnum, page: Page, selector: SelectorSpec) -> BaseAction:
    """Instantiate the action for ``kind`` bound to ``page`` and ``selector``.

    Raises:
        UnknownStepKind: If no action handles ``kind``
    """
    return get_action_class(kind)(page, selector)


def validate_steps(steps: Iterable[Step]) -> None:
    """Reject unknown step kinds before any step runs.

    Raises:
        UnknownStepKind: For the first step whose kind is not supported
    """
    for step in steps:
        get_action_class(step.kind)
