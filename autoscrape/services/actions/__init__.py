"""Step actions, one per step kind.

- TextInputAction: fill a field
- ButtonAction: click a button
- LinkAction: click a link
- RadioToggleAction: check / uncheck a radio button or checkbox
- OptionSelectAction: choose an option in a select element
"""

from autoscrape.services.actions.base import BaseAction
from autoscrape.services.actions.button import ButtonAction
from autoscrape.services.actions.link import LinkAction
from autoscrape.services.actions.option_select import OptionSelectAction
from autoscrape.services.actions.radio_toggle import RadioToggleAction
from autoscrape.services.actions.text_input import TextInputAction

__all__ = [
    "BaseAction",
    "ButtonAction",
    "LinkAction",
    "OptionSelectAction",
    "RadioToggleAction",
    "TextInputAction",
]
