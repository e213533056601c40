from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..editing.text import END, HOME, TextEditBuffer, strip_unsafe_characters
from .focus import ACTION_APPLY, FocusRegion
from .keys import KeyEvent

if TYPE_CHECKING:
    from .controller import DialogController

logger = logging.getLogger(__name__)

# Vim-style aliases accepted while navigating.
_NAV_CHAR_ALIASES: dict[str, str] = {
    "k": "up",
    "j": "down",
    "h": "left",
    "l": "right",
}


class KeypressDispatcher:
    """Route key events to the edit buffer (editing) or the focus controller (navigating).

    `dispatch()` returns True when the event changed dialog state.
    """

    def __init__(self, controller: DialogController) -> None:
        self._controller = controller

    def dispatch(self, event: KeyEvent) -> bool:
        controller = self._controller
        if controller.closed:
            return False
        buffer = controller.edit_buffer
        if buffer is not None:
            return self._dispatch_editing(event, buffer)
        return self._dispatch_navigating(event)

    def _dispatch_editing(self, event: KeyEvent, buffer: TextEditBuffer) -> bool:
        controller = self._controller
        if event.name == "paste":
            if not event.text:
                return False
            return buffer.insert_at_cursor(event.text) > 0

        match event.name:
            case "backspace":
                return buffer.delete_backward()
            case "delete":
                return buffer.delete_forward()
            case "escape":
                controller.cancel_edit()
                return True
            case "return":
                controller.commit_edit()
                return True
            case "left":
                buffer.move_cursor(-1)
                return True
            case "right":
                buffer.move_cursor(1)
                return True
            case "home":
                buffer.move_cursor(HOME)
                return True
            case "end":
                buffer.move_cursor(END)
                return True
            case "char":
                ch = strip_unsafe_characters(event.text)
                if len(ch) != 1:
                    return False
                return buffer.insert_at_cursor(ch) == 1
            case _:
                logger.debug("Ignoring %s while editing", event.name)
                return False

    def _dispatch_navigating(self, event: KeyEvent) -> bool:
        controller = self._controller
        focus = controller.focus
        name = event.name
        if name == "char":
            name = _NAV_CHAR_ALIASES.get(event.text, name)

        match name:
            case "tab":
                return focus.toggle_region(editing=False)
            case "escape":
                controller.cancel()
                return True
            case "up" if focus.region is FocusRegion.FIELD_LIST:
                focus.move_selection(-1)
                return True
            case "down" if focus.region is FocusRegion.FIELD_LIST:
                focus.move_selection(1)
                return True
            case "left" if focus.region is FocusRegion.ACTION_ROW:
                focus.move_selection(-1)
                return True
            case "right" if focus.region is FocusRegion.ACTION_ROW:
                focus.move_selection(1)
                return True
            case "return":
                if focus.region is FocusRegion.FIELD_LIST:
                    controller.activate_selected()
                elif focus.state.action_index == ACTION_APPLY:
                    controller.apply()
                else:
                    controller.cancel()
                return True
            case _:
                return False
