from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from ..editing.blink import BlinkScheduler, TimerFactory
from ..editing.text import TextEditBuffer
from ..settings.model import ProductSettings
from ..settings.store import SettingsStore
from .dispatch import KeypressDispatcher
from .focus import FieldId, FocusController, FocusState
from .keys import KeyEvent
from .rows import EditView, Row, build_action_rows, build_field_rows, hint_text

logger = logging.getLogger(__name__)

ResultCallback = Callable[[ProductSettings | None], None]
Outcome = Literal["apply", "cancel"]


@dataclass(slots=True)
class Navigating:
    focus: FocusState


@dataclass(slots=True)
class Editing:
    focus: FocusState
    field: FieldId
    buffer: TextEditBuffer


@dataclass(frozen=True, slots=True)
class Closed:
    outcome: Outcome
    result: ProductSettings | None


DialogState = Navigating | Editing | Closed


class DialogController:
    """State machine behind the product settings dialog.

    Reports exactly one result through `on_result`: the saved settings after a
    successful Apply, or None after Cancel or a failed save.
    """

    def __init__(
        self,
        store: SettingsStore,
        *,
        on_result: ResultCallback,
        timer_factory: TimerFactory | None = None,
        on_change: Callable[[], None] | None = None,
        settings: ProductSettings | None = None,
    ) -> None:
        self._store = store
        self._on_result = on_result
        self._on_change = on_change
        self.settings = settings if settings is not None else store.load()
        self.focus = FocusController()
        self._blink = BlinkScheduler(timer_factory, on_tick=self._notify_change)
        self._dispatcher = KeypressDispatcher(self)
        self._state: DialogState = Navigating(self.focus.state)

    @property
    def state(self) -> DialogState:
        return self._state

    @property
    def closed(self) -> bool:
        return isinstance(self._state, Closed)

    @property
    def editing(self) -> bool:
        return isinstance(self._state, Editing)

    @property
    def edit_buffer(self) -> TextEditBuffer | None:
        if isinstance(self._state, Editing):
            return self._state.buffer
        return None

    @property
    def cursor_visible(self) -> bool:
        return self._blink.visible

    @property
    def blink_running(self) -> bool:
        return self._blink.running

    def handle(self, event: KeyEvent) -> bool:
        changed = self._dispatcher.dispatch(event)
        if changed:
            self._notify_change()
        return changed

    def activate_selected(self) -> None:
        if not isinstance(self._state, Navigating):
            return
        activation = self.focus.activate_field(self.settings)
        self.settings = activation.settings
        if activation.edit is not None:
            self.start_edit(self.focus.selected_field, activation.edit)

    def start_edit(self, field_id: FieldId, initial: str) -> None:
        if not isinstance(self._state, Navigating):
            return
        editing = Editing(focus=self._state.focus, field=field_id, buffer=TextEditBuffer())
        editing.buffer.start_edit(initial)
        self._state = editing
        self._blink.start()

    def commit_edit(self) -> None:
        if not isinstance(self._state, Editing):
            return
        editing = self._state
        value = editing.buffer.commit()
        if value is None:
            logger.debug("Discarding empty edit for %s", editing.field.value)
        elif editing.field is FieldId.NAME:
            self.settings = self.settings.with_name(value)
        self._end_edit(editing)

    def cancel_edit(self) -> None:
        if not isinstance(self._state, Editing):
            return
        editing = self._state
        editing.buffer.cancel()
        self._end_edit(editing)

    def _end_edit(self, editing: Editing) -> None:
        self._blink.stop()
        self._state = Navigating(editing.focus)

    def apply(self) -> None:
        if self.closed:
            return
        self._close("apply", self._store.save(self.settings))

    def cancel(self) -> None:
        if self.closed:
            return
        self._close("cancel", None)

    def teardown(self) -> None:
        """Release the blink timer; safe to call repeatedly."""

        self._blink.stop()

    def _close(self, outcome: Outcome, result: ProductSettings | None) -> None:
        self._state = Closed(outcome=outcome, result=result)
        self.teardown()
        self._on_result(result)

    def _notify_change(self) -> None:
        if self._on_change is not None:
            self._on_change()

    def _edit_view(self) -> EditView | None:
        if not isinstance(self._state, Editing):
            return None
        text, cursor = self._state.buffer.display(visible=self._blink.visible)
        return EditView(field=self._state.field, text=text, cursor=cursor)

    def rows(self) -> list[Row]:
        return build_field_rows(self.settings, self.focus.state, self._edit_view())

    def action_rows(self) -> list[Row]:
        return build_action_rows(self.focus.state)

    def hint(self) -> str:
        return hint_text(self.focus.state, editing=self.editing)
