from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from rich.text import Text

from ..dialog.controller import DialogController
from ..dialog.focus import FocusRegion
from ..dialog.keys import KeyEvent, key_event_from_terminal
from ..dialog.rows import Row
from ..settings.model import ProductSettings
from ..settings.store import SettingsStore

if TYPE_CHECKING:
    from textual.app import App

_HIGHLIGHT_STYLE = "bold #8ae234"
_APPLY_STYLE = "bold #8ae234"
_CANCEL_STYLE = "bold #ef2929"


def render_heading(title: str, *, active: bool) -> Text:
    marker = "> " if active else "  "
    return Text(f"{marker}{title}", style="bold" if active else "")


def render_field_rows(rows: list[Row]) -> Text:
    text = Text()
    for index, row in enumerate(rows):
        if index:
            text.append("\n")
        marker = "● " if row.highlighted else "  "
        line = Text(f"{marker}{row.label}", style=_HIGHLIGHT_STYLE if row.highlighted else "")
        if row.cursor is not None:
            start = len(marker) + row.cursor
            line.stylize("reverse", start, start + 1)
        text.append_text(line)
    return text


def render_action_rows(rows: list[Row]) -> Text:
    text = Text("  ")
    for index, row in enumerate(rows):
        if index:
            text.append("    ")
        marker = "> " if row.highlighted else "  "
        style = ""
        if row.highlighted:
            style = _APPLY_STYLE if index == 0 else _CANCEL_STYLE
        text.append(f"{marker}{row.label}", style=style)
    return text


def build_product_settings_app(
    store: SettingsStore,
    *,
    on_result: Callable[[ProductSettings | None], None] | None = None,
) -> App[ProductSettings | None]:
    """Build the Textual app hosting a DialogController for `store`.

    Textual is imported lazily so non-interactive commands stay lightweight.
    """

    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.events import Key, Paste
    from textual.widgets import Label, Static

    class _FieldPanel(Static, can_focus=True):
        """Focus target that forwards keystrokes and pastes to the controller."""

        def __init__(self, handler: Callable[[KeyEvent], None], *, id: str | None = None) -> None:
            super().__init__("", id=id)
            self._handler = handler

        def on_key(self, event: Key) -> None:
            key_event = key_event_from_terminal(event.key, event.character)
            if key_event is None:
                return
            # Stop here so screen-level bindings (tab focus cycling) never see it.
            event.stop()
            event.prevent_default()
            self._handler(key_event)

        def on_paste(self, event: Paste) -> None:
            event.stop()
            self._handler(KeyEvent.paste(event.text))

    class _ProductSettingsApp(App[ProductSettings | None]):
        CSS = """
        Screen {
            align: center middle;
            background: #2e3436;
            color: #eeeeec;
        }
        #dialog {
            width: 86;
            height: auto;
            padding: 1 2;
            border: round #729fcf;
            background: #202326;
        }
        #title {
            text-style: bold;
            margin-bottom: 1;
        }
        #actions-heading {
            margin-top: 1;
        }
        #hint {
            color: #babdb6;
            margin-top: 1;
        }
        """

        def __init__(self) -> None:
            super().__init__()
            self.controller: DialogController | None = None

        def compose(self) -> ComposeResult:
            yield Vertical(
                Label("Product Settings", id="title"),
                Static("", id="fields-heading"),
                _FieldPanel(self._handle_key_event, id="fields"),
                Static("", id="actions-heading"),
                Static("", id="actions"),
                Static("", id="hint"),
                id="dialog",
            )

        def on_mount(self) -> None:
            self.controller = DialogController(
                store,
                on_result=self._finish,
                timer_factory=lambda period, callback: self.set_interval(period, callback),
                on_change=self._refresh_view,
            )
            self._refresh_view()
            self.query_one("#fields", _FieldPanel).focus()

        def on_unmount(self) -> None:
            if self.controller is not None:
                self.controller.teardown()

        def _handle_key_event(self, event: KeyEvent) -> None:
            if self.controller is None:
                return
            self.controller.handle(event)

        def _finish(self, result: ProductSettings | None) -> None:
            if on_result is not None:
                on_result(result)
            self.exit(result)

        def _refresh_view(self) -> None:
            controller = self.controller
            if controller is None or controller.closed:
                return
            region = controller.focus.region
            self.query_one("#fields-heading", Static).update(
                render_heading("Settings", active=region is FocusRegion.FIELD_LIST)
            )
            self.query_one("#fields", _FieldPanel).update(render_field_rows(controller.rows()))
            self.query_one("#actions-heading", Static).update(
                render_heading("Actions", active=region is FocusRegion.ACTION_ROW)
            )
            self.query_one("#actions", Static).update(
                render_action_rows(controller.action_rows())
            )
            self.query_one("#hint", Static).update(controller.hint())

    return _ProductSettingsApp()


def run_product_settings_dialog(
    store: SettingsStore,
    *,
    on_result: Callable[[ProductSettings | None], None] | None = None,
) -> ProductSettings | None:
    """Open the product settings dialog and return the saved settings.

    Returns None when the dialog is cancelled or saving fails.
    """

    return build_product_settings_app(store, on_result=on_result).run()

