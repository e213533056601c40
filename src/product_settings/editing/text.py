from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Literal

CursorJump = Literal["home", "end"]

HOME: CursorJump = "home"
END: CursorJump = "end"

# OSC strings first, then CSI and two-character ESC sequences.
_ESCAPE_SEQUENCE_RE = re.compile(
    r"\x1B\][^\x07\x1B]*(?:\x07|\x1B\\)"
    r"|\x1B[@-_][0-?]*[ -/]*[@-~]"
    r"|\x9B[0-?]*[ -/]*[@-~]"
)

# Cc: controls, Cf: format (bidi overrides, zero-width), Cs: unpaired surrogates.
_UNSAFE_CATEGORIES = frozenset({"Cc", "Cf", "Cs"})


def strip_unsafe_characters(text: str) -> str:
    """Drop terminal escape sequences, control and format characters, and lone surrogates.

    The edited fields are single-line, so line breaks and tabs are removed too.
    """

    text = _ESCAPE_SEQUENCE_RE.sub("", text)
    return "".join(ch for ch in text if unicodedata.category(ch) not in _UNSAFE_CATEGORIES)


@dataclass(slots=True)
class TextEditBuffer:
    """Single-line edit buffer addressed in codepoints.

    `active` is False outside an edit session; every mutating operation is a
    no-op then.
    """

    text: str = ""
    cursor: int = 0
    active: bool = False

    def start_edit(self, initial: str) -> None:
        self.text = initial
        self.cursor = len(initial)
        self.active = True

    def insert_at_cursor(self, text: str) -> int:
        """Insert sanitized `text` at the cursor; return codepoints inserted."""

        if not self.active:
            return 0
        clean = strip_unsafe_characters(text)
        if not clean:
            return 0
        self.text = self.text[: self.cursor] + clean + self.text[self.cursor :]
        self.cursor += len(clean)
        return len(clean)

    def delete_backward(self) -> bool:
        if not self.active or self.cursor == 0:
            return False
        self.text = self.text[: self.cursor - 1] + self.text[self.cursor :]
        self.cursor -= 1
        return True

    def delete_forward(self) -> bool:
        if not self.active or self.cursor >= len(self.text):
            return False
        self.text = self.text[: self.cursor] + self.text[self.cursor + 1 :]
        return True

    def move_cursor(self, delta: int | CursorJump) -> None:
        if not self.active:
            return
        if delta == HOME:
            self.cursor = 0
        elif delta == END:
            self.cursor = len(self.text)
        elif isinstance(delta, int):
            self.cursor = max(0, min(len(self.text), self.cursor + delta))
        else:
            raise ValueError(f"Unsupported cursor move: {delta!r}")

    def commit(self) -> str | None:
        """Close the session; return the trimmed value, or None when it is empty."""

        if not self.active:
            return None
        value = self.text.strip()
        self._reset()
        return value or None

    def cancel(self) -> None:
        self._reset()

    def _reset(self) -> None:
        self.text = ""
        self.cursor = 0
        self.active = False

    def display(self, *, visible: bool) -> tuple[str, int | None]:
        """Return the text to show and the codepoint index of the cursor cell.

        A cursor past the last character is drawn on a trailing space. The index
        is None while the blink phase hides the cursor.
        """

        if not visible:
            return (self.text, None)
        if self.cursor >= len(self.text):
            return (self.text + " ", len(self.text))
        return (self.text, self.cursor)
