from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

KeyName = Literal[
    "tab",
    "escape",
    "return",
    "left",
    "right",
    "up",
    "down",
    "home",
    "end",
    "backspace",
    "delete",
    "char",
    "paste",
]

# Terminal-side aliases for the abstract names above (Textual spells them this way).
_KEY_ALIASES: dict[str, KeyName] = {
    "tab": "tab",
    "escape": "escape",
    "enter": "return",
    "return": "return",
    "ctrl+j": "return",
    "ctrl+m": "return",
    "left": "left",
    "right": "right",
    "up": "up",
    "down": "down",
    "home": "home",
    "end": "end",
    "backspace": "backspace",
    "ctrl+h": "backspace",
    "delete": "delete",
}


@dataclass(frozen=True, slots=True)
class KeyEvent:
    name: KeyName
    text: str = ""

    @classmethod
    def char(cls, text: str) -> KeyEvent:
        return cls("char", text)

    @classmethod
    def paste(cls, text: str) -> KeyEvent:
        return cls("paste", text)


def key_event_from_terminal(key: str, character: str | None) -> KeyEvent | None:
    """Map a terminal key identifier (e.g. Textual's `Key.key`) to a KeyEvent.

    Returns None for keys the dialog has no use for.
    """

    name = _KEY_ALIASES.get(key)
    if name is not None:
        return KeyEvent(name)
    if character and len(character) == 1 and character.isprintable():
        return KeyEvent.char(character)
    return None
