from __future__ import annotations

from dataclasses import dataclass
from typing import assert_never

from ..settings.model import MODULE_LABELS, ProductSettings
from .focus import ACTION_APPLY, ACTION_CANCEL, FIELD_ORDER, FieldId, FocusRegion, FocusState

_RADIO_ON = "●"
_RADIO_OFF = "○"
_CHECK_ON = "☑"
_CHECK_OFF = "☐"

_NAME_PREFIX = "Product Name: "

ACTION_LABELS: dict[int, str] = {
    ACTION_APPLY: "[Apply]",
    ACTION_CANCEL: "[Cancel]",
}


@dataclass(frozen=True, slots=True)
class Row:
    key: str
    label: str
    highlighted: bool = False
    # Codepoint index into `label` of the cell drawn as the text cursor.
    cursor: int | None = None


@dataclass(frozen=True, slots=True)
class EditView:
    field: FieldId
    text: str
    cursor: int | None


def _radio(selected: bool) -> str:
    return _RADIO_ON if selected else _RADIO_OFF


def _check(selected: bool) -> str:
    return _CHECK_ON if selected else _CHECK_OFF


def field_label(field: FieldId, settings: ProductSettings) -> str:
    match field:
        case FieldId.NAME:
            return f"{_NAME_PREFIX}{settings.name}"
        case FieldId.PLATFORM_WINDOWS:
            return f"Platform: Windows {_radio(settings.platform == 'Windows')}"
        case FieldId.PLATFORM_LINUX:
            return f"Platform: Linux {_radio(settings.platform == 'Linux')}"
        case FieldId.MODULE_SQLITE:
            return f"{_check(settings.has_module('sqlite'))} Module: {MODULE_LABELS['sqlite']}"
        case FieldId.MODULE_I18N:
            return f"{_check(settings.has_module('i18n'))} Module: {MODULE_LABELS['i18n']}"
        case _:
            assert_never(field)


def build_field_rows(
    settings: ProductSettings,
    focus: FocusState,
    edit: EditView | None = None,
) -> list[Row]:
    list_active = focus.region is FocusRegion.FIELD_LIST
    rows: list[Row] = []
    for index, field in enumerate(FIELD_ORDER):
        highlighted = list_active and index == focus.list_index
        if edit is not None and edit.field is field:
            cursor = None if edit.cursor is None else len(_NAME_PREFIX) + edit.cursor
            rows.append(
                Row(
                    key=field.value,
                    label=f"{_NAME_PREFIX}{edit.text}",
                    highlighted=highlighted,
                    cursor=cursor,
                )
            )
            continue
        rows.append(
            Row(key=field.value, label=field_label(field, settings), highlighted=highlighted)
        )
    return rows


def build_action_rows(focus: FocusState) -> list[Row]:
    row_active = focus.region is FocusRegion.ACTION_ROW
    return [
        Row(
            key=f"action-{index}",
            label=label,
            highlighted=row_active and index == focus.action_index,
        )
        for index, label in ACTION_LABELS.items()
    ]


def hint_text(focus: FocusState, *, editing: bool) -> str:
    if editing:
        return "(Enter to confirm, Esc to cancel editing)"
    if focus.region is FocusRegion.ACTION_ROW:
        return "(←→ to select, Enter to confirm, Tab to switch, Esc to cancel)"
    return "(Enter to edit/toggle, ↑↓ to navigate, Tab to switch, Esc to cancel)"
