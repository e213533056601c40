from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from ..settings.model import ProductSettings

logger = logging.getLogger(__name__)


class FocusRegion(Enum):
    FIELD_LIST = "field_list"
    ACTION_ROW = "action_row"


class FieldId(Enum):
    NAME = "name"
    PLATFORM_WINDOWS = "platform-windows"
    PLATFORM_LINUX = "platform-linux"
    MODULE_SQLITE = "module-sqlite"
    MODULE_I18N = "module-i18n"


FIELD_ORDER: tuple[FieldId, ...] = tuple(FieldId)

ACTION_APPLY = 0
ACTION_CANCEL = 1


@dataclass(slots=True)
class FocusState:
    region: FocusRegion = FocusRegion.FIELD_LIST
    list_index: int = 0
    action_index: int = ACTION_APPLY


@dataclass(frozen=True, slots=True)
class Activation:
    """Result of activating a field-list row.

    `settings` is the (possibly unchanged) settings object; `edit` is set when the
    row is free text and an edit session should open with that initial value.
    """

    settings: ProductSettings
    edit: str | None = None


class FocusController:
    """Selection within the field list and the action row."""

    def __init__(self, state: FocusState | None = None) -> None:
        self.state = state or FocusState()

    @property
    def region(self) -> FocusRegion:
        return self.state.region

    @property
    def selected_field(self) -> FieldId:
        return FIELD_ORDER[self.state.list_index]

    def toggle_region(self, *, editing: bool) -> bool:
        if editing:
            logger.debug("Region switch ignored while editing")
            return False
        if self.state.region is FocusRegion.FIELD_LIST:
            self.state.region = FocusRegion.ACTION_ROW
        else:
            self.state.region = FocusRegion.FIELD_LIST
        return True

    def move_selection(self, delta: int) -> None:
        """Move within the active region.

        The field list wraps at both ends. The action row is addressed directly:
        a negative delta selects Apply, a positive one selects Cancel.
        """

        if self.state.region is FocusRegion.FIELD_LIST:
            self.state.list_index = (self.state.list_index + delta) % len(FIELD_ORDER)
        elif delta < 0:
            self.state.action_index = ACTION_APPLY
        elif delta > 0:
            self.state.action_index = ACTION_CANCEL

    def activate_field(self, settings: ProductSettings) -> Activation:
        return _FIELD_HANDLERS[self.selected_field](settings)


def _activate_name(settings: ProductSettings) -> Activation:
    return Activation(settings=settings, edit=settings.name)


def _activate_platform_windows(settings: ProductSettings) -> Activation:
    return Activation(settings=settings.with_platform("Windows"))


def _activate_platform_linux(settings: ProductSettings) -> Activation:
    return Activation(settings=settings.with_platform("Linux"))


def _activate_module_sqlite(settings: ProductSettings) -> Activation:
    return Activation(settings=settings.toggle_module("sqlite"))


def _activate_module_i18n(settings: ProductSettings) -> Activation:
    return Activation(settings=settings.toggle_module("i18n"))


def _handler_for(field: FieldId) -> Callable[[ProductSettings], Activation]:
    match field:
        case FieldId.NAME:
            return _activate_name
        case FieldId.PLATFORM_WINDOWS:
            return _activate_platform_windows
        case FieldId.PLATFORM_LINUX:
            return _activate_platform_linux
        case FieldId.MODULE_SQLITE:
            return _activate_module_sqlite
        case FieldId.MODULE_I18N:
            return _activate_module_i18n
        case _:
            assert_never(field)


_FIELD_HANDLERS: dict[FieldId, Callable[[ProductSettings], Activation]] = {
    field: _handler_for(field) for field in FieldId
}
