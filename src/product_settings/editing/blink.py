from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

BLINK_PERIOD_S = 0.5


class TimerHandle(Protocol):
    def stop(self) -> None:
        """Cancel the periodic timer."""


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


class BlinkScheduler:
    """Toggle cursor visibility on a periodic timer while an edit session is open.

    The timer is created through `timer_factory(period, callback)` (Textual's
    `set_interval` has this shape). At most one timer is live at a time and a tick
    delivered after `stop()` is ignored.
    """

    def __init__(
        self,
        timer_factory: TimerFactory | None,
        *,
        period_s: float = BLINK_PERIOD_S,
        on_tick: Callable[[], None] | None = None,
    ) -> None:
        self._timer_factory = timer_factory
        self._period_s = period_s
        self._on_tick = on_tick
        self._timer: TimerHandle | None = None
        self._generation = 0
        self.visible = True

    @property
    def running(self) -> bool:
        return self._timer is not None

    def start(self) -> None:
        self.stop()
        self.visible = True
        if self._timer_factory is None:
            return
        self._generation += 1
        generation = self._generation
        self._timer = self._timer_factory(self._period_s, lambda: self._tick(generation))

    def stop(self) -> None:
        timer, self._timer = self._timer, None
        self._generation += 1
        self.visible = True
        if timer is not None:
            timer.stop()

    def _tick(self, generation: int) -> None:
        if generation != self._generation or self._timer is None:
            return
        self.visible = not self.visible
        if self._on_tick is not None:
            self._on_tick()
