from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

import pytest


@dataclass(slots=True)
class FakeTimer:
    period: float
    callback: Callable[[], None]
    stopped: bool = False

    def stop(self) -> None:
        self.stopped = True

    def fire(self) -> None:
        # Mirrors a late tick that was already queued when the timer was stopped.
        self.callback()


@dataclass(slots=True)
class FakeTimerFactory:
    timers: list[FakeTimer] = field(default_factory=list)

    def __call__(self, period: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(period=period, callback=callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[FakeTimer]:
        return [timer for timer in self.timers if not timer.stopped]


@pytest.fixture
def timer_factory() -> FakeTimerFactory:
    return FakeTimerFactory()
