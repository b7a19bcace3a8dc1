"""Delay and sound countdown timers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from pychip8.utils import debug_enabled, debug_log

TIMER_HZ = 60

SoundCueCallback = Callable[[], None]


@dataclass
class Timers:
    """Two 8-bit counters stepped by the driver at ``TIMER_HZ``.

    The sound cue is edge triggered: listeners run once when the sound timer
    moves from 1 to 0.
    """

    delay: int = 0
    sound: int = 0
    _listeners: list[SoundCueCallback] = field(default_factory=list, repr=False)

    def tick(self) -> None:
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            if self.sound == 1:
                if debug_enabled("timer"):
                    debug_log("timer", "sound cue")
                self._notify_listeners()
            self.sound -= 1

    def set_delay(self, value: int) -> None:
        self.delay = value & 0xFF

    def set_sound(self, value: int) -> None:
        self.sound = value & 0xFF

    def reset(self) -> None:
        self.delay = 0
        self.sound = 0

    def add_listener(self, listener: SoundCueCallback) -> None:
        self._listeners.append(listener)

    def _notify_listeners(self) -> None:
        for listener in tuple(self._listeners):
            listener()


__all__ = ["TIMER_HZ", "SoundCueCallback", "Timers"]
