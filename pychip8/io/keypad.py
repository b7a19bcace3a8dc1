"""CHIP-8 hexadecimal keypad state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16


# Host key names laid out as the 4x4 COSMAC VIP pad:
#   1 2 3 C      1 2 3 4
#   4 5 6 D  <-  q w e r
#   7 8 9 E      a s d f
#   A 0 B F      z x c v
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


class KeypadError(ValueError):
    """Raised when a key index outside 0-15 is used."""


@dataclass
class Keypad:
    """Sixteen pressed/released flags, written only through :meth:`set_state`."""

    _keys: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)

    def set_state(self, index: int, pressed: bool) -> None:
        self._check_index(index)
        self._keys[index] = bool(pressed)
        if debug_enabled("input"):
            debug_log("input", "key=%X pressed=%s", index, pressed)

    def is_pressed(self, index: int) -> bool:
        self._check_index(index)
        return self._keys[index]

    def highest_pressed(self) -> int | None:
        """Return the highest-indexed pressed key, or None when idle."""

        for index in range(KEY_COUNT - 1, -1, -1):
            if self._keys[index]:
                return index
        return None

    def press_name(self, key_name: str) -> None:
        index = self._lookup(key_name)
        if index is not None:
            self.set_state(index, True)

    def release_name(self, key_name: str) -> None:
        index = self._lookup(key_name)
        if index is not None:
            self.set_state(index, False)

    def reset(self) -> None:
        self._keys[:] = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._keys)

    def _lookup(self, key_name: str) -> int | None:
        index = KEY_MAP.get(key_name.lower())
        if index is None and debug_enabled("input"):
            debug_log("input", "unmapped=%s", key_name)
        return index

    def _check_index(self, index: int) -> None:
        if not 0 <= index < KEY_COUNT:
            raise KeypadError(f"key index out of range: {index}")

