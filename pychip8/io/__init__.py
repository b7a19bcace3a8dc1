"""Input devices for the CHIP-8 interpreter."""

from .keypad import KEY_COUNT, KEY_MAP, Keypad, KeypadError

__all__ = [
    "KEY_COUNT",
    "KEY_MAP",
    "Keypad",
    "KeypadError",
]
