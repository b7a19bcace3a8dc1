"""Built-in hexadecimal font for the CHIP-8 interpreter."""

from __future__ import annotations

from typing import Iterable

FONT_WIDTH = 4
FONT_HEIGHT = 5
GLYPH_BYTES = FONT_HEIGHT
GLYPH_COUNT = 16

# Each glyph is five rows; only the high nibble of every row is lit.
FONT_DATA = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


def glyph_address(base: int, digit: int) -> int:
    """Return the address of the glyph for ``digit`` in a font table at ``base``."""

    return base + GLYPH_BYTES * digit


def get_glyph(digit: int) -> Iterable[int]:
    """Return the five row bytes of the glyph for ``digit`` (0-F)."""

    if not 0 <= digit < GLYPH_COUNT:
        raise ValueError(f"glyph digit out of range: {digit}")
    offset = digit * GLYPH_BYTES
    return FONT_DATA[offset : offset + GLYPH_BYTES]
