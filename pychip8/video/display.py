"""Monochrome 64x32 frame buffer."""

from __future__ import annotations

from dataclasses import dataclass, field

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
SPRITE_WIDTH = 8


@dataclass
class Display:
    """Row-major boolean pixel grid, indexed by ``x + SCREEN_WIDTH * y``.

    Pixels change only through :meth:`draw_sprite` (XOR) and :meth:`clear`.
    """

    width: int = SCREEN_WIDTH
    height: int = SCREEN_HEIGHT
    _pixels: list[bool] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._pixels = [False] * (self.width * self.height)

    def clear(self) -> None:
        self._pixels = [False] * (self.width * self.height)

    def get_pixel(self, x: int, y: int) -> bool:
        return self._pixels[(x % self.width) + self.width * (y % self.height)]

    def draw_sprite(self, x: int, y: int, rows: bytes) -> bool:
        """XOR ``rows`` (one byte per row, MSB leftmost) onto the grid at (x, y).

        Column and row are wrapped independently for every pixel. Returns True
        when at least one lit pixel was turned off.
        """

        collision = False
        pixels = self._pixels
        for row_offset, bits in enumerate(rows):
            if not bits:
                continue
            py = (y + row_offset) % self.height
            for column in range(SPRITE_WIDTH):
                if bits & (0x80 >> column):
                    px = (x + column) % self.width
                    index = px + self.width * py
                    collision |= pixels[index]
                    pixels[index] = not pixels[index]
        return collision

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._pixels)

    def rows(self) -> list[str]:
        """Render the grid as text rows (``#`` lit, ``.`` dark) for debugging."""

        lines = []
        for y in range(self.height):
            start = y * self.width
            lines.append("".join("#" if lit else "." for lit in self._pixels[start : start + self.width]))
        return lines


__all__ = ["Display", "SCREEN_WIDTH", "SCREEN_HEIGHT", "SPRITE_WIDTH"]
