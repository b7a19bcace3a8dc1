"""Convert display snapshots into RGB frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from .display import SCREEN_HEIGHT, SCREEN_WIDTH

RGBColor = Tuple[int, int, int]

PIXEL_OFF: RGBColor = (0x00, 0x00, 0x00)
PIXEL_ON: RGBColor = (0xFF, 0xFF, 0xFF)


def pack_color(color: Sequence[int]) -> bytes:
    """Return ``color`` as three RGB bytes."""

    if len(color) != 3:
        raise ValueError(f"expected an RGB triple, got {tuple(color)!r}")
    if any(not 0 <= channel <= 0xFF for channel in color):
        raise ValueError(f"RGB channel out of range in {tuple(color)!r}")
    return bytes(color)


@dataclass
class RenderResult:
    """Packed RGB888 frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        """Return a ``pygame.Surface`` holding a copy of the frame."""

        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc

        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB").copy()


class Renderer:
    """Scale a boolean pixel grid up to an RGB frame.

    Dark pixels are painted with ``off`` and lit pixels with ``on``.
    """

    def __init__(
        self,
        off: Sequence[int] = PIXEL_OFF,
        on: Sequence[int] = PIXEL_ON,
        *,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
    ) -> None:
        self._off = pack_color(off)
        self._on = pack_color(on)
        self._width = width
        self._height = height

    def render(self, pixels: Sequence[bool], *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        if len(pixels) != self._width * self._height:
            raise ValueError(f"expected {self._width * self._height} pixels, got {len(pixels)}")

        out_width = self._width * scale
        frame = bytearray()
        for y in range(self._height):
            start = y * self._width
            line = b"".join((self._on if lit else self._off) * scale for lit in pixels[start : start + self._width])
            frame.extend(line * scale)
        return RenderResult(out_width, self._height * scale, bytes(frame))
