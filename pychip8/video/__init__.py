"""Video helpers for the CHIP-8 interpreter."""

from __future__ import annotations

from .display import SCREEN_HEIGHT, SCREEN_WIDTH, Display
from .font import FONT_DATA, FONT_HEIGHT, FONT_WIDTH, GLYPH_BYTES
from .renderer import PIXEL_OFF, PIXEL_ON, RenderResult, Renderer, pack_color

__all__ = [
    "Display",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "FONT_DATA",
    "FONT_WIDTH",
    "FONT_HEIGHT",
    "GLYPH_BYTES",
    "Renderer",
    "RenderResult",
    "PIXEL_OFF",
    "PIXEL_ON",
    "pack_color",
]
