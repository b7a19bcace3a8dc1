"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import MAX_ROM_SIZE, RomFormatError, RomImage, load_rom, load_rom_from_path, read_rom

__all__ = [
    "MAX_ROM_SIZE",
    "RomImage",
    "RomFormatError",
    "load_rom",
    "load_rom_from_path",
    "read_rom",
]
