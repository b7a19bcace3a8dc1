"""Bus-related helpers for the CHIP-8 interpreter."""

from .memory import (
    FONT_START,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryError,
    ProgramTooLargeError,
)

__all__ = [
    "FONT_START",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "Memory",
    "MemoryError",
    "ProgramTooLargeError",
]
