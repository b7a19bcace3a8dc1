"""Python CHIP-8 interpreter.

The core (memory, CPU, display, keypad, timers) lives in ``bus``, ``cpu``,
``video``, ``io`` and ``system``; ``loader``, ``audio`` and ``ui`` make up the
pygame frontend used by ``run.py``.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
