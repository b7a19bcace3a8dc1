"""Raw ROM image loader.

CHIP-8 programs carry no header: the file is a sequence of big-endian
instruction words and data copied verbatim to the load address.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MEMORY_SIZE, PROGRAM_START
from pychip8.system import Machine
from pychip8.utils import debug_enabled, debug_log

MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START


class RomFormatError(RuntimeError):
    """Raised when a ROM image cannot be used as a program."""


@dataclass
class RomImage:
    """Metadata describing a loaded program image."""

    name: str
    data: bytes
    start: int = PROGRAM_START

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def end(self) -> int:
        return self.start + self.size - 1


def read_rom(stream: BinaryIO, name: str = "") -> RomImage:
    """Read a ROM image from ``stream``.

    Size is checked when the image is copied into memory, which raises
    :class:`~pychip8.bus.ProgramTooLargeError` for oversized programs.
    """

    data = stream.read()
    if not data:
        raise RomFormatError(f"ROM image {name or '<stream>'} is empty")
    return RomImage(name=name, data=bytes(data))


def load_rom(stream: BinaryIO, machine: Machine, name: str = "") -> RomImage:
    """Load a ROM image from ``stream`` into ``machine`` and return metadata."""

    image = read_rom(stream, name)
    machine.load_program(image.data)
    if debug_enabled("loader"):
        debug_log("loader", "rom=%s size=%d range=%04x-%04x", image.name, image.size, image.start, image.end)
    return image


def load_rom_from_path(path: Path, machine: Machine) -> RomImage:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle, machine, name=path.name)
