"""Flat 4 KiB memory for the CHIP-8 interpreter.

The interpreter reserves the low 512 bytes: the font glyph table lives at
``FONT_START`` and program images are copied to ``PROGRAM_START``. Every
access is bounds-checked; an address outside the array means the program
image is corrupt, so the error propagates instead of wrapping.
"""

from __future__ import annotations

from dataclasses import dataclass

MEMORY_SIZE = 0x1000
FONT_START = 0x000
PROGRAM_START = 0x200


class MemoryError(Exception):
    """Raised when memory is accessed outside its bounds."""


class ProgramTooLargeError(MemoryError):
    """Raised when a program image does not fit above the load address."""


@dataclass
class Memory:
    """Byte-addressable RAM with strict bounds checking."""

    length: int = MEMORY_SIZE

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise MemoryError("memory must have a positive length")
        self._data = bytearray(self.length)

    def get_end_address(self) -> int:
        return self.length - 1

    def _offset(self, address: int, span: int = 1) -> int:
        if span == 0:
            return address
        if address < 0 or address + span > self.length:
            end = address + span - 1
            raise MemoryError(
                f"address range {address:#06x}-{end:#06x} outside memory 0x0000-{self.get_end_address():#06x}"
            )
        return address

    def check_range(self, address: int, span: int) -> None:
        """Raise :class:`MemoryError` unless ``span`` bytes from ``address`` are in bounds."""

        self._offset(address, span)

    def load8(self, address: int) -> int:
        return self._data[self._offset(address)]

    def store8(self, address: int, value: int) -> None:
        self._data[self._offset(address)] = value & 0xFF

    def load16(self, address: int) -> int:
        """Read a big-endian word from ``address`` and ``address + 1``."""

        offset = self._offset(address, 2)
        return (self._data[offset] << 8) | self._data[offset + 1]

    def load_block(self, address: int, length: int) -> bytes:
        offset = self._offset(address, length)
        return bytes(self._data[offset : offset + length])

    def store_block(self, address: int, data: bytes) -> None:
        """Copy ``data`` verbatim starting at ``address``."""

        if address < 0 or address + len(data) > self.length:
            raise ProgramTooLargeError(
                f"{len(data)} bytes at {address:#06x} exceed memory end {self.get_end_address():#06x}"
            )
        self._data[address : address + len(data)] = data

    def clear(self) -> None:
        self._data[:] = bytes(self.length)

    def snapshot(self) -> bytes:
        return bytes(self._data)


__all__ = [
    "FONT_START",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "Memory",
    "MemoryError",
    "ProgramTooLargeError",
]
