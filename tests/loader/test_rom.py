from __future__ import annotations

import io

import pytest

from pychip8.bus import PROGRAM_START, ProgramTooLargeError
from pychip8.loader import MAX_ROM_SIZE, RomFormatError, load_rom, load_rom_from_path
from pychip8.system import create_machine


def test_load_rom_copies_bytes_to_program_start() -> None:
    machine = create_machine()

    image = load_rom(io.BytesIO(bytes([0x60, 0x0A, 0x70, 0x05])), machine, name="add.ch8")

    assert image.name == "add.ch8"
    assert image.size == 4
    assert (image.start, image.end) == (PROGRAM_START, PROGRAM_START + 3)
    assert machine.memory.load_block(PROGRAM_START, 4) == bytes([0x60, 0x0A, 0x70, 0x05])


def test_load_rom_from_path(tmp_path) -> None:
    rom = tmp_path / "maze.ch8"
    rom.write_bytes(bytes([0x12, 0x00]))
    machine = create_machine()

    image = load_rom_from_path(rom, machine)

    assert image.name == "maze.ch8"
    assert machine.cpu.peek() == 0x1200


def test_empty_rom_is_rejected() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(b""), create_machine())


def test_rom_filling_memory_exactly_loads() -> None:
    machine = create_machine()

    image = load_rom(io.BytesIO(b"\xAB" * MAX_ROM_SIZE), machine)

    assert image.end == 0xFFF
    assert machine.memory.load8(0xFFF) == 0xAB


def test_oversized_rom_is_rejected() -> None:
    machine = create_machine()

    with pytest.raises(ProgramTooLargeError):
        load_rom(io.BytesIO(b"\x00" * (MAX_ROM_SIZE + 1)), machine)
    assert machine.memory.load8(PROGRAM_START) == 0


def test_missing_rom_file(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8", create_machine())
