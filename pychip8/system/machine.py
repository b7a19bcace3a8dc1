"""CHIP-8 machine assembly and external interface."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Optional

from pychip8.bus import FONT_START, PROGRAM_START, Memory
from pychip8.cpu import CPU, Quirks
from pychip8.cpu.opcodes import Instruction
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import FONT_DATA, Display

from .timers import SoundCueCallback, Timers


@dataclass
class MachineConfig:
    """Runtime configuration for a CHIP-8 machine."""

    quirks: Quirks = field(default_factory=Quirks.legacy)
    seed: Optional[int] = None
    rng: Optional[random.Random] = None
    sound_cue: Optional[SoundCueCallback] = None


@dataclass
class Machine:
    """Owns the complete interpreter state and exposes the driver API."""

    memory: Memory
    cpu: CPU
    display: Display
    keypad: Keypad
    timers: Timers

    def reset(self) -> None:
        """Return every component to power-on state; any loaded program is dropped."""

        self.memory.clear()
        self.memory.store_block(FONT_START, FONT_DATA)
        self.display.clear()
        self.keypad.reset()
        self.timers.reset()
        self.cpu.reset()
        if debug_enabled("cpu"):
            debug_log("cpu", "reset pc=%04x", self.cpu.state.pc)

    def load_program(self, data: bytes) -> None:
        """Copy ``data`` verbatim to the program load address."""

        self.memory.store_block(PROGRAM_START, bytes(data))
        if debug_enabled("loader"):
            debug_log("loader", "program bytes=%d end=%04x", len(data), PROGRAM_START + len(data) - 1)

    def step(self) -> Instruction:
        """Run exactly one fetch-decode-execute cycle."""

        return self.cpu.step()

    def tick_timers(self) -> None:
        self.timers.tick()

    def run_frame(self, instructions: int) -> None:
        """Run ``instructions`` steps followed by one timer tick."""

        for _ in range(instructions):
            self.cpu.step()
        self.timers.tick()

    def set_key(self, index: int, pressed: bool) -> None:
        self.keypad.set_state(index, pressed)

    def key_state(self, index: int) -> bool:
        return self.keypad.is_pressed(index)

    def framebuffer(self) -> tuple[bool, ...]:
        """Return the 64x32 pixel grid in row-major order."""

        return self.display.snapshot()


def create_machine(config: MachineConfig | None = None) -> Machine:
    """Instantiate a CHIP-8 machine with the font table loaded."""

    config = config or MachineConfig()
    rng = config.rng if config.rng is not None else random.Random(config.seed)

    memory = Memory()
    memory.store_block(FONT_START, FONT_DATA)
    display = Display()
    keypad = Keypad()
    timers = Timers()
    if config.sound_cue is not None:
        timers.add_listener(config.sound_cue)

    cpu = CPU(memory, display, keypad, timers, quirks=config.quirks, rng=rng)

    return Machine(
        memory=memory,
        cpu=cpu,
        display=display,
        keypad=keypad,
        timers=timers,
    )
