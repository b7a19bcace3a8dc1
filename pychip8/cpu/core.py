"""CHIP-8 fetch-decode-execute engine."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from pychip8.bus import FONT_START, PROGRAM_START, Memory
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Display
from pychip8.video.font import glyph_address

from .errors import CPUError, IllegalOpcodeError
from .opcodes import OPCODE_TABLE, Instruction, Operands, decode_fields, lookup
from .quirks import Quirks
from .stack import CallStack

if TYPE_CHECKING:
    from pychip8.system.timers import Timers

REGISTER_COUNT = 16
FLAG = 0xF
INSTRUCTION_BYTES = 2


@dataclass
class CPUState:
    """Snapshot of the register file."""

    v: list[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    i: int = 0x0000
    pc: int = PROGRAM_START

    def clone(self) -> "CPUState":
        return CPUState(list(self.v), self.i, self.pc)


@dataclass
class CPU:
    """Interpreter core operating on the machine's memory and devices.

    The program counter is advanced past the fetched word before the handler
    runs, so jumps overwrite the advanced value and FX0A rewinds it by one
    word to retry on the next step.
    """

    memory: Memory
    display: Display
    keypad: Keypad
    timers: Timers
    quirks: Quirks = field(default_factory=Quirks.legacy)
    rng: random.Random = field(default_factory=random.Random)
    instruction_table: Sequence[Sequence[Instruction]] = field(default=OPCODE_TABLE)

    state: CPUState = field(default_factory=CPUState)
    stack: CallStack = field(default_factory=CallStack)
    step_count: int = 0
    waiting_for_key: bool = False

    def reset(self) -> None:
        """Return registers, index, stack and program counter to power-on values."""

        self.state = CPUState()
        self.stack.reset()
        self.step_count = 0
        self.waiting_for_key = False

    def step(self) -> Instruction:
        """Execute a single instruction and return its metadata."""

        pc_before = self.state.pc
        word = self._fetch()
        instruction = self._decode(word, pc_before)
        if debug_enabled("cpu"):
            debug_log("cpu", "pc=%04x word=%04x %s", pc_before, word, instruction.format(word))

        handler = getattr(self, instruction.handler, None)
        if handler is None:
            raise CPUError(f"handler '{instruction.handler}' not implemented")

        handler(decode_fields(word))
        self.step_count += 1
        return instruction

    def peek(self) -> int:
        """Return the word at the program counter without executing it."""

        return self.memory.load16(self.state.pc)

    # ------------------------------------------------------------------
    # Fetch / decode

    def _fetch(self) -> int:
        word = self.memory.load16(self.state.pc)
        self.state.pc += INSTRUCTION_BYTES
        return word

    def _decode(self, word: int, address: int) -> Instruction:
        instruction = lookup(self.instruction_table, word)
        if instruction is None:
            raise IllegalOpcodeError(f"unknown instruction {word:#06x} at {address:#05x}")
        return instruction

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_nop(self, _: Operands) -> None:
        """No operation."""

    def op_cls(self, _: Operands) -> None:
        self.display.clear()

    def op_ret(self, _: Operands) -> None:
        self.state.pc = self.stack.pop()

    def op_jp(self, ops: Operands) -> None:
        self.state.pc = ops.nnn

    def op_call(self, ops: Operands) -> None:
        self.stack.push(self.state.pc)
        self.state.pc = ops.nnn

    def op_se_immediate(self, ops: Operands) -> None:
        self._skip_if(self.state.v[ops.x] == ops.nn)

    def op_sne_immediate(self, ops: Operands) -> None:
        self._skip_if(self.state.v[ops.x] != ops.nn)

    def op_se_registers(self, ops: Operands) -> None:
        other = ops.x if self.quirks.compare_self else ops.y
        self._skip_if(self.state.v[ops.x] == self.state.v[other])

    def op_ld_immediate(self, ops: Operands) -> None:
        self.state.v[ops.x] = ops.nn

    def op_add_immediate(self, ops: Operands) -> None:
        self.state.v[ops.x] = (self.state.v[ops.x] + ops.nn) & 0xFF

    def op_ld_register(self, ops: Operands) -> None:
        self.state.v[ops.x] = self.state.v[ops.y]

    def op_or(self, ops: Operands) -> None:
        self.state.v[ops.x] |= self.state.v[ops.y]

    def op_and(self, ops: Operands) -> None:
        self.state.v[ops.x] &= self.state.v[ops.y]

    def op_xor(self, ops: Operands) -> None:
        self.state.v[ops.x] ^= self.state.v[ops.y]

    def op_add_registers(self, ops: Operands) -> None:
        v = self.state.v
        total = v[ops.x] + v[ops.y]
        v[ops.x] = total & 0xFF
        v[FLAG] = 1 if total > 0xFF else 0

    def op_sub(self, ops: Operands) -> None:
        v = self.state.v
        no_borrow = v[ops.x] > v[ops.y]
        v[ops.x] = (v[ops.x] - v[ops.y]) & 0xFF
        v[FLAG] = 1 if no_borrow else 0

    def op_shr(self, ops: Operands) -> None:
        v = self.state.v
        lsb = v[ops.x] & 0x01
        v[ops.x] >>= 1
        v[FLAG] = lsb

    def op_subn(self, ops: Operands) -> None:
        v = self.state.v
        no_borrow = v[ops.y] > v[ops.x]
        v[ops.x] = (v[ops.y] - v[ops.x]) & 0xFF
        v[FLAG] = 1 if no_borrow else 0

    def op_shl(self, ops: Operands) -> None:
        v = self.state.v
        msb = (v[ops.x] >> 7) & 0x01
        v[ops.x] = (v[ops.x] << 1) & 0xFF
        v[FLAG] = msb

    def op_sne_registers(self, ops: Operands) -> None:
        self._skip_if(self.state.v[ops.x] != self.state.v[ops.y])

    def op_ld_index(self, ops: Operands) -> None:
        self.state.i = ops.nnn

    def op_jp_offset(self, ops: Operands) -> None:
        self.state.pc = self.state.v[0] + ops.nnn

    def op_rnd(self, ops: Operands) -> None:
        self.state.v[ops.x] = self.rng.getrandbits(8) & ops.nn

    def op_drw(self, ops: Operands) -> None:
        v = self.state.v
        rows = self.memory.load_block(self.state.i, ops.n)
        collision = self.display.draw_sprite(v[ops.x], v[ops.y], rows)
        v[FLAG] = 1 if collision else 0

    def op_skp(self, ops: Operands) -> None:
        self._skip_if(self.keypad.is_pressed(self.state.v[ops.x]))

    def op_sknp(self, ops: Operands) -> None:
        self._skip_if(not self.keypad.is_pressed(self.state.v[ops.x]))

    def op_ld_from_delay(self, ops: Operands) -> None:
        self.state.v[ops.x] = self.timers.delay

    def op_wait_key(self, ops: Operands) -> None:
        key = self.keypad.highest_pressed()
        if key is None:
            self.state.pc -= INSTRUCTION_BYTES
            self.waiting_for_key = True
            return
        self.state.v[ops.x] = key
        self.waiting_for_key = False

    def op_ld_delay(self, ops: Operands) -> None:
        self.timers.set_delay(self.state.v[ops.x])

    def op_ld_sound(self, ops: Operands) -> None:
        self.timers.set_sound(self.state.v[ops.x])

    def op_add_index(self, ops: Operands) -> None:
        self.state.i = (self.state.i + self.state.v[ops.x]) & 0xFFFF

    def op_ld_font(self, ops: Operands) -> None:
        self.state.i = glyph_address(FONT_START, self.state.v[ops.x])

    def op_bcd(self, ops: Operands) -> None:
        value = ops.x if self.quirks.bcd_of_index else self.state.v[ops.x]
        address = self.state.i
        self.memory.check_range(address, 3)
        self.memory.store8(address, value // 100)
        self.memory.store8(address + 1, (value % 100) // 10)
        self.memory.store8(address + 2, value % 10)

    def op_store_registers(self, ops: Operands) -> None:
        address = self.state.i
        count = self._bulk_count(ops.x)
        self.memory.check_range(address, count)
        for index in range(count):
            self.memory.store8(address + index, self.state.v[index])

    def op_load_registers(self, ops: Operands) -> None:
        address = self.state.i
        count = self._bulk_count(ops.x)
        self.memory.check_range(address, count)
        for index in range(count):
            self.state.v[index] = self.memory.load8(address + index)

    # ------------------------------------------------------------------
    # Helpers

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self.state.pc += INSTRUCTION_BYTES

    def _bulk_count(self, x: int) -> int:
        return x if self.quirks.exclusive_bulk else x + 1
