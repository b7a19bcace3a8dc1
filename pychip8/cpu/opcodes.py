"""Instruction metadata and decoding for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Iterable, List, Sequence


@dataclass(frozen=True)
class Operands:
    """The fields of a 16-bit instruction word."""

    word: int
    group: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int


def decode_fields(word: int) -> Operands:
    """Split ``word`` into its four nibbles and the 8/12-bit immediates."""

    return Operands(
        word=word,
        group=(word & 0xF000) >> 12,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        nn=word & 0x00FF,
        nnn=word & 0x0FFF,
    )


@dataclass(frozen=True)
class Instruction:
    """Metadata describing one instruction pattern.

    A word matches when ``word & mask == pattern``. ``syntax`` is a
    ``str.format`` template over the :class:`Operands` fields.
    """

    pattern: int
    mask: int
    mnemonic: str
    handler: str
    syntax: str = ""

    def __post_init__(self) -> None:
        if not 0 <= self.pattern <= 0xFFFF or not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"pattern out of range: {self.pattern:#x}/{self.mask:#x}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")
        if not self.mask & 0xF000:
            raise ValueError("mask must cover the op-group nibble")

    @property
    def group(self) -> int:
        return self.pattern >> 12

    def matches(self, word: int) -> bool:
        return word & self.mask == self.pattern

    def overlaps(self, other: "Instruction") -> bool:
        common = self.mask & other.mask
        return (self.pattern ^ other.pattern) & common == 0

    def format(self, word: int) -> str:
        if not self.syntax:
            return self.mnemonic
        operands = self.syntax.format(**vars(decode_fields(word)))
        return f"{self.mnemonic} {operands}"


class OpcodeTable:
    """Builder grouping instruction patterns by their op-group nibble."""

    _GROUPS: Final[int] = 0x10

    def __init__(self) -> None:
        self._groups: List[List[Instruction]] = [[] for _ in range(self._GROUPS)]

    def register(self, instruction: Instruction) -> None:
        bucket = self._groups[instruction.group]
        for existing in bucket:
            if existing.overlaps(instruction):
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} ({instruction.mnemonic}) overlaps "
                    f"{existing.pattern:#06x} ({existing.mnemonic})"
                )
        bucket.append(instruction)

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def freeze(self) -> Sequence[Sequence[Instruction]]:
        return tuple(tuple(bucket) for bucket in self._groups)


def build_instruction_table(instructions: Iterable[Instruction]) -> Sequence[Sequence[Instruction]]:
    """Build a 16-bucket lookup table keyed by the op-group nibble."""

    table = OpcodeTable()
    table.register_all(instructions)
    return table.freeze()


def lookup(table: Sequence[Sequence[Instruction]], word: int) -> Instruction | None:
    """Return the instruction matching ``word`` or None when nothing does."""

    for instruction in table[(word >> 12) & 0xF]:
        if instruction.matches(word):
            return instruction
    return None


DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(0x0000, 0xFFFF, "NOP", "op_nop"),
    Instruction(0x00E0, 0xFFFF, "CLS", "op_cls"),
    Instruction(0x00EE, 0xFFFF, "RET", "op_ret"),
    Instruction(0x1000, 0xF000, "JP", "op_jp", "{nnn:#05x}"),
    Instruction(0x2000, 0xF000, "CALL", "op_call", "{nnn:#05x}"),
    Instruction(0x3000, 0xF000, "SE", "op_se_immediate", "V{x:X}, {nn:#04x}"),
    Instruction(0x4000, 0xF000, "SNE", "op_sne_immediate", "V{x:X}, {nn:#04x}"),
    # The low nibble of 5XY_ is not checked.
    Instruction(0x5000, 0xF000, "SE", "op_se_registers", "V{x:X}, V{y:X}"),
    Instruction(0x6000, 0xF000, "LD", "op_ld_immediate", "V{x:X}, {nn:#04x}"),
    Instruction(0x7000, 0xF000, "ADD", "op_add_immediate", "V{x:X}, {nn:#04x}"),
    Instruction(0x8000, 0xF00F, "LD", "op_ld_register", "V{x:X}, V{y:X}"),
    Instruction(0x8001, 0xF00F, "OR", "op_or", "V{x:X}, V{y:X}"),
    Instruction(0x8002, 0xF00F, "AND", "op_and", "V{x:X}, V{y:X}"),
    Instruction(0x8003, 0xF00F, "XOR", "op_xor", "V{x:X}, V{y:X}"),
    Instruction(0x8004, 0xF00F, "ADD", "op_add_registers", "V{x:X}, V{y:X}"),
    Instruction(0x8005, 0xF00F, "SUB", "op_sub", "V{x:X}, V{y:X}"),
    Instruction(0x8006, 0xF00F, "SHR", "op_shr", "V{x:X}"),
    Instruction(0x8007, 0xF00F, "SUBN", "op_subn", "V{x:X}, V{y:X}"),
    Instruction(0x800E, 0xF00F, "SHL", "op_shl", "V{x:X}"),
    Instruction(0x9000, 0xF00F, "SNE", "op_sne_registers", "V{x:X}, V{y:X}"),
    Instruction(0xA000, 0xF000, "LD", "op_ld_index", "I, {nnn:#05x}"),
    Instruction(0xB000, 0xF000, "JP", "op_jp_offset", "V0, {nnn:#05x}"),
    Instruction(0xC000, 0xF000, "RND", "op_rnd", "V{x:X}, {nn:#04x}"),
    Instruction(0xD000, 0xF000, "DRW", "op_drw", "V{x:X}, V{y:X}, {n}"),
    Instruction(0xE09E, 0xF0FF, "SKP", "op_skp", "V{x:X}"),
    Instruction(0xE0A1, 0xF0FF, "SKNP", "op_sknp", "V{x:X}"),
    Instruction(0xF007, 0xF0FF, "LD", "op_ld_from_delay", "V{x:X}, DT"),
    Instruction(0xF00A, 0xF0FF, "LD", "op_wait_key", "V{x:X}, K"),
    Instruction(0xF015, 0xF0FF, "LD", "op_ld_delay", "DT, V{x:X}"),
    Instruction(0xF018, 0xF0FF, "LD", "op_ld_sound", "ST, V{x:X}"),
    Instruction(0xF01E, 0xF0FF, "ADD", "op_add_index", "I, V{x:X}"),
    Instruction(0xF029, 0xF0FF, "LD", "op_ld_font", "F, V{x:X}"),
    Instruction(0xF033, 0xF0FF, "LD", "op_bcd", "B, V{x:X}"),
    Instruction(0xF055, 0xF0FF, "LD", "op_store_registers", "[I], V{x:X}"),
    Instruction(0xF065, 0xF0FF, "LD", "op_load_registers", "V{x:X}, [I]"),
)


OPCODE_TABLE: Sequence[Sequence[Instruction]] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def disassemble(word: int, table: Sequence[Sequence[Instruction]] = OPCODE_TABLE) -> str:
    """Render ``word`` as assembly text, or ``DW 0xNNNN`` when unknown."""

    instruction = lookup(table, word)
    if instruction is None:
        return f"DW {word:#06x}"
    return instruction.format(word)


__all__ = [
    "Operands",
    "Instruction",
    "OpcodeTable",
    "DEFAULT_INSTRUCTIONS",
    "OPCODE_TABLE",
    "build_instruction_table",
    "decode_fields",
    "disassemble",
    "lookup",
]
