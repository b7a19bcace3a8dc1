"""CPU package for the CHIP-8 interpreter."""

from .core import CPU, CPUState
from .errors import CPUError, IllegalOpcodeError, StackOverflowError, StackUnderflowError
from .quirks import Quirks
from .stack import CallStack
from . import opcodes

__all__ = [
    "CPU",
    "CPUState",
    "CallStack",
    "CPUError",
    "IllegalOpcodeError",
    "StackOverflowError",
    "StackUnderflowError",
    "Quirks",
    "opcodes",
]
