"""Exceptions raised by the instruction engine."""


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised when the CPU fetches a word that matches no instruction."""


class StackOverflowError(CPUError):
    """Raised when a call is made with every stack slot in use."""


class StackUnderflowError(CPUError):
    """Raised when a return is executed with an empty stack."""
