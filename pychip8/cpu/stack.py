"""Fixed-depth return address stack."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import StackOverflowError, StackUnderflowError

STACK_DEPTH = 16


@dataclass
class CallStack:
    capacity: int = STACK_DEPTH
    depth: int = 0
    _slots: list[int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._slots = [0] * self.capacity

    def push(self, address: int) -> None:
        if self.depth >= self.capacity:
            raise StackOverflowError(f"call stack full ({self.capacity} entries)")
        self._slots[self.depth] = address & 0xFFFF
        self.depth += 1

    def pop(self) -> int:
        if self.depth == 0:
            raise StackUnderflowError("return with empty call stack")
        self.depth -= 1
        return self._slots[self.depth]

    def reset(self) -> None:
        self._slots = [0] * self.capacity
        self.depth = 0

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._slots[: self.depth])
