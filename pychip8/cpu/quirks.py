"""Selectable instruction behaviour for compatibility with different ROM sets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Quirks:
    """Per-instruction switches between legacy and reference behaviour.

    ``compare_self``
        5XY0 compares VX with VX instead of VX with VY, so it always skips.
    ``bcd_of_index``
        FX33 stores the decimal digits of X itself rather than of VX.
    ``exclusive_bulk``
        FX55/FX65 transfer V0..V(X-1) instead of V0..VX.

    The legacy interpreter this project reproduces has all three enabled.
    """

    compare_self: bool = True
    bcd_of_index: bool = True
    exclusive_bulk: bool = True

    @classmethod
    def legacy(cls) -> "Quirks":
        return cls()

    @classmethod
    def standard(cls) -> "Quirks":
        return cls(compare_self=False, bcd_of_index=False, exclusive_bulk=False)

    def describe(self) -> str:
        enabled = [name for name in ("compare_self", "bcd_of_index", "exclusive_bulk") if getattr(self, name)]
        return ",".join(enabled) if enabled else "standard"
