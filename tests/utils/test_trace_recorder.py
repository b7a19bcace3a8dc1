from __future__ import annotations

from types import SimpleNamespace

import pytest

from pychip8.utils import TraceRecorder


def make_state(pc: int, i: int = 0, **registers: int) -> SimpleNamespace:
    v = [0] * 16
    for name, value in registers.items():
        v[int(name[1:], 16)] = value
    return SimpleNamespace(pc=pc, v=v, i=i)


def test_recorder_keeps_most_recent_entries() -> None:
    recorder = TraceRecorder(capacity=2)
    recorder.record_step(make_state(0x200), 0x6001, mnemonic="LD")
    recorder.record_step(make_state(0x202), 0x7001, mnemonic="ADD")
    recorder.record_step(make_state(0x204), 0x1204, mnemonic="JP")

    entries = list(recorder.entries())
    assert [entry.pc for entry in entries] == [0x202, 0x204]
    last = recorder.last_entry()
    assert last is not None and last.opcode == 0x1204


def test_format_entries_includes_registers_and_flags() -> None:
    recorder = TraceRecorder()
    recorder.record_step(
        make_state(0x20A, i=0x300, v0=0x12, vf=0x01),
        0xF10A,
        depth=2,
        delay=0x3C,
        waiting=True,
        mnemonic="LD",
    )

    (line,) = recorder.format_entries()
    assert line.startswith("pc=020A opcode=F10A LD")
    assert "I=0300 SP=2 DT=3C ST=00" in line
    assert "V=[12 00" in line
    assert line.endswith("01] flags=WAIT")


def test_missing_opcode_and_limit() -> None:
    recorder = TraceRecorder()
    recorder.record_step(make_state(0x200), None, note="reset")
    recorder.record_step(make_state(0x202), 0x00E0, mnemonic="CLS")

    lines = recorder.format_entries(limit=1)
    assert len(lines) == 1
    assert "opcode=00E0" in lines[0]
    assert "opcode=----" in recorder.format_entries()[0]
    assert recorder.format_entries()[0].endswith("flags=reset")


def test_clear_and_capacity_validation() -> None:
    recorder = TraceRecorder()
    recorder.record_step(make_state(0x200), 0x0000)
    recorder.clear()

    assert recorder.last_entry() is None
    with pytest.raises(ValueError):
        TraceRecorder(capacity=0)
