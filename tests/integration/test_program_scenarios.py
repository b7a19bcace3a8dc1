"""Small complete programs run through the machine interface."""

from __future__ import annotations

from pychip8.cpu import Quirks
from pychip8.system import MachineConfig, create_machine


def program(*words: int) -> bytes:
    return b"".join(word.to_bytes(2, "big") for word in words)


def glyph_rows(machine, x: int, y: int) -> list[str]:
    frame = machine.framebuffer()
    return [
        "".join("#" if frame[(x + column) + 64 * (y + row)] else "." for column in range(4))
        for row in range(5)
    ]


def test_delay_countdown_loop_finishes() -> None:
    machine = create_machine()
    machine.load_program(
        program(
            0x6003,  # 200: LD V0, 3
            0xF015,  # 202: LD DT, V0
            0xF107,  # 204: LD V1, DT
            0x3100,  # 206: SE V1, 0
            0x1204,  # 208: JP 0x204
            0x6AFF,  # 20A: LD VA, 0xFF
            0x120C,  # 20C: JP 0x20C
        )
    )

    frames = 0
    while machine.cpu.state.v[0xA] != 0xFF and frames < 10:
        machine.run_frame(4)
        frames += 1

    assert machine.cpu.state.v[0xA] == 0xFF
    assert machine.timers.delay == 0
    assert frames <= 5


def test_score_digits_drawn_from_bcd() -> None:
    machine = create_machine(MachineConfig(quirks=Quirks.standard()))
    machine.load_program(
        program(
            0x6C7B,  # LD VC, 123
            0xA300,  # LD I, 0x300
            0xFC33,  # LD B, VC
            0xF265,  # LD V2, [I]  -> V0..V2 = 1, 2, 3
            0x6300,  # LD V3, 0  (x)
            0x6400,  # LD V4, 0  (y)
            0xF029,  # LD F, V0
            0xD345,  # DRW V3, V4, 5
            0x7305,  # ADD V3, 5
            0xF129,  # LD F, V1
            0xD345,  # DRW V3, V4, 5
            0x7305,  # ADD V3, 5
            0xF229,  # LD F, V2
            0xD345,  # DRW V3, V4, 5
        )
    )

    for _ in range(14):
        machine.step()

    assert machine.cpu.state.v[:3] == [1, 2, 3]
    assert machine.cpu.state.v[0xF] == 0
    assert glyph_rows(machine, 0, 0) == ["..#.", ".##.", "..#.", "..#.", ".###"]
    assert glyph_rows(machine, 5, 0) == ["####", "...#", "####", "#...", "####"]
    assert glyph_rows(machine, 10, 0) == ["####", "...#", "####", "...#", "####"]


def test_key_wait_then_subroutine() -> None:
    machine = create_machine()
    machine.load_program(
        program(
            0xF50A,  # 200: LD V5, K
            0x2206,  # 202: CALL 0x206
            0x1204,  # 204: JP 0x204
            0x8654,  # 206: ADD V6, V5
            0x00EE,  # 208: RET
        )
    )

    machine.run_frame(3)
    assert machine.cpu.state.pc == 0x200
    assert machine.cpu.waiting_for_key

    machine.set_key(0x7, True)
    machine.run_frame(4)

    assert machine.cpu.state.v[5] == 0x7
    assert machine.cpu.state.v[6] == 0x7
    assert machine.cpu.state.pc == 0x204
    assert machine.cpu.stack.depth == 0
