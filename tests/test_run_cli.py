from __future__ import annotations

import pytest

import run


def test_parser_defaults(tmp_path) -> None:
    rom = tmp_path / "game.ch8"
    args = run.build_arg_parser().parse_args(["--rom", str(rom)])

    assert args.rom == rom
    assert args.scale == 15
    assert args.ticks_per_frame == 6
    assert args.seed is None
    assert not args.standard
    assert not args.fullscreen


def test_parser_options(tmp_path) -> None:
    args = run.build_arg_parser().parse_args(
        ["--rom", "x.ch8", "--scale", "8", "--ticks-per-frame", "12", "--seed", "7", "--standard"]
    )

    assert (args.scale, args.ticks_per_frame, args.seed, args.standard) == (8, 12, 7, True)


def test_rom_is_required() -> None:
    with pytest.raises(SystemExit):
        run.build_arg_parser().parse_args([])


def test_missing_rom_exits(tmp_path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        run.main(["--rom", str(tmp_path / "missing.ch8")])
    assert excinfo.value.code == 2


def test_non_positive_scale_exits(tmp_path) -> None:
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x00\xE0")

    with pytest.raises(SystemExit):
        run.main(["--rom", str(rom), "--scale", "0"])


def test_runtime_error_exits_with_status_one(tmp_path, monkeypatch, capsys) -> None:
    rom = tmp_path / "game.ch8"
    rom.write_bytes(b"\x00\xE0")

    def fail(self) -> None:
        raise RuntimeError("Emulation stopped: boom")

    monkeypatch.setattr(run.Chip8App, "run", fail)

    with pytest.raises(SystemExit) as excinfo:
        run.main(["--rom", str(rom)])
    assert excinfo.value.code == 1
    assert "boom" in capsys.readouterr().err
