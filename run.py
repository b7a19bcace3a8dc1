"""Command-line entry point for the Python CHIP-8 interpreter."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.ui.app import AppConfig, Chip8App


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 interpreter (Python)",
    )
    parser.add_argument(
        "--rom",
        type=Path,
        required=True,
        help="Path to the CHIP-8 program image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=15,
        help="Integer window scale factor (default: 15)",
    )
    parser.add_argument(
        "--ticks-per-frame",
        type=int,
        default=6,
        help="Instructions executed per 60 Hz frame (default: 6)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the RND instruction's generator",
    )
    parser.add_argument(
        "--standard",
        action="store_true",
        help="Use reference semantics for 5XY0, FX33, FX55 and FX65",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.ticks_per_frame <= 0:
        parser.error("--ticks-per-frame must be positive")

    config = AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        ticks_per_frame=args.ticks_per_frame,
        fullscreen=args.fullscreen,
        seed=args.seed,
        standard=args.standard,
    )
    app = Chip8App(config)
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
