"""Pygame frontend for the CHIP-8 interpreter."""

from __future__ import annotations

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pychip8.audio import CueBeeper
from pychip8.bus import MemoryError
from pychip8.cpu import CPUError, Quirks
from pychip8.cpu.opcodes import disassemble
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import TIMER_HZ, Machine, MachineConfig, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import SCREEN_HEIGHT, SCREEN_WIDTH, Renderer


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    rom_path: Optional[Path] = None
    scale: int = 15
    ticks_per_frame: int = 6
    fullscreen: bool = False
    seed: Optional[int] = None
    standard: bool = False


class Chip8App:
    """Thin wrapper around the Pygame event loop.

    Each frame runs ``ticks_per_frame`` instruction steps, one timer step and
    one redraw, paced to ``TIMER_HZ`` frames per second.
    """

    def __init__(self, config: AppConfig) -> None:
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: CueBeeper | None = None
        self._pygame = None
        self._perf_enabled = debug_enabled("perf")
        self._perf_frame = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)
        self._frame_counter = 0
        self._cue_count = 0

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption("CHIP-8 Emulator")
        self._pygame = pygame

        mixer_state = pygame.mixer.get_init()
        if mixer_state is not None:
            try:
                self._beeper = CueBeeper(sample_rate=mixer_state[0])
            except RuntimeError as exc:
                self._beeper = None
                if debug_enabled("audio"):
                    debug_log("audio", "beeper_init_failed=%s", exc)
        elif debug_enabled("audio"):
            debug_log("audio", "mixer_unavailable")

        if not self._config.rom_path:
            raise RuntimeError("ROM image is required; pass --rom <path>")
        rom_path = self._config.rom_path
        if not rom_path.exists():
            raise RuntimeError(f"ROM file not found: {rom_path}")

        machine = self._create_machine(rom_path)
        self._machine = machine
        renderer = Renderer()

        scale = self._config.scale
        surface_size = (SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale)
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode(surface_size, flags)

        clock = pygame.time.Clock()
        self._running = True

        while self._running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self._enter_debug_shell(machine)
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_event(pygame.key.name(event.key), pressed=True)
                elif event.type == pygame.KEYUP:
                    self._handle_key_event(pygame.key.name(event.key), pressed=False)

            frame_start_time = time.perf_counter()
            self._step_frame(machine)

            frame = renderer.render(machine.framebuffer(), scale=scale)
            screen.blit(frame.to_surface(), (0, 0))
            pygame.display.flip()

            frame_duration = time.perf_counter() - frame_start_time
            if self._perf_enabled and frame_duration > 0:
                self._perf_frame += 1
                debug_log(
                    "perf",
                    "frame=%d steps=%d frame_ms=%.3f",
                    self._perf_frame,
                    self._config.ticks_per_frame,
                    frame_duration * 1000.0,
                )

            clock.tick(TIMER_HZ)
            self._frame_counter += 1

        if self._beeper is not None:
            self._beeper.shutdown()
        pygame.quit()

    def _create_machine(self, rom_path: Path) -> Machine:
        quirks = Quirks.standard() if self._config.standard else Quirks.legacy()
        machine = create_machine(
            MachineConfig(
                quirks=quirks,
                seed=self._config.seed,
                sound_cue=self._handle_sound_cue,
            )
        )
        self._load_rom(machine, rom_path)
        return machine

    def _load_rom(self, machine: Machine, rom_path: Path) -> None:
        try:
            load_rom_from_path(rom_path, machine)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except (RomFormatError, MemoryError) as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

    def _handle_key_event(self, name: str, *, pressed: bool) -> None:
        machine = self._machine
        if machine is None:
            return
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            machine.keypad.press_name(name)
        else:
            machine.keypad.release_name(name)

    def _handle_sound_cue(self) -> None:
        self._cue_count += 1
        if debug_enabled("audio"):
            debug_log("audio", "cue count=%d", self._cue_count)
        if self._beeper is not None:
            self._beeper.cue()

    def _step_frame(self, machine: Machine) -> None:
        cpu = machine.cpu
        trace = self._trace_recorder

        try:
            for _ in range(self._config.ticks_per_frame):
                if trace is None:
                    cpu.step()
                    continue
                state_before = cpu.state.clone()
                word = cpu.peek()
                instruction = cpu.step()
                trace.record_step(
                    state_before,
                    word,
                    depth=cpu.stack.depth,
                    delay=machine.timers.delay,
                    sound=machine.timers.sound,
                    waiting=cpu.waiting_for_key,
                    mnemonic=instruction.mnemonic,
                )
        except (CPUError, MemoryError) as exc:
            self._running = False
            if trace is not None:
                trace.dump("trace", limit=32)
            raise RuntimeError(f"Emulation stopped: {exc}") from exc

        machine.tick_timers()

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        print("\n=== CHIP-8 Debug Menu ===")
        print("Enter command: [c]pu, [m]em, [d]isplay, [t]race, [r]eset, [q]uit, [Enter] resume")

        paused = True
        while paused and self._running:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command == "" or command in {"resume"}:
                paused = False
            elif command in {"c", "cpu"}:
                self._dump_cpu(machine)
            elif command in {"d", "display"}:
                self._dump_display(machine)
            elif command in {"t", "trace"}:
                self._dump_trace()
            elif command in {"r", "reset"}:
                self._reset_machine(machine)
            elif command.startswith("m"):
                args = command[1:].strip()
                self._dump_memory(machine, args if args else None)
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._running = False
                paused = False
            else:
                print("Commands: [Enter]=resume, [c]pu, [m]em, [d]isplay, [t]race, [r]eset, [q]uit")

        if self._pygame is not None:
            self._pygame.event.clear()

    def _reset_machine(self, machine: Machine) -> None:
        machine.reset()
        if self._config.rom_path is None:
            print("Machine reset.")
            return
        try:
            self._load_rom(machine, self._config.rom_path)
        except RuntimeError as exc:
            print(f"Reset failed: {exc}")
            print("Exiting emulator.")
            self._running = False
            return
        print("Machine reset and ROM reloaded.")

    def _dump_cpu(self, machine: Machine) -> None:
        cpu = machine.cpu
        state = cpu.state
        print(
            "CPU PC={:04X} I={:04X} SP={:X} DT={:02X} ST={:02X}".format(
                state.pc,
                state.i,
                cpu.stack.depth,
                machine.timers.delay,
                machine.timers.sound,
            )
        )
        print("V  " + " ".join(f"{index:X}:{value:02X}" for index, value in enumerate(state.v)))
        stack = " ".join(f"{address:03X}" for address in cpu.stack.snapshot())
        print(f"Stack: {stack or '-'}")
        try:
            print(f"Next: {disassemble(cpu.peek())}")
        except MemoryError:
            print("Next: <program counter outside memory>")

    def _dump_display(self, machine: Machine) -> None:
        for row, line in enumerate(machine.display.rows()):
            print(f"{row:02d}: {line}")

    def _dump_trace(self, limit: int = 64) -> None:
        if self._trace_recorder is None:
            print("Trace recorder is disabled. Set CHIP8_DEBUG=trace to enable it.")
            return
        lines = list(self._trace_recorder.format_entries(limit))
        if not lines:
            print("Trace buffer is empty.")
            return
        print("Last trace entries:")
        for line in lines:
            print(f"  {line}")

    def _dump_memory(self, machine: Machine, args: str | None = None) -> None:
        def parse_value(text: str, default: int) -> int:
            text = text.strip()
            if not text:
                return default
            lowered = text.lower()
            if lowered.startswith("0x"):
                return int(lowered, 16)
            if any(c in "abcdef" for c in lowered):
                return int(lowered, 16)
            return int(lowered, 10)

        if args:
            parts = args.split()
            try:
                start = parse_value(parts[0], 0)
                length = parse_value(parts[1], 0x80) if len(parts) > 1 else 0x80
            except (ValueError, IndexError):
                print("Usage: m [start_hex] [length]")
                return
        else:
            try:
                addr_input = input("Start address (hex) [200]: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("Cancelled.")
                return
            try:
                start = parse_value(addr_input or "0x200", 0x200)
            except ValueError:
                print(f"Invalid address '{addr_input}'.")
                return
            length = 0x80

        if length <= 0:
            print("Length must be positive.")
            return

        memory = machine.memory
        end = min(start + length, memory.length)
        for addr in range(start, end, 16):
            chunk = [memory.load8(addr + offset) for offset in range(16) if addr + offset < end]
            hex_part = " ".join(f"{value:02X}" for value in chunk)
            print(f"{addr:03X}: {hex_part}")
