"""Short square-wave tone played when the sound timer expires."""

from __future__ import annotations

from array import array
import math
from typing import Optional


class CueBeeper:
    """Play a one-shot tone through pygame's mixer on each sound cue."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = 440.0,
        duration_ms: int = 120,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating CueBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = max(1.0, frequency)
        self._duration_ms = max(1, duration_ms)
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional[pygame.mixer.Channel] = None
        self._sound: Optional[pygame.mixer.Sound] = self._build_sound()

    # ------------------------------------------------------------------
    # Public API

    def cue(self) -> None:
        """Start the tone; a cue arriving while it plays restarts it."""

        if self._sound is None:
            return
        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel
        channel.play(self._sound)
        channel.set_volume(self._volume)

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        if self._channel is not None:
            self._channel.stop()
        self._channel = None
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _build_sound(self) -> Optional["pygame.mixer.Sound"]:
        total_samples = max(1, self._sample_rate * self._duration_ms // 1000)
        half_period = max(1, int(round(self._sample_rate / (2.0 * self._frequency))))
        amplitude = 12_000

        buffer = array("h")
        for index in range(total_samples):
            buffer.append(amplitude if (index // half_period) % 2 == 0 else -amplitude)

        # Ramp the last few milliseconds to avoid a click at the cut-off.
        fade = min(total_samples, self._sample_rate // 200)
        for offset in range(fade):
            position = total_samples - fade + offset
            buffer[position] = int(buffer[position] * math.cos(0.5 * math.pi * offset / fade))

        try:
            sound = self._pygame.mixer.Sound(buffer=buffer.tobytes())
        except self._pygame.error:  # pragma: no cover - pygame error path
            return None
        return sound


__all__ = ["CueBeeper"]
