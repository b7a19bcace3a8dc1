"""Audio output for the CHIP-8 sound cue."""

from .beeper import CueBeeper

__all__ = ["CueBeeper"]
