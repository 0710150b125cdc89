"""Clean waveform synthesis."""

from .generator import generate

__all__ = ["generate"]
