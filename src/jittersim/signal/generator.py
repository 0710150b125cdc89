"""Sine-wave generator."""

from __future__ import annotations

import math

import numpy as np

from ..config.sampling import SamplingConfig
from ..errors import ConfigurationError


def generate(frequency_hz: float, config: SamplingConfig | None = None) -> np.ndarray:
    """
    Synthesize ``sin(2π · frequency_hz · i / sample_rate_hz)`` for every index.

    Parameters
    ----------
    frequency_hz:
        Tone frequency in Hz. Must be finite and > 0.
    config:
        Sampling configuration (default: 1024 samples at 1024 Hz).

    Returns
    -------
    np.ndarray
        Freshly allocated float64 array of ``config.sample_count`` samples.
    """
    cfg = config or SamplingConfig()
    try:
        freq = float(frequency_hz)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"frequency_hz must be a number, got {frequency_hz!r}"
        ) from None
    if not math.isfinite(freq) or freq <= 0.0:
        raise ConfigurationError(f"frequency_hz must be > 0, got {frequency_hz!r}")

    return np.sin(2.0 * np.pi * freq * cfg.time_axis())
