"""Sampling configuration shared by every pipeline stage."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from ..errors import ConfigurationError

DEFAULT_SAMPLE_RATE_HZ = 1024
DEFAULT_SAMPLE_COUNT = 1024


def _positive_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    try:
        as_float = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(
            f"{name} must be a positive integer, got {value!r}"
        ) from None
    if not math.isfinite(as_float) or as_float != int(as_float) or as_float <= 0:
        raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
    return int(as_float)


@dataclass(frozen=True)
class SamplingConfig:
    """
    Single source of truth for the time and frequency axes.

    sample_rate_hz: samples per second.
    sample_count: number of samples in one waveform.
    """

    sample_rate_hz: int = DEFAULT_SAMPLE_RATE_HZ
    sample_count: int = DEFAULT_SAMPLE_COUNT

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "sample_rate_hz", _positive_int("sample_rate_hz", self.sample_rate_hz)
        )
        object.__setattr__(
            self, "sample_count", _positive_int("sample_count", self.sample_count)
        )

    @property
    def duration_s(self) -> float:
        """Length of one waveform in seconds."""
        return self.sample_count / float(self.sample_rate_hz)

    @property
    def nyquist_hz(self) -> float:
        return 0.5 * float(self.sample_rate_hz)

    @property
    def bin_resolution_hz(self) -> float:
        """Spacing between adjacent frequency bins."""
        return float(self.sample_rate_hz) / float(self.sample_count)

    @property
    def spectrum_length(self) -> int:
        """Number of magnitude bins reported by the analyzer."""
        return self.sample_count // 2

    def time_axis(self) -> np.ndarray:
        """Return ``t_i = i / sample_rate_hz`` for every sample index."""
        return np.arange(self.sample_count, dtype=np.float64) / float(self.sample_rate_hz)

    def frequency_axis(self) -> np.ndarray:
        """Return ``f_i = i * sample_rate_hz / sample_count`` for each reported bin."""
        return np.arange(self.spectrum_length, dtype=np.float64) * self.bin_resolution_hz

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> "SamplingConfig":
        """
        Construct a SamplingConfig from a mapping such as simulator.yaml.

        Supported shape::

            sampling:
              sample_rate_hz: 1024
              sample_count: 1024

        Missing keys fall back to the defaults; invalid values raise
        :class:`ConfigurationError`.
        """
        payload: Mapping[str, Any] = mapping or {}
        block = payload.get("sampling") if isinstance(payload, Mapping) else None
        if block is None:
            return cls()
        if not isinstance(block, Mapping):
            raise ConfigurationError(
                f"'sampling' must be a mapping, got {type(block).__name__}"
            )
        return cls(
            sample_rate_hz=block.get("sample_rate_hz", DEFAULT_SAMPLE_RATE_HZ),
            sample_count=block.get("sample_count", DEFAULT_SAMPLE_COUNT),
        )

    def to_mapping(self) -> dict:
        """Serialize back into a mapping suitable for YAML."""
        return {
            "sampling": {
                "sample_rate_hz": int(self.sample_rate_hz),
                "sample_count": int(self.sample_count),
            }
        }
