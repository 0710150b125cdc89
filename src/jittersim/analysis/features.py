"""Feature extraction helpers."""

from __future__ import annotations

from typing import Union

import numpy as np
from numpy.typing import ArrayLike

from ..config.sampling import SamplingConfig

Number = Union[float, np.floating]


def _to_1d_array(signal: ArrayLike) -> np.ndarray:
    """Convert input to a 1D float64 numpy array."""
    arr = np.asarray(signal, dtype=float)
    if arr.size == 0:
        raise ValueError("signal must contain at least one sample")
    if arr.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {arr.shape}")
    return arr


def rms(signal: ArrayLike) -> Number:
    """
    Compute root-mean-square (RMS) value of a 1-D signal.

    Parameters
    ----------
    signal:
        1-D array-like of samples.

    Returns
    -------
    float
        RMS value of the signal.
    """
    arr = _to_1d_array(signal)
    return float(np.sqrt(np.mean(np.square(arr))))


def peak_to_peak(signal: ArrayLike) -> Number:
    """Compute peak-to-peak value (max - min) of a 1-D signal."""
    arr = _to_1d_array(signal)
    return float(np.max(arr) - np.min(arr))


def spectral_energy(magnitudes: ArrayLike) -> Number:
    """Sum of squared magnitudes."""
    arr = _to_1d_array(magnitudes)
    return float(np.sum(np.square(arr)))


def dominant_bin(magnitudes: ArrayLike) -> int:
    """Index of the largest magnitude (first one on ties)."""
    arr = _to_1d_array(magnitudes)
    return int(np.argmax(arr))


def dominant_frequency(magnitudes: ArrayLike, config: SamplingConfig) -> Number:
    """Frequency in Hz of :func:`dominant_bin`."""
    return dominant_bin(magnitudes) * config.bin_resolution_hz
