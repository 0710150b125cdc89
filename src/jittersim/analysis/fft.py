"""FFT helpers."""

from __future__ import annotations

import logging
from typing import Tuple

import numpy as np
from numpy.typing import ArrayLike

from ..config.sampling import SamplingConfig

logger = logging.getLogger(__name__)


def compute_fft(
    signal: ArrayLike,
    sample_rate_hz: float,
    *,
    axis: int = -1,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Compute frequency bins and magnitudes for a real-valued signal.

    Parameters
    ----------
    signal:
        Array-like input signal. Can be 1-D or ND.
    sample_rate_hz:
        Sampling rate in Hz. Must be > 0.
    axis:
        Axis along which to compute the FFT (default: last axis).

    Returns
    -------
    freqs : np.ndarray
        1-D array of frequency bins in Hz, up to and including Nyquist.
    magnitude : np.ndarray
        Unnormalized magnitude of the one-sided FFT along the given axis.
    """
    if sample_rate_hz <= 0:
        raise ValueError(f"sample_rate_hz must be > 0, got {sample_rate_hz}")

    arr = np.asarray(signal, dtype=float)
    if arr.size == 0:
        raise ValueError("signal must contain at least one sample")

    # rFFT returns the non-redundant half of the conjugate-symmetric spectrum
    fft_result = np.fft.rfft(arr, axis=axis)
    n_samples = arr.shape[axis]
    freqs = np.fft.rfftfreq(n_samples, d=1.0 / float(sample_rate_hz))
    magnitude = np.abs(fft_result)

    return freqs, magnitude


def frequency_bins(config: SamplingConfig) -> np.ndarray:
    """Centre frequency of each bin returned by :func:`analyze`."""
    return config.frequency_axis()


def analyze(signal: ArrayLike, config: SamplingConfig | None = None) -> np.ndarray:
    """
    Reduce a waveform to its half-spectrum magnitudes.

    Bins ``0 .. N/2 - 1`` are kept; the Nyquist bin and the mirrored upper
    half are dropped. Magnitudes are raw ``sqrt(re² + im²)`` values with no
    ``1/N`` scaling.
    """
    cfg = config or SamplingConfig()
    arr = np.asarray(signal, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {arr.shape}")
    if arr.size != cfg.sample_count:
        raise ValueError(
            f"signal has {arr.size} samples, sampling config expects {cfg.sample_count}"
        )

    _freqs, magnitude = compute_fft(arr, cfg.sample_rate_hz)
    spectrum = magnitude[: cfg.spectrum_length].copy()
    logger.debug(
        "Spectrum of %d samples: peak bin %d (%.3f)",
        arr.size,
        int(np.argmax(spectrum)) if spectrum.size else -1,
        float(spectrum.max()) if spectrum.size else 0.0,
    )
    return spectrum
