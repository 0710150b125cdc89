"""Spectrum analysis utilities (FFT magnitudes and scalar features).

These modules operate on plain NumPy arrays and stay free of plotting and
I/O dependencies so they can be reused from the CLI, the tests, or an
embedding UI alike.
"""

from .features import dominant_bin, dominant_frequency, peak_to_peak, rms, spectral_energy
from .fft import analyze, compute_fft, frequency_bins

__all__ = [
    "analyze",
    "compute_fft",
    "dominant_bin",
    "dominant_frequency",
    "frequency_bins",
    "peak_to_peak",
    "rms",
    "spectral_energy",
]
