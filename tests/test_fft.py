from __future__ import annotations

import numpy as np
import pytest

from jittersim.analysis import (
    analyze,
    compute_fft,
    dominant_bin,
    dominant_frequency,
    frequency_bins,
    peak_to_peak,
    rms,
    spectral_energy,
)
from jittersim.config.sampling import SamplingConfig
from jittersim.signal import generate


@pytest.mark.parametrize("k", [1, 10, 64, 200])
def test_bin_aligned_sine_has_single_peak(k: int) -> None:
    cfg = SamplingConfig()
    spectrum = analyze(generate(k * cfg.bin_resolution_hz, cfg), cfg)

    assert spectrum.shape == (512,)
    assert dominant_bin(spectrum) == k
    # Unnormalized: a unit sine over N samples peaks at N/2
    assert spectrum[k] == pytest.approx(cfg.sample_count / 2, rel=1e-9)
    others = np.delete(spectrum, k)
    assert np.max(others) < 1e-6


def test_one_hz_peaks_at_bin_one_not_dc() -> None:
    spectrum = analyze(generate(1))
    assert dominant_bin(spectrum) == 1
    assert spectrum[0] < 1e-6


def test_magnitudes_are_non_negative() -> None:
    noise = np.random.default_rng(0).standard_normal(1024)
    spectrum = analyze(noise)
    assert np.all(spectrum >= 0.0)


def test_analyze_matches_full_complex_fft() -> None:
    signal = np.random.default_rng(1).standard_normal(1024)
    full = np.fft.fft(signal.astype(complex))
    expected = np.sqrt(full.real[:512] ** 2 + full.imag[:512] ** 2)
    np.testing.assert_allclose(analyze(signal), expected, rtol=1e-9, atol=1e-9)


def test_analyze_rejects_length_mismatch() -> None:
    with pytest.raises(ValueError):
        analyze(np.zeros(1000), SamplingConfig())
    with pytest.raises(ValueError):
        analyze(np.zeros((2, 512)), SamplingConfig())


def test_compute_fft_includes_nyquist() -> None:
    freqs, magnitude = compute_fft(np.ones(1024), 1024)
    assert freqs.size == magnitude.size == 513
    assert freqs[-1] == 512.0
    assert magnitude[0] == pytest.approx(1024.0)


def test_compute_fft_validates_inputs() -> None:
    with pytest.raises(ValueError):
        compute_fft(np.ones(8), 0)
    with pytest.raises(ValueError):
        compute_fft([], 100)


def test_frequency_bins_follow_sampling() -> None:
    cfg = SamplingConfig(sample_rate_hz=2000, sample_count=1000)
    bins = frequency_bins(cfg)
    assert bins.size == 500
    assert bins[3] == pytest.approx(6.0)


def test_features() -> None:
    wave = generate(4)
    assert rms(wave) == pytest.approx(1 / np.sqrt(2), rel=1e-6)
    assert peak_to_peak([1.0, -2.0, 0.5]) == pytest.approx(3.0)
    assert spectral_energy([3.0, 4.0]) == pytest.approx(25.0)
    spectrum = analyze(wave)
    assert dominant_frequency(spectrum, SamplingConfig()) == pytest.approx(4.0)
    with pytest.raises(ValueError):
        rms([])
