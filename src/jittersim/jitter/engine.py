"""Timing jitter as index perturbation with edge clamping."""

from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np
from numpy.typing import ArrayLike

from .policy import GaussianJitter, JitterPolicy, UniformJitter

logger = logging.getLogger(__name__)


def _generator(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


def _open_unit_draws(rng: np.random.Generator, count: int) -> np.ndarray:
    """Uniform draws on ``(0, 1)``; exact zeros are re-drawn."""
    draws = rng.random(count)
    zeros = draws == 0.0
    while np.any(zeros):
        draws[zeros] = rng.random(int(np.count_nonzero(zeros)))
        zeros = draws == 0.0
    return draws


def box_muller(rng: Optional[np.random.Generator] = None) -> float:
    """Return one standard-normal variate via the Box-Muller transform."""
    gen = _generator(rng)
    u = 0.0
    while u == 0.0:
        u = float(gen.random())
    v = 0.0
    while v == 0.0:
        v = float(gen.random())
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)


def standard_normal(count: int, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Vectorized Box-Muller: ``count`` independent standard-normal variates."""
    gen = _generator(rng)
    u = _open_unit_draws(gen, count)
    v = _open_unit_draws(gen, count)
    return np.sqrt(-2.0 * np.log(u)) * np.cos(2.0 * np.pi * v)


def draw_delays(
    policy: JitterPolicy,
    count: int,
    *,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Draw one signed integer delay per output sample.

    Parameters
    ----------
    policy:
        :class:`UniformJitter` or :class:`GaussianJitter`.
    count:
        Number of delays to draw (normally the waveform length).
    rng:
        Optional generator; a fresh unseeded one is used when omitted.

    Returns
    -------
    np.ndarray
        ``int64`` array of length ``count``.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")

    if isinstance(policy, UniformJitter):
        max_delay = policy.max_delay
        if max_delay == 0:
            return np.zeros(count, dtype=np.int64)
        span = 2 * max_delay + 1
        raw = np.floor(_generator(rng).random(count) * span) - max_delay
        return np.clip(raw, -max_delay, max_delay).astype(np.int64)

    if isinstance(policy, GaussianJitter):
        z = standard_normal(count, rng)
        # Halves round up, matching floor(x + 0.5)
        raw = np.floor(z * policy.std_dev + policy.mean + 0.5)
        bound = policy.max_abs_delay
        return np.clip(raw, -bound, bound).astype(np.int64)

    raise TypeError(f"Unsupported jitter policy: {type(policy).__name__}")


def apply_jitter(
    signal: ArrayLike,
    policy: JitterPolicy,
    *,
    rng: Optional[np.random.Generator] = None,
) -> np.ndarray:
    """
    Return a jittered copy of ``signal``.

    ``output[i] = signal[clip(i + delay_i, 0, n - 1)]``. Samples are only
    re-indexed, never interpolated, so every output value is an input value.
    ``UniformJitter(0)`` returns an exact copy without drawing any variates.
    """
    samples = np.asarray(signal, dtype=np.float64)
    if samples.ndim != 1:
        raise ValueError(f"signal must be 1-D, got shape {samples.shape}")
    if samples.size == 0:
        raise ValueError("signal must contain at least one sample")

    if isinstance(policy, UniformJitter) and policy.is_identity:
        return samples.copy()

    delays = draw_delays(policy, samples.size, rng=rng)
    indices = np.clip(np.arange(samples.size) + delays, 0, samples.size - 1)
    logger.debug(
        "Applied %s to %d samples (delay range %d..%d)",
        policy.label,
        samples.size,
        int(delays.min()),
        int(delays.max()),
    )
    return samples[indices]
