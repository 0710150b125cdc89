"""Generate → jitter → analyze, recomputed from scratch on every call."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from ..analysis.fft import analyze
from ..config.runtime import SimulatorConfig
from ..config.sampling import SamplingConfig
from ..jitter.engine import apply_jitter
from ..jitter.policy import JitterPolicy
from ..signal.generator import generate
from ..tools.debug import time_block

__all__ = ["PipelineResult", "compute_pipeline", "run_config"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """The two series handed to a renderer, plus the axes they live on."""

    time_domain: np.ndarray
    frequency_domain: np.ndarray
    sampling: SamplingConfig

    def time_axis(self) -> np.ndarray:
        return self.sampling.time_axis()

    def frequency_axis(self) -> np.ndarray:
        return self.sampling.frequency_axis()


def compute_pipeline(
    frequency_hz: float,
    jitter_policy: JitterPolicy,
    config: SamplingConfig | None = None,
    *,
    rng: Optional[np.random.Generator] = None,
) -> PipelineResult:
    """
    Run the full pipeline for one parameter set.

    Parameters
    ----------
    frequency_hz:
        Tone frequency in Hz.
    jitter_policy:
        :class:`~jittersim.jitter.UniformJitter` or
        :class:`~jittersim.jitter.GaussianJitter`.
    config:
        Sampling configuration (default: 1024 samples at 1024 Hz).
    rng:
        Optional generator for the jitter draws.

    Returns
    -------
    PipelineResult
        Jittered waveform and its magnitude spectrum, both freshly allocated.
    """
    sampling = config or SamplingConfig()
    with time_block(f"pipeline f={frequency_hz} Hz {jitter_policy.label}"):
        clean = generate(frequency_hz, sampling)
        jittered = apply_jitter(clean, jitter_policy, rng=rng)
        spectrum = analyze(jittered, sampling)
    logger.debug(
        "Pipeline done: f=%s Hz, %s, %d samples -> %d bins",
        frequency_hz,
        jitter_policy.label,
        jittered.size,
        spectrum.size,
    )
    return PipelineResult(
        time_domain=jittered,
        frequency_domain=spectrum,
        sampling=sampling,
    )


def run_config(
    config: SimulatorConfig,
    *,
    rng: Optional[np.random.Generator] = None,
) -> PipelineResult:
    """Validate ``config`` and run :func:`compute_pipeline` with it."""
    config.validate()
    return compute_pipeline(
        config.frequency_hz,
        config.jitter_policy(),
        config.sampling,
        rng=rng,
    )
