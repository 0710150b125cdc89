"""Jitter policies and the engine that applies them to a waveform.

Jitter is modelled as a random displacement of each sample's read index,
clamped at both ends of the buffer, so the output only ever repeats or
reorders input values.
"""

from .engine import apply_jitter, box_muller, draw_delays, standard_normal
from .policy import (
    NO_JITTER,
    SIGMA_CLAMP,
    GaussianJitter,
    JitterPolicy,
    UniformJitter,
)

__all__ = [
    "GaussianJitter",
    "JitterPolicy",
    "NO_JITTER",
    "SIGMA_CLAMP",
    "UniformJitter",
    "apply_jitter",
    "box_muller",
    "draw_delays",
    "standard_normal",
]
