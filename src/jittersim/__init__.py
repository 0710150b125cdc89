"""Signal jitter simulator: sine synthesis, timing jitter and FFT magnitudes.

The numeric core lives in :mod:`jittersim.signal`, :mod:`jittersim.jitter`
and :mod:`jittersim.analysis`; :func:`compute_pipeline` chains them for a
single parameter set.
"""

from .core.pipeline import PipelineResult, compute_pipeline
from .errors import ConfigurationError

__all__ = ["ConfigurationError", "PipelineResult", "compute_pipeline"]
