"""Configuration objects and helpers for the jitter simulator.

This package knows how to load/save the YAML descriptor that captures one
parameter set (``simulator.yaml``): the tone frequency, the active jitter
distribution with its controls, and the sampling block. The resulting typed
dataclasses are imported by the pipeline and the CLI so both agree on
defaults and ranges.
"""

from ..errors import ConfigurationError
from .runtime import (
    PARAMETER_RANGES,
    ParameterRange,
    SimulatorConfig,
    config_from_mapping,
    load_config,
    save_config,
)
from .sampling import SamplingConfig

__all__ = [
    "ConfigurationError",
    "PARAMETER_RANGES",
    "ParameterRange",
    "SamplingConfig",
    "SimulatorConfig",
    "config_from_mapping",
    "load_config",
    "save_config",
]
