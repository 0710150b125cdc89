"""Exception types shared across the simulator."""

from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when a parameter falls outside the domain the pipeline accepts."""
