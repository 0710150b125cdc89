"""Jitter policies: which distribution the per-sample delay is drawn from."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Union

from ..errors import ConfigurationError

#: Gaussian delays are clamped to this many standard deviations.
SIGMA_CLAMP = 3.0


@dataclass(frozen=True)
class UniformJitter:
    """Integer delay drawn uniformly from ``[-max_delay, +max_delay]``."""

    max_delay: int = 0

    def __post_init__(self) -> None:
        value = self.max_delay
        try:
            as_float = float(value)
        except (TypeError, ValueError):
            as_float = math.nan
        if (
            isinstance(value, bool)
            or not math.isfinite(as_float)
            or not as_float.is_integer()
            or as_float < 0
        ):
            raise ConfigurationError(
                f"max_delay must be a non-negative integer, got {value!r}"
            )
        object.__setattr__(self, "max_delay", int(as_float))

    @property
    def is_identity(self) -> bool:
        return self.max_delay == 0

    @property
    def label(self) -> str:
        return f"Uniform(max_delay={self.max_delay})"


@dataclass(frozen=True)
class GaussianJitter:
    """Rounded normal delay, clamped to ``±3·std_dev``."""

    mean: float = 0.0
    std_dev: float = 5.0

    def __post_init__(self) -> None:
        try:
            mean = float(self.mean)
            std_dev = float(self.std_dev)
        except (TypeError, ValueError):
            raise ConfigurationError(
                f"mean/std_dev must be numbers, got {self.mean!r}/{self.std_dev!r}"
            ) from None
        if not math.isfinite(mean):
            raise ConfigurationError(f"mean must be finite, got {self.mean!r}")
        if not math.isfinite(std_dev) or std_dev <= 0.0:
            raise ConfigurationError(
                f"std_dev must be a positive finite number, got {self.std_dev!r}"
            )
        object.__setattr__(self, "mean", mean)
        object.__setattr__(self, "std_dev", std_dev)

    @property
    def max_abs_delay(self) -> int:
        """Largest delay magnitude allowed after the three-sigma clamp."""
        return int(math.floor(SIGMA_CLAMP * self.std_dev))

    @property
    def label(self) -> str:
        return f"Gaussian(mean={self.mean:g}, std_dev={self.std_dev:g})"


JitterPolicy = Union[UniformJitter, GaussianJitter]

NO_JITTER = UniformJitter(max_delay=0)

__all__ = [
    "GaussianJitter",
    "JitterPolicy",
    "NO_JITTER",
    "SIGMA_CLAMP",
    "UniformJitter",
]
