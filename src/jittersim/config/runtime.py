"""Runtime configuration: the parameter surface that drives the pipeline."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, MutableMapping

import yaml

from ..errors import ConfigurationError
from ..jitter.policy import GaussianJitter, JitterPolicy, UniformJitter
from .sampling import SamplingConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "simulator.yaml"

UNIFORM = "uniform"
GAUSSIAN = "gaussian"
DISTRIBUTIONS = (UNIFORM, GAUSSIAN)

_DISTRIBUTION_ALIASES = {
    "uniform": UNIFORM,
    "flat": UNIFORM,
    "u": UNIFORM,
    "gaussian": GAUSSIAN,
    "normal": GAUSSIAN,
    "gauss": GAUSSIAN,
    "g": GAUSSIAN,
}


@dataclass(frozen=True)
class ParameterRange:
    """Inclusive bounds and step of one user-facing control."""

    minimum: float
    maximum: float
    step: float = 1.0
    unit: str = ""

    def contains(self, value: float) -> bool:
        """Return True when ``value`` is within bounds and on a step."""
        try:
            v = float(value)
        except (TypeError, ValueError):
            return False
        if not math.isfinite(v) or v < self.minimum or v > self.maximum:
            return False
        steps = (v - self.minimum) / self.step
        return math.isclose(steps, round(steps), abs_tol=1e-9)

    def describe(self) -> str:
        unit = f" {self.unit}" if self.unit else ""
        return f"[{self.minimum:g}, {self.maximum:g}] step {self.step:g}{unit}"


PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "frequency_hz": ParameterRange(1, 100, 1, "Hz"),
    "max_delay": ParameterRange(0, 50, 1, "samples"),
    "mean": ParameterRange(-10, 10, 1, "samples"),
    "std_dev": ParameterRange(1, 20, 1, "samples"),
}


def normalize_distribution(value: Any) -> str:
    """Map user spellings (``Uniform``, ``normal``, ...) onto a known key."""
    key = str(value or "").strip().lower()
    try:
        return _DISTRIBUTION_ALIASES[key]
    except KeyError:
        raise ConfigurationError(
            f"Unknown jitter distribution {value!r}; expected one of {DISTRIBUTIONS}"
        ) from None


@dataclass
class SimulatorConfig:
    """
    One complete parameter set for a pipeline run.

    The defaults match the controls' initial positions: a 5 Hz tone with
    uniform jitter switched off.
    """

    frequency_hz: float = 5.0
    distribution: str = UNIFORM
    max_delay: int = 0
    mean: float = 0.0
    std_dev: float = 5.0
    sampling: SamplingConfig = field(default_factory=SamplingConfig)

    def validate(self) -> "SimulatorConfig":
        """Raise :class:`ConfigurationError` if any control is out of range."""
        self.distribution = normalize_distribution(self.distribution)
        problems = []
        for name, rng in PARAMETER_RANGES.items():
            value = getattr(self, name)
            if not rng.contains(value):
                problems.append(f"{name}={value!r} outside {rng.describe()}")
        if problems:
            raise ConfigurationError("Invalid simulator configuration: " + "; ".join(problems))
        return self

    def jitter_policy(self) -> JitterPolicy:
        """Build the policy for the active distribution."""
        distribution = normalize_distribution(self.distribution)
        if distribution == GAUSSIAN:
            return GaussianJitter(mean=self.mean, std_dev=self.std_dev)
        return UniformJitter(max_delay=self.max_delay)

    def to_mapping(self) -> dict:
        """Serialize into the ``simulator.yaml`` shape."""
        data = {
            "simulator": {
                "frequency_hz": float(self.frequency_hz),
                "jitter": {
                    "distribution": normalize_distribution(self.distribution),
                    "max_delay": int(self.max_delay),
                    "mean": float(self.mean),
                    "std_dev": float(self.std_dev),
                },
            }
        }
        data.update(self.sampling.to_mapping())
        return data


def _recognized_fields() -> set[str]:
    """Return the scalar field names accepted by :class:`SimulatorConfig`."""
    return {f.name for f in fields(SimulatorConfig)} - {"sampling"}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten the ``simulator`` and ``jitter`` nesting into one mapping."""
    merged: MutableMapping[str, Any] = {}
    for key, value in data.items():
        if key == "simulator" and isinstance(value, Mapping):
            merged.update(_normalize_mapping(value))
        elif key == "jitter" and isinstance(value, Mapping):
            merged.update(value)
        else:
            merged[key] = value
    return merged


def config_from_mapping(data: Mapping[str, Any] | None) -> SimulatorConfig:
    """Build a validated :class:`SimulatorConfig` from ``data``."""
    if not data:
        return SimulatorConfig()
    sampling = SamplingConfig.from_mapping(data)
    normalized = _normalize_mapping(data)
    normalized.pop("sampling", None)
    known = _recognized_fields()
    unknown = sorted(str(key) for key in normalized.keys() - known)
    if unknown:
        logger.warning("Ignoring unknown simulator config keys: %s", ", ".join(unknown))
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return SimulatorConfig(sampling=sampling, **payload).validate()


def load_config(path: str | Path | None) -> SimulatorConfig:
    """
    Load configuration from ``path``.

    ``None`` or a missing file falls back to default :class:`SimulatorConfig`.
    """
    if path is None:
        return SimulatorConfig()
    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        logger.debug("Config file %s not found; using defaults", cfg_path)
        return SimulatorConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Expected mapping in {cfg_path}, got {type(raw).__name__}"
        )
    return config_from_mapping(raw)


def save_config(path: str | Path, config: SimulatorConfig) -> None:
    """Write ``config`` as YAML, creating parent directories if needed."""
    cfg_path = Path(path).expanduser()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    with cfg_path.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(
            config.to_mapping(),
            fh,
            default_flow_style=False,
            sort_keys=False,
        )


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DISTRIBUTIONS",
    "GAUSSIAN",
    "PARAMETER_RANGES",
    "ParameterRange",
    "SimulatorConfig",
    "UNIFORM",
    "config_from_mapping",
    "load_config",
    "normalize_distribution",
    "save_config",
]
