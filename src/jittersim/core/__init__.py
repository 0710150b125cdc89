"""Pipeline wiring: chains generation, jitter and spectrum analysis."""

from .pipeline import PipelineResult, compute_pipeline, run_config

__all__ = ["PipelineResult", "compute_pipeline", "run_config"]
