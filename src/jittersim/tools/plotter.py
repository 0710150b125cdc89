#!/usr/bin/env python3
"""
Matplotlib front-end for the jitter simulator.

Renders the two pipeline outputs side by side:

  * the jittered time-domain signal as a line plot (sample vs. amplitude), and
  * the magnitude spectrum as a bar chart (frequency in Hz vs. magnitude).

Parameters come from an optional YAML file (``--config``), overridden by the
individual command-line flags. ``--interactive`` adds sliders and a
distribution selector and recomputes the whole pipeline on every change;
``--save`` writes the figure to disk instead of opening a window.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.widgets import RadioButtons, Slider

from ..analysis.features import dominant_frequency, rms, spectral_energy
from ..config.runtime import (
    DEFAULT_CONFIG_PATH,
    DISTRIBUTIONS,
    GAUSSIAN,
    PARAMETER_RANGES,
    SimulatorConfig,
    load_config,
    normalize_distribution,
)
from ..core.pipeline import PipelineResult, run_config
from ..errors import ConfigurationError

logger = logging.getLogger(__name__)

TIME_COLOR = (75 / 255, 192 / 255, 192 / 255, 1.0)
SPECTRUM_COLOR = (153 / 255, 102 / 255, 255 / 255, 0.6)
_RADIO_LABELS = ("Uniform", "Gaussian")


# --------------------------------------------------------------------------- # helpers
def describe(config: SimulatorConfig) -> str:
    """Short human-readable label for titles and log lines."""
    return f"{config.frequency_hz:g} Hz, {config.jitter_policy().label}"


def summarize(result: PipelineResult) -> dict[str, float]:
    """Scalar figures of merit for one pipeline run."""
    return {
        "dominant_frequency_hz": float(
            dominant_frequency(result.frequency_domain, result.sampling)
        ),
        "spectral_energy": float(spectral_energy(result.frequency_domain)),
        "rms": float(rms(result.time_domain)),
    }


def _style_axes(ax_time, ax_freq) -> None:
    ax_time.set_xlabel("Sample")
    ax_time.set_ylabel("Amplitude")
    ax_time.legend(loc="upper right")
    ax_freq.set_xlabel("Frequency (Hz)")
    ax_freq.set_ylabel("Magnitude")
    ax_freq.legend(loc="upper right")


def _spectrum_ylim(spectrum: np.ndarray) -> float:
    peak = float(np.max(spectrum)) if spectrum.size else 0.0
    return peak * 1.05 if peak > 0 else 1.0


def build_figure(result: PipelineResult, title: str = ""):
    """Create figure/axes/artists and return (fig, axes, line, bars)."""
    fig, (ax_time, ax_freq) = plt.subplots(1, 2, figsize=(12, 4.5))

    samples = np.arange(result.time_domain.size)
    (line,) = ax_time.plot(
        samples, result.time_domain, color=TIME_COLOR, label="Time Domain Signal"
    )
    ax_time.set_ylim(-1.1, 1.1)

    bars = ax_freq.bar(
        result.frequency_axis(),
        result.frequency_domain,
        width=0.8 * result.sampling.bin_resolution_hz,
        color=SPECTRUM_COLOR,
        label="FFT Magnitude",
    )
    ax_freq.set_ylim(0.0, _spectrum_ylim(result.frequency_domain))

    _style_axes(ax_time, ax_freq)
    if title:
        fig.suptitle(title)
    fig.tight_layout()
    return fig, (ax_time, ax_freq), line, bars


def update_artists(fig, ax_freq, line, bars, result: PipelineResult) -> None:
    """Push a fresh result into existing artists."""
    line.set_ydata(result.time_domain)
    for bar, height in zip(bars, result.frequency_domain):
        bar.set_height(float(height))
    ax_freq.set_ylim(0.0, _spectrum_ylim(result.frequency_domain))
    fig.canvas.draw_idle()


# --------------------------------------------------------------------------- # plotting modes
def plot_static(
    config: SimulatorConfig,
    rng: Optional[np.random.Generator] = None,
    save_path: Path | None = None,
):
    """Render one run; save it when ``save_path`` is given, else show it."""
    result = run_config(config, rng=rng)
    fig, _axes, _line, _bars = build_figure(result, title=describe(config))
    if save_path is not None:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(save_path)
        logger.info("Saved figure to %s", save_path)
        plt.close(fig)
        return result
    fig.canvas.manager.set_window_title("Signal Jitter Simulator with FFT")
    plt.show()
    return result


def _add_slider(fig, rect, name: str, label: str, value: float) -> Slider:
    rng = PARAMETER_RANGES[name]
    ax = fig.add_axes(rect)
    return Slider(
        ax,
        label,
        rng.minimum,
        rng.maximum,
        valinit=value,
        valstep=rng.step,
    )


def build_interactive(
    config: SimulatorConfig,
    rng: Optional[np.random.Generator] = None,
):
    """
    Build the interactive figure without showing it.

    Returns the figure and a mapping of its widgets; every widget change
    rebuilds a :class:`SimulatorConfig` and reruns the full pipeline.
    """
    result = run_config(config, rng=rng)
    fig, (_ax_time, ax_freq), line, bars = build_figure(result, title=describe(config))
    fig.set_size_inches(12, 7)
    fig.subplots_adjust(bottom=0.38, top=0.9)

    widgets: dict[str, Any] = {
        "frequency_hz": _add_slider(
            fig, [0.12, 0.25, 0.5, 0.03], "frequency_hz", "Frequency (Hz)", config.frequency_hz
        ),
        "max_delay": _add_slider(
            fig, [0.12, 0.19, 0.5, 0.03], "max_delay", "Jitter delay", config.max_delay
        ),
        "mean": _add_slider(
            fig, [0.12, 0.13, 0.5, 0.03], "mean", "Jitter mean", config.mean
        ),
        "std_dev": _add_slider(
            fig, [0.12, 0.07, 0.5, 0.03], "std_dev", "Jitter std dev", config.std_dev
        ),
    }
    radio_ax = fig.add_axes([0.72, 0.07, 0.15, 0.21])
    radio_ax.set_title("Jitter Distribution", fontsize=9)
    active = 1 if normalize_distribution(config.distribution) == GAUSSIAN else 0
    widgets["distribution"] = RadioButtons(radio_ax, _RADIO_LABELS, active=active)

    def _current_config() -> SimulatorConfig:
        return replace(
            config,
            frequency_hz=float(widgets["frequency_hz"].val),
            distribution=normalize_distribution(widgets["distribution"].value_selected),
            max_delay=int(widgets["max_delay"].val),
            mean=float(widgets["mean"].val),
            std_dev=float(widgets["std_dev"].val),
        )

    def _update(_value=None) -> None:
        current = _current_config()
        try:
            fresh = run_config(current, rng=rng)
        except ConfigurationError as exc:
            logger.warning("Rejected parameters: %s", exc)
            return
        update_artists(fig, ax_freq, line, bars, fresh)
        fig.suptitle(describe(current))

    for name in ("frequency_hz", "max_delay", "mean", "std_dev"):
        widgets[name].on_changed(_update)
    widgets["distribution"].on_clicked(_update)

    # Widgets stop responding once garbage-collected
    fig._jittersim_widgets = widgets  # type: ignore[attr-defined]
    return fig, widgets


def plot_interactive(
    config: SimulatorConfig,
    rng: Optional[np.random.Generator] = None,
) -> None:
    fig, _widgets = build_interactive(config, rng=rng)
    fig.canvas.manager.set_window_title("Signal Jitter Simulator with FFT")
    plt.show()


# --------------------------------------------------------------------------- # CLI
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Simulate sampling jitter on a sine wave and plot its FFT magnitude."
    )
    parser.add_argument(
        "-c",
        "--config",
        type=str,
        help="Path to a simulator YAML file (default: built-in defaults).",
    )
    parser.add_argument(
        "-f",
        "--frequency",
        type=float,
        help="Tone frequency in Hz, 1..100 (default: 5).",
    )
    parser.add_argument(
        "-d",
        "--distribution",
        type=str.lower,
        choices=list(DISTRIBUTIONS),
        help="Jitter distribution (default: uniform).",
    )
    parser.add_argument(
        "--max-delay",
        type=int,
        help="Uniform jitter: maximum delay in samples, 0..50.",
    )
    parser.add_argument(
        "--mean",
        type=float,
        help="Gaussian jitter: mean delay in samples, -10..10.",
    )
    parser.add_argument(
        "--std-dev",
        type=float,
        help="Gaussian jitter: standard deviation in samples, 1..20.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the jitter random draws (default: unseeded).",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument(
        "-o",
        "--save",
        type=str,
        help="Write the figure to this image file instead of opening a window.",
    )
    output.add_argument(
        "--summary",
        action="store_true",
        help="Print dominant frequency, spectral energy and RMS, then exit.",
    )
    output.add_argument(
        "-i",
        "--interactive",
        action="store_true",
        help="Open a window with sliders that recompute on every change.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug).",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> SimulatorConfig:
    """Load ``--config`` (if any) and apply per-flag overrides."""
    config = load_config(args.config or DEFAULT_CONFIG_PATH)
    overrides = {
        "frequency_hz": args.frequency,
        "distribution": args.distribution,
        "max_delay": args.max_delay,
        "mean": args.mean,
        "std_dev": args.std_dev,
    }
    changes = {key: value for key, value in overrides.items() if value is not None}
    return replace(config, **changes).validate()


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
    except ConfigurationError as exc:
        parser.error(str(exc))

    rng = np.random.default_rng(args.seed) if args.seed is not None else None
    logger.info("Running pipeline: %s", describe(config))

    if args.summary:
        result = run_config(config, rng=rng)
        for key, value in summarize(result).items():
            print(f"{key}: {value:.6g}")
        return 0

    try:
        if args.interactive:
            plot_interactive(config, rng=rng)
        else:
            save_path = Path(args.save).expanduser().resolve() if args.save else None
            plot_static(config, rng=rng, save_path=save_path)
    except KeyboardInterrupt:
        # Allow clean exit on Ctrl+C
        return 0

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
