from __future__ import annotations

import math
from collections import deque

import numpy as np
import pytest

from jittersim.errors import ConfigurationError
from jittersim.jitter import (
    NO_JITTER,
    GaussianJitter,
    UniformJitter,
    apply_jitter,
    box_muller,
    draw_delays,
    standard_normal,
)
from jittersim.signal import generate


class _ScriptedRng:
    """Stand-in generator that replays fixed uniform draws."""

    def __init__(self, *draws) -> None:
        self._draws = deque(draws)

    def random(self, size=None):
        value = self._draws.popleft()
        if size is None:
            return value
        return np.asarray(value, dtype=float)


# --------------------------------------------------------------------------- # policies
def test_uniform_policy_validation() -> None:
    assert UniformJitter(3.0).max_delay == 3
    for bad in (-1, 1.5, "many", True, float("nan")):
        with pytest.raises(ConfigurationError):
            UniformJitter(bad)


def test_gaussian_policy_validation() -> None:
    policy = GaussianJitter(mean=-2, std_dev=1.5)
    assert policy.mean == -2.0
    assert policy.max_abs_delay == 4
    for bad in (0, -1, float("nan"), float("inf")):
        with pytest.raises(ConfigurationError):
            GaussianJitter(std_dev=bad)
    with pytest.raises(ConfigurationError):
        GaussianJitter(mean=float("inf"))


def test_configuration_error_is_value_error() -> None:
    with pytest.raises(ValueError):
        UniformJitter(-5)


# --------------------------------------------------------------------------- # random draws
def test_box_muller_redraws_zero() -> None:
    rng = _ScriptedRng(0.0, 0.5, 0.0, 0.0, 0.5)
    z = box_muller(rng)  # type: ignore[arg-type]
    assert z == pytest.approx(-math.sqrt(2.0 * math.log(2.0)))


def test_standard_normal_redraws_zero_entries() -> None:
    rng = _ScriptedRng([0.0, 0.5], [0.5], [0.5, 0.5])
    z = standard_normal(2, rng)  # type: ignore[arg-type]
    np.testing.assert_allclose(z, -math.sqrt(2.0 * math.log(2.0)))


def test_standard_normal_moments() -> None:
    z = standard_normal(50_000, np.random.default_rng(7))
    assert abs(z.mean()) < 0.03
    assert abs(z.std() - 1.0) < 0.03


def test_uniform_delays_cover_symmetric_range() -> None:
    delays = draw_delays(UniformJitter(3), 10_000, rng=np.random.default_rng(1))
    assert delays.dtype == np.int64
    assert delays.min() == -3
    assert delays.max() == 3
    assert set(np.unique(delays).tolist()) == {-3, -2, -1, 0, 1, 2, 3}


def test_uniform_zero_delay_draws_nothing() -> None:
    delays = draw_delays(NO_JITTER, 16, rng=_ScriptedRng())  # type: ignore[arg-type]
    np.testing.assert_array_equal(delays, np.zeros(16, dtype=np.int64))


def test_gaussian_delays_stay_within_three_sigma() -> None:
    policy = GaussianJitter(mean=0, std_dev=5)
    delays = draw_delays(policy, 10_000, rng=np.random.default_rng(2))
    assert delays.size == 10_000
    assert delays.min() >= -15
    assert delays.max() <= 15
    assert abs(delays.mean()) < 0.25
    assert abs(delays.std() - 5.0) < 0.2


def test_gaussian_clamp_applies_after_mean_shift() -> None:
    delays = draw_delays(GaussianJitter(mean=10, std_dev=1), 2_000, rng=np.random.default_rng(3))
    np.testing.assert_array_equal(delays, np.full(2_000, 3))


def test_draw_delays_rejects_unknown_policy() -> None:
    with pytest.raises(TypeError):
        draw_delays(object(), 4)  # type: ignore[arg-type]


def test_draw_delays_rejects_negative_count() -> None:
    with pytest.raises(ValueError):
        draw_delays(UniformJitter(1), -1)


# --------------------------------------------------------------------------- # apply_jitter
def test_zero_uniform_jitter_is_identity() -> None:
    signal = generate(17)
    out = apply_jitter(signal, UniformJitter(0))
    assert out is not signal
    np.testing.assert_array_equal(out, signal)


@pytest.mark.parametrize(
    "policy",
    [UniformJitter(50), GaussianJitter(mean=-10, std_dev=20), GaussianJitter(mean=4, std_dev=2)],
)
def test_jitter_only_reindexes(policy) -> None:
    signal = np.random.default_rng(4).standard_normal(1024)
    original = signal.copy()
    out = apply_jitter(signal, policy, rng=np.random.default_rng(5))

    assert out.shape == signal.shape
    assert np.all(np.isin(out, signal))
    np.testing.assert_array_equal(signal, original)


def test_positive_delays_clamp_at_the_end() -> None:
    signal = np.arange(10, dtype=float)
    out = apply_jitter(signal, GaussianJitter(mean=10, std_dev=1), rng=np.random.default_rng(6))
    np.testing.assert_array_equal(out, [3, 4, 5, 6, 7, 8, 9, 9, 9, 9])


def test_negative_delays_clamp_at_the_start() -> None:
    signal = np.arange(10, dtype=float)
    out = apply_jitter(signal, GaussianJitter(mean=-10, std_dev=1), rng=np.random.default_rng(6))
    np.testing.assert_array_equal(out, [0, 0, 0, 0, 1, 2, 3, 4, 5, 6])


def test_seeded_generator_is_reproducible() -> None:
    signal = generate(8)
    policy = GaussianJitter(mean=1, std_dev=3)
    first = apply_jitter(signal, policy, rng=np.random.default_rng(11))
    second = apply_jitter(signal, policy, rng=np.random.default_rng(11))
    np.testing.assert_array_equal(first, second)


def test_apply_jitter_accepts_lists() -> None:
    out = apply_jitter([1.0, 2.0, 3.0], UniformJitter(0))
    np.testing.assert_array_equal(out, [1.0, 2.0, 3.0])


@pytest.mark.parametrize("bad", [[], [[1.0, 2.0], [3.0, 4.0]]])
def test_apply_jitter_rejects_bad_shapes(bad) -> None:
    with pytest.raises(ValueError):
        apply_jitter(bad, UniformJitter(1))
