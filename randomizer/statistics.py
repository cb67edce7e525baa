from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from .random_utils import MODULUS, SeededGenerator


@dataclass(frozen=True)
class SequenceSummary:
    count: int
    mean: float
    variance: float
    minimum: float
    maximum: float
    expected_mean: float = 0.5
    expected_variance: float = 1.0 / 12.0


@dataclass(frozen=True)
class UniformityResult:
    statistic: float
    degrees_of_freedom: int
    p_value: float
    bins: int
    observed: tuple[int, ...]
    expected: float
    is_uniform: bool


def standard_normal_cdf(z: float) -> float:
    """Standard normal CDF via erf (stable and dependency-free)."""
    return 0.5 * (1.0 + math.erf(z / math.sqrt(2.0)))


def chi_square_sf(statistic: float, degrees_of_freedom: int) -> float:
    """Upper-tail chi-square probability.

    Wilson-Hilferty approximation: (X/k)^(1/3) is close to normal with mean
    1 - 2/(9k) and variance 2/(9k). Good enough for a histogram check.
    """
    if degrees_of_freedom <= 0:
        raise ValueError("degrees_of_freedom must be > 0")
    if statistic <= 0:
        return 1.0

    k = degrees_of_freedom
    v = 2.0 / (9.0 * k)
    z = ((statistic / k) ** (1.0 / 3.0) - (1.0 - v)) / math.sqrt(v)
    return 1.0 - standard_normal_cdf(z)


def summarize_sequence(fractions: Sequence[float]) -> SequenceSummary:
    """Mean, population variance and range of a run of fractions."""
    n = len(fractions)
    if n == 0:
        raise ValueError("fractions must not be empty")

    mean = sum(fractions) / n
    variance = sum((f - mean) ** 2 for f in fractions) / n

    return SequenceSummary(
        count=n,
        mean=mean,
        variance=variance,
        minimum=min(fractions),
        maximum=max(fractions),
    )


def histogram(fractions: Sequence[float], bins: int = 10) -> list[int]:
    if bins < 2:
        raise ValueError("bins must be >= 2")
    counts = [0] * bins
    for f in fractions:
        idx = int(f * bins)
        # clamp stray values outside [0, 1)
        counts[min(max(idx, 0), bins - 1)] += 1
    return counts


def chi_square_uniformity(
    fractions: Sequence[float],
    bins: int = 10,
    alpha: float = 0.05,
) -> UniformityResult:
    """Pearson chi-square test of fractions against a flat histogram on [0, 1)."""
    if len(fractions) == 0:
        raise ValueError("fractions must not be empty")
    if not (0 < alpha < 1):
        raise ValueError("alpha must be in (0, 1)")

    observed = histogram(fractions, bins=bins)
    expected = len(fractions) / bins
    statistic = sum((o - expected) ** 2 / expected for o in observed)
    dof = bins - 1
    p_value = chi_square_sf(statistic, dof)

    return UniformityResult(
        statistic=statistic,
        degrees_of_freedom=dof,
        p_value=p_value,
        bins=bins,
        observed=tuple(observed),
        expected=expected,
        is_uniform=p_value >= alpha,
    )


def cycle_length(seed: int) -> int:
    """Number of draws before the generator's state repeats.

    The first draw normalizes ``seed``; the count starts from that state.
    With these constants every state lies on one cycle of length MODULUS.
    """
    rng = SeededGenerator(seed)
    rng.next_fraction()
    start = rng.seed

    steps = 0
    while True:
        rng.next_fraction()
        steps += 1
        if rng.seed == start or steps > MODULUS:
            return steps


def describe_result(summary: SequenceSummary, uniformity: UniformityResult) -> str:
    if uniformity.is_uniform:
        return (
            f"No evidence against uniformity (chi-square = {uniformity.statistic:.2f}, "
            f"p = {uniformity.p_value:.4f}). Mean {summary.mean:.4f} vs 0.5, "
            f"variance {summary.variance:.4f} vs {summary.expected_variance:.4f}."
        )

    return (
        f"Histogram departs from uniform (chi-square = {uniformity.statistic:.2f}, "
        f"p = {uniformity.p_value:.4f}). Mean {summary.mean:.4f} vs 0.5, "
        f"variance {summary.variance:.4f} vs {summary.expected_variance:.4f}. "
        "Short runs of an LCG this small are often lumpy; try more draws."
    )
