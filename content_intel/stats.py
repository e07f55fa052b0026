"""Numeric helpers shared by the analyzers. Degenerate inputs resolve to 0, never NaN."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

import numpy as np



def mean(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.mean(values))



def median(values: Sequence[float]) -> float:
    if len(values) == 0:
        return 0.0
    return float(np.median(values))



def population_std(values: Sequence[float]) -> float:
    """Population standard deviation (ddof=0); 0 for fewer than two values."""
    if len(values) < 2:
        return 0.0
    return float(np.std(values))



def percentile(values: Sequence[float], p: float) -> float:
    """Linear-interpolated percentile, p in [0, 100]."""
    if len(values) == 0:
        return 0.0
    return float(np.percentile(values, p))



def pearson(xs: Sequence[float], ys: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two equally long series.
    Returns 0 when either series has zero variance or fewer than two points,
    and clamps floating-point drift to [-1, 1].
    """
    if len(xs) != len(ys):
        raise ValueError("pearson() needs series of equal length")
    if len(xs) < 2:
        return 0.0

    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    x_dev = x - x.mean()
    y_dev = y - y.mean()
    denominator = float(np.sqrt(np.sum(x_dev ** 2) * np.sum(y_dev ** 2)))
    if denominator == 0:
        return 0.0
    r = float(np.sum(x_dev * y_dev)) / denominator
    return max(-1.0, min(1.0, r))



def weighted_average(values: Iterable[Optional[float]], weights: Iterable[Optional[float]]) -> float:
    """
    Σ(value × weight) / Σ(weight), skipping pairs whose value or weight is missing.
    A zero total weight yields 0.
    """
    numerator = 0.0
    denominator = 0.0
    for value, weight in zip(values, weights):
        if value is None or weight is None:
            continue
        if weight <= 0:
            continue
        numerator += value * weight
        denominator += weight
    if denominator == 0:
        return 0.0
    return numerator / denominator



def safe_ratio(numerator: float, denominator: float) -> float:
    if not denominator:
        return 0.0
    return numerator / denominator
