# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Statistical primitives for time-series analysis.

Lightweight heuristics over short daily series: least-squares trend, z-score
anomalies, moving average, weekly seasonality and linear forecast. Every
function returns a neutral value for inputs too short or too flat to analyze
instead of raising.
"""

import math
from typing import List, Optional, Sequence, Tuple

from project_analytics.models import Anomaly, SeasonalityResult, TrendResult
from project_analytics.utils import round_to


def calculate_linear_regression(points: Sequence[Tuple[float, float]]) -> TrendResult:
    """
    Ordinary least squares fit of y on x.

    Args:
        points: (x, y) pairs

    Returns:
        TrendResult with slope, intercept and r_squared. Fewer than two
        points give all zeros; a zero denominator gives r_squared 0.
    """
    n = len(points)
    if n < 2:
        return TrendResult()

    mean_x = sum(x for x, _ in points) / n
    mean_y = sum(y for _, y in points) / n

    ss_xy = sum((x - mean_x) * (y - mean_y) for x, y in points)
    ss_xx = sum((x - mean_x) ** 2 for x, _ in points)
    ss_yy = sum((y - mean_y) ** 2 for _, y in points)

    slope = ss_xy / ss_xx if ss_xx else 0.0
    intercept = mean_y - slope * mean_x

    denominator = ss_xx * ss_yy
    r_squared = (ss_xy ** 2) / denominator if denominator else 0.0

    return TrendResult(slope=slope, intercept=intercept, r_squared=r_squared)


def calculate_series_trend(series: Sequence[float]) -> TrendResult:
    """Trend of a series against its index."""
    return calculate_linear_regression([(x, y) for x, y in enumerate(series)])


def detect_anomalies(series: Sequence[float], threshold: float = 2.0) -> List[Anomaly]:
    """
    Z-score anomaly detection with population mean and standard deviation.

    A point is anomalous when |z| reaches the threshold; the boundary is
    inclusive. Only anomalous points are returned, with their original index and value.
    Series shorter than three points, or with no variance, have none.
    """
    n = len(series)
    if n < 3:
        return []

    mean = sum(series) / n
    std_dev = math.sqrt(sum((value - mean) ** 2 for value in series) / n)
    if std_dev == 0:
        return []

    anomalies = []
    for index, value in enumerate(series):
        z_score = (value - mean) / std_dev
        if abs(z_score) >= threshold:
            anomalies.append(Anomaly(index=index, value=value, z_score=z_score, is_anomaly=True))
    return anomalies


def calculate_moving_average(series: Sequence[float], window: int = 7) -> List[float]:
    """Trailing moving average; n - window + 1 values rounded to 1 decimal."""
    n = len(series)
    if window <= 0 or n < window:
        return []

    return [
        round_to(sum(series[i:i + window]) / window, 1)
        for i in range(n - window + 1)
    ]


def calculate_seasonality(
    series: Sequence[float],
    period: int = 7,
    strength_threshold: float = 0.7
) -> SeasonalityResult:
    """
    Detect a repeating pattern of length ``period``.

    The pattern is the mean of same-position values over all complete
    periods. Strength is one minus the summed relative deviation of the first
    ``3 * period`` points from the pattern, divided by ``3 * period`` even
    when the series is shorter, and clamped to [0, 1].
    """
    n = len(series)
    if period <= 0 or n < period * 2:
        return SeasonalityResult(has_seasonality=False, strength=0.0, pattern=[])

    complete_periods = n // period
    pattern = [0.0] * period
    for cycle in range(complete_periods):
        for position in range(period):
            pattern[position] += series[cycle * period + position] / complete_periods

    sample_size = min(n, period * 3)
    deviation = 0.0
    for i in range(sample_size):
        # An empty slot in the pattern divides by 1
        expected = pattern[i % period] or 1
        deviation += abs(series[i] / expected - 1)

    strength = 1 - deviation / (period * 3)
    strength = min(1.0, max(0.0, strength))

    return SeasonalityResult(
        has_seasonality=strength > strength_threshold,
        strength=round_to(strength, 2),
        pattern=[round_to(value, 1) for value in pattern],
    )


def forecast_values(
    series: Sequence[float],
    periods: int = 7,
    min_points: int = 10
) -> List[Optional[float]]:
    """
    Extrapolate the linear trend ``periods`` steps past the end of the series.

    Values are floored at zero and rounded to 1 decimal. Short series yield
    ``periods`` None placeholders.
    """
    n = len(series)
    if n < min_points:
        return [None] * periods

    trend = calculate_series_trend(series)
    return [
        max(0.0, round_to(trend.slope * (n + i) + trend.intercept, 1))
        for i in range(periods)
    ]
