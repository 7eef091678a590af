# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Time-Series Analyzer

Runs the statistical primitives over the daily created/completed series and
the derived backlog series.
"""

from datetime import date, timedelta
from typing import List, Optional, Sequence

from project_analytics.calculators.primitives import (
    calculate_moving_average,
    calculate_seasonality,
    calculate_series_trend,
    detect_anomalies,
    forecast_values,
)
from project_analytics.config import SeriesThresholds
from project_analytics.models import (
    DailyBucket,
    ForecastResult,
    SeriesAnomalies,
    SeriesMovingAverages,
    SeriesSeasonality,
    SeriesTrends,
    TimeSeriesAnalysis,
)


def backlog_series(created: Sequence[int], completed: Sequence[int]) -> List[int]:
    """Cumulative created minus cumulative completed, per day."""
    backlog = []
    running = 0
    for created_count, completed_count in zip(created, completed):
        running += created_count - completed_count
        backlog.append(running)
    return backlog


def moving_average_window(length: int, max_window: int = 7) -> int:
    """Window for a series of ``length`` points: at most half the series."""
    return min(max_window, length // 2)


def forecast_dates(today: date, periods: int) -> List[str]:
    """ISO dates of the ``periods`` days following today."""
    return [(today + timedelta(days=i + 1)).isoformat() for i in range(periods)]


def analyze_time_series(
    buckets: Sequence[DailyBucket],
    today: date,
    thresholds: Optional[SeriesThresholds] = None
) -> TimeSeriesAnalysis:
    """
    Analyze daily activity.

    Args:
        buckets: Gap-free daily buckets of the window
        today: Last day of the window; forecasts start the day after
        thresholds: Primitive parameters, defaults when omitted

    Returns:
        TimeSeriesAnalysis with trends, moving averages, anomalies,
        seasonality and forecast
    """
    if thresholds is None:
        thresholds = SeriesThresholds()

    created = [bucket.created for bucket in buckets]
    completed = [bucket.completed for bucket in buckets]
    backlog = backlog_series(created, completed)

    window = moving_average_window(len(buckets), thresholds.moving_average_window)
    periods = thresholds.forecast_periods

    return TimeSeriesAnalysis(
        trends=SeriesTrends(
            created=calculate_series_trend(created),
            completed=calculate_series_trend(completed),
            backlog=calculate_series_trend(backlog),
        ),
        moving_averages=SeriesMovingAverages(
            created=calculate_moving_average(created, window),
            completed=calculate_moving_average(completed, window),
        ),
        anomalies=SeriesAnomalies(
            created=detect_anomalies(created, thresholds.anomaly_z_score),
            completed=detect_anomalies(completed, thresholds.anomaly_z_score),
        ),
        seasonality=SeriesSeasonality(
            created=calculate_seasonality(
                created, thresholds.seasonality_period, thresholds.seasonality_strength
            ),
            completed=calculate_seasonality(
                completed, thresholds.seasonality_period, thresholds.seasonality_strength
            ),
        ),
        forecast=ForecastResult(
            created=forecast_values(created, periods, thresholds.forecast_min_points),
            completed=forecast_values(completed, periods, thresholds.forecast_min_points),
            dates=forecast_dates(today, periods),
        ),
    )
