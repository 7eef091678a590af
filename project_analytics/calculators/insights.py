# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Insight and Risk Synthesizer

Turns the numeric signals of a report into human-readable insight records
and a banded risk score. Each rule is evaluated independently and appends at
most one insight; the output keeps rule order. All trigger values come from
the threshold table in ``project_analytics.config``.
"""

from typing import List, Optional, Sequence

from project_analytics.config import InsightThresholds, RiskBand, RiskThresholds
from project_analytics.models import (
    DailyBucket,
    Insight,
    InsightType,
    MemberPerformance,
    RiskAssessment,
    RiskLevel,
    TaskMetrics,
    TasksByDueDate,
    TimeSeriesAnalysis,
)
from project_analytics.utils import round_to

DAY_NAMES = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


def _format_number(value: float, decimals: int = 2) -> str:
    return f"{round_to(value, decimals):g}"


def overdue_percentage(task_metrics: TaskMetrics, tasks_by_due_date: TasksByDueDate) -> float:
    """Overdue tasks as a percentage of all tasks."""
    if task_metrics.total <= 0:
        return 0.0
    return tasks_by_due_date.overdue / task_metrics.total * 100


def completion_percentage(task_metrics: TaskMetrics) -> float:
    """Completed tasks as a percentage of all tasks."""
    if task_metrics.total <= 0:
        return 0.0
    return task_metrics.completed / task_metrics.total * 100


def generate_insights(
    analysis: TimeSeriesAnalysis,
    task_metrics: TaskMetrics,
    tasks_by_due_date: TasksByDueDate,
    member_performance: Sequence[MemberPerformance],
    buckets: Sequence[DailyBucket],
    thresholds: Optional[InsightThresholds] = None
) -> List[Insight]:
    """
    Evaluate every insight rule against the report signals.

    Args:
        analysis: Time-series analysis of the window
        task_metrics: Task status counts
        tasks_by_due_date: Due-date breakdown
        member_performance: Members with assigned work
        buckets: Daily buckets the analysis was computed from
        thresholds: Rule trigger values, defaults when omitted

    Returns:
        Triggered insights in rule evaluation order
    """
    if thresholds is None:
        thresholds = InsightThresholds()

    insights: List[Insight] = []

    # Velocity trend
    velocity_trend = analysis.trends.completed.slope
    if velocity_trend > thresholds.velocity_up_slope:
        insights.append(Insight(
            type=InsightType.POSITIVE,
            title="Increasing Velocity",
            description="Task completion rate is trending upward, indicating improved team productivity.",
            metric=f"+{_format_number(velocity_trend)} tasks/day",
        ))
    elif velocity_trend < thresholds.velocity_down_slope:
        insights.append(Insight(
            type=InsightType.NEGATIVE,
            title="Decreasing Velocity",
            description=(
                "Task completion rate is trending downward. "
                "Consider checking for blockers or team capacity issues."
            ),
            metric=f"{_format_number(velocity_trend)} tasks/day",
        ))

    # Backlog growth
    backlog_trend = analysis.trends.backlog.slope
    if backlog_trend > thresholds.backlog_growing_slope:
        insights.append(Insight(
            type=InsightType.WARNING,
            title="Growing Backlog",
            description=(
                "Your backlog is growing faster than completion rate. "
                "Consider scope management or increasing capacity."
            ),
            metric=f"+{_format_number(backlog_trend)} tasks/day",
        ))
    elif backlog_trend < thresholds.backlog_shrinking_slope:
        insights.append(Insight(
            type=InsightType.POSITIVE,
            title="Shrinking Backlog",
            description=(
                "Your team is completing tasks faster than new ones are being added, "
                "reducing the backlog."
            ),
            metric=f"{_format_number(backlog_trend)} tasks/day",
        ))

    # Overdue tasks
    overdue_pct = overdue_percentage(task_metrics, tasks_by_due_date)
    if overdue_pct > thresholds.high_overdue_percentage:
        insights.append(Insight(
            type=InsightType.WARNING,
            title="High Overdue Rate",
            description=(
                f"{int(round_to(overdue_pct, 0))}% of tasks are overdue. "
                "Consider reviewing due dates or reallocating resources."
            ),
            metric=f"{tasks_by_due_date.overdue} tasks",
        ))

    # Workload balance
    loaded_members = [member for member in member_performance if member.tasks_assigned > 0]
    if len(loaded_members) > 1:
        task_counts = [member.tasks_assigned for member in loaded_members]
        max_tasks = max(task_counts)
        min_tasks = min(task_counts)
        disparity = max_tasks / (min_tasks or 1)

        if disparity > thresholds.workload_disparity_ratio:
            busiest = next(m for m in loaded_members if m.tasks_assigned == max_tasks)
            lightest = next(m for m in loaded_members if m.tasks_assigned == min_tasks)
            insights.append(Insight(
                type=InsightType.WARNING,
                title="Unbalanced Workload",
                description=(
                    f"Workload is unevenly distributed. {busiest.name} has {max_tasks} tasks "
                    f"while {lightest.name} has only {min_tasks}."
                ),
                metric=f"{_format_number(disparity, 1)}x difference",
            ))

    # Recent completion anomaly
    completed_anomalies = analysis.anomalies.completed
    if completed_anomalies:
        latest = completed_anomalies[-1]
        if 0 <= latest.index < len(buckets) and \
                latest.index >= len(buckets) - thresholds.recent_anomaly_days:
            anomaly_date = buckets[latest.index].date.isoformat()
            spike = latest.value > 0
            insights.append(Insight(
                type=InsightType.POSITIVE if spike else InsightType.NEGATIVE,
                title="Productivity Spike" if spike else "Productivity Drop",
                description=(
                    f"Unusual {'increase' if spike else 'decrease'} in task completion "
                    f"detected on {anomaly_date}."
                ),
                metric=f"{_format_number(latest.value)} tasks",
            ))

    # Weekly pattern
    seasonality = analysis.seasonality.completed
    if seasonality.has_seasonality and seasonality.pattern and buckets:
        pattern = seasonality.pattern
        peak_index = pattern.index(max(pattern))
        dip_index = pattern.index(min(pattern))
        peak_day = DAY_NAMES[buckets[peak_index].date.weekday()]
        dip_day = DAY_NAMES[buckets[dip_index].date.weekday()]
        insights.append(Insight(
            type=InsightType.INFO,
            title="Weekly Pattern Detected",
            description=f"Team productivity tends to peak on {peak_day}s and dip on {dip_day}s.",
            metric=f"{int(round_to(seasonality.strength * 100, 0))}% confidence",
        ))

    return insights


def _band_points(value: float, bands: Sequence[RiskBand], above: bool) -> int:
    for band in bands:
        if (above and value > band.limit) or (not above and value < band.limit):
            return band.points
    return 0


def assess_risk(
    analysis: TimeSeriesAnalysis,
    task_metrics: TaskMetrics,
    tasks_by_due_date: TasksByDueDate,
    thresholds: Optional[RiskThresholds] = None
) -> RiskAssessment:
    """
    Sum four banded risk contributions and map the score to a level.

    Contributions: overdue rate, backlog trend, velocity trend and
    completion rate, each worth at most 25 points with the default bands.
    """
    if thresholds is None:
        thresholds = RiskThresholds()

    score = 0
    score += _band_points(
        overdue_percentage(task_metrics, tasks_by_due_date), thresholds.overdue_rate, above=True
    )
    score += _band_points(analysis.trends.backlog.slope, thresholds.backlog_slope, above=True)
    score += _band_points(analysis.trends.completed.slope, thresholds.velocity_slope, above=False)
    score += _band_points(
        completion_percentage(task_metrics), thresholds.completion_rate, above=False
    )

    if score >= thresholds.high_level:
        level = RiskLevel.HIGH
    elif score >= thresholds.medium_level:
        level = RiskLevel.MEDIUM
    else:
        level = RiskLevel.LOW

    return RiskAssessment(score=score, level=level)
