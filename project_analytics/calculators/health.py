# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Project Health Calculator

Weighted health score from completion rate, overdue avoidance and recent
activity, and the period-over-period change of activity in the window.
"""

from typing import Optional, Sequence

from project_analytics.config import HealthThresholds
from project_analytics.models import (
    ActivityTrends,
    DailyBucket,
    HealthDetails,
    HealthStatus,
    ProjectHealth,
    TaskMetrics,
    TasksByDueDate,
)
from project_analytics.utils import round_to


def calculate_project_health(
    task_metrics: TaskMetrics,
    tasks_by_due_date: TasksByDueDate,
    buckets: Sequence[DailyBucket],
    thresholds: Optional[HealthThresholds] = None
) -> ProjectHealth:
    """
    Calculate the composite project health score.

    Args:
        task_metrics: Task status counts
        tasks_by_due_date: Due-date breakdown
        buckets: Daily activity of the window
        thresholds: Weights and status bands, defaults when omitted

    Returns:
        ProjectHealth with a 0-100 score, a status and the component rates
    """
    if thresholds is None:
        thresholds = HealthThresholds()

    completion_rate = (
        task_metrics.completed / task_metrics.total * 100 if task_metrics.total > 0 else 0.0
    )

    # Inverted so that higher is better
    active_tasks = task_metrics.total - task_metrics.archived
    overdue_rate = (
        100 - tasks_by_due_date.overdue / active_tasks * 100 if active_tasks > 0 else 100.0
    )

    recent = list(buckets)[-thresholds.recent_days:] if thresholds.recent_days > 0 else []
    if recent:
        avg_activity = sum(b.created + b.completed for b in recent) / (len(recent) * 2)
        activity_level = min(avg_activity / thresholds.active_tasks_per_day * 100, 100.0)
    else:
        activity_level = 0.0

    score = (
        completion_rate * thresholds.completion_weight
        + overdue_rate * thresholds.overdue_weight
        + activity_level * thresholds.activity_weight
    )

    if score >= thresholds.excellent:
        status = HealthStatus.EXCELLENT
    elif score >= thresholds.good:
        status = HealthStatus.GOOD
    elif score >= thresholds.fair:
        status = HealthStatus.FAIR
    else:
        status = HealthStatus.NEEDS_ATTENTION

    return ProjectHealth(
        score=int(round_to(score, 0)),
        status=status,
        details=HealthDetails(
            completion_rate=int(round_to(completion_rate, 0)),
            overdue_rate=int(round_to(overdue_rate, 0)),
            activity_level=int(round_to(activity_level, 0)),
        ),
    )


def _percent_change(previous: int, current: int) -> int:
    if previous == 0:
        return int(round_to(current * 100, 0))
    return int(round_to((current - previous) / previous * 100, 0))


def calculate_activity_trends(buckets: Sequence[DailyBucket]) -> ActivityTrends:
    """Change of created/completed totals between the two halves of the window."""
    if len(buckets) < 2:
        return ActivityTrends(created=0, completed=0)

    middle = len(buckets) // 2
    first_half = buckets[:middle]
    second_half = buckets[middle:]

    return ActivityTrends(
        created=_percent_change(
            sum(b.created for b in first_half), sum(b.created for b in second_half)
        ),
        completed=_percent_change(
            sum(b.completed for b in first_half), sum(b.completed for b in second_half)
        ),
    )
