# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Delivery Metrics Calculator

Cycle time, throughput, on-time delivery and a completion-date estimate.
Cycle time here is measured from task creation to completion.
"""

import math
from datetime import date, timedelta
from typing import Optional, Sequence

from project_analytics.models import DailyBucket, EstimatedCompletion, TaskRecord
from project_analytics.utils import days_between, end_of_day, local_day, round_to, to_local


def average_completion_days(completed_tasks: Sequence[TaskRecord]) -> Optional[float]:
    """Mean creation-to-completion time in days, 1 decimal; None when empty."""
    if not completed_tasks:
        return None

    total_days = sum(
        days_between(task.created_at, task.completion_timestamp)
        for task in completed_tasks
    )
    return round_to(total_days / len(completed_tasks), 1)


def calculate_cycle_time(tasks: Sequence[TaskRecord]) -> Optional[float]:
    """Project-wide mean cycle time over all completed tasks."""
    return average_completion_days([task for task in tasks if task.completed])


def calculate_throughput(buckets: Sequence[DailyBucket], window_days: int) -> float:
    """Completed tasks per day over the window, 1 decimal."""
    if window_days <= 0:
        return 0.0
    total_completed = sum(bucket.completed for bucket in buckets)
    return round_to(total_completed / window_days, 1)


def calculate_on_time_delivery(tasks: Sequence[TaskRecord]) -> Optional[int]:
    """
    Percentage of completed tasks with a due date finished by the end of the
    due day. None when no completed task had a due date.
    """
    due_tasks = [task for task in tasks if task.completed and task.due_date is not None]
    if not due_tasks:
        return None

    on_time = sum(
        1 for task in due_tasks
        if to_local(task.completion_timestamp) <= end_of_day(local_day(task.due_date))
    )
    return int(round_to(on_time / len(due_tasks) * 100, 0))


def estimate_completion(
    buckets: Sequence[DailyBucket],
    incomplete_count: int,
    today: date,
    lookback_days: int = 14
) -> Optional[EstimatedCompletion]:
    """
    Estimate when the open work will be done at the recent completion rate.

    Velocity is the completed count of the last ``lookback_days`` buckets
    divided by ``lookback_days``, so shorter windows count the missing days
    as idle. Returns None when there is nothing open or velocity is zero.
    """
    if incomplete_count <= 0 or lookback_days <= 0:
        return None

    recent = list(buckets)[-lookback_days:]
    velocity = sum(bucket.completed for bucket in recent) / lookback_days
    if velocity <= 0:
        return None

    days_remaining = math.ceil(incomplete_count / velocity)
    return EstimatedCompletion(
        date=(today + timedelta(days=days_remaining)).isoformat(),
        days_remaining=days_remaining,
    )
