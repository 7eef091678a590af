# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Task Status and Due-Date Breakdown

Counts tasks by completion state and sorts open tasks into due-date buckets
relative to the current local day.
"""

from datetime import date
from typing import Sequence

from project_analytics.models import TaskMetrics, TaskRecord, TasksByDueDate
from project_analytics.utils import end_of_day, end_of_week, start_of_day, to_local


def calculate_task_metrics(tasks: Sequence[TaskRecord]) -> TaskMetrics:
    """Total, completed, incomplete (open and not archived) and archived counts."""
    return TaskMetrics(
        total=len(tasks),
        completed=sum(1 for task in tasks if task.completed),
        incomplete=sum(1 for task in tasks if not task.completed and not task.archived),
        archived=sum(1 for task in tasks if task.archived),
    )


def is_overdue(task: TaskRecord, today: date) -> bool:
    """Open task whose due timestamp is before the start of today."""
    if task.completed or task.due_date is None:
        return False
    return to_local(task.due_date) < start_of_day(today)


def calculate_tasks_by_due_date(tasks: Sequence[TaskRecord], today: date) -> TasksByDueDate:
    """
    Classify open tasks by due date.

    Every open task with a due date lands in exactly one of overdue,
    due_today, due_this_week and due_later; open tasks without one count as
    no_due_date. Completed tasks are never counted.

    Args:
        tasks: Task records of the project
        today: Current local calendar day

    Returns:
        TasksByDueDate counts
    """
    today_start = start_of_day(today)
    today_end = end_of_day(today)
    week_end = end_of_week(today)

    breakdown = TasksByDueDate()
    for task in tasks:
        if task.completed:
            continue
        if task.due_date is None:
            breakdown.no_due_date += 1
            continue

        due = to_local(task.due_date)
        if due < today_start:
            breakdown.overdue += 1
        elif due <= today_end:
            breakdown.due_today += 1
        elif due <= week_end:
            breakdown.due_this_week += 1
        else:
            breakdown.due_later += 1

    return breakdown
