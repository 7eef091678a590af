# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Member Performance Calculator

Per-member workload and delivery: tasks assigned, completed and overdue,
and the average number of days from creation to completion.
"""

from collections import defaultdict
from datetime import date
from typing import Dict, List, Sequence

from project_analytics.calculators.business_metrics import average_completion_days
from project_analytics.calculators.task_metrics import is_overdue
from project_analytics.models import MemberPerformance, MemberRecord, TaskRecord
from project_analytics.utils import round_to


def calculate_member_performance(
    members: Sequence[MemberRecord],
    tasks: Sequence[TaskRecord],
    today: date
) -> List[MemberPerformance]:
    """
    Calculate performance figures for every member with assigned work.

    Args:
        members: Project members
        tasks: Task records of the project
        today: Current local calendar day, used for overdue checks

    Returns:
        One entry per member, in member order; members without assigned
        tasks are left out
    """
    tasks_by_assignee: Dict[str, List[TaskRecord]] = defaultdict(list)
    for task in tasks:
        if task.assigned_to:
            tasks_by_assignee[task.assigned_to].append(task)

    performance = []
    for member in members:
        member_tasks = tasks_by_assignee.get(member.id, [])
        if not member_tasks:
            continue

        completed_tasks = [task for task in member_tasks if task.completed]
        tasks_assigned = len(member_tasks)
        tasks_completed = len(completed_tasks)

        performance.append(MemberPerformance(
            user_id=member.user_id,
            name=member.name,
            tasks_assigned=tasks_assigned,
            tasks_completed=tasks_completed,
            avg_completion_time=average_completion_days(completed_tasks),
            tasks_overdue=sum(1 for task in member_tasks if is_overdue(task, today)),
            completion_rate=int(round_to(tasks_completed / tasks_assigned * 100, 0)),
        ))

    return performance
