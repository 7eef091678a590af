# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Daily Activity Bucketing

Turns raw task timestamps into a gap-free daily series of created and
completed counts over the requested window, plus the cumulative backlog.
"""

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import Any, Dict, List, Sequence

from project_analytics.config import VALID_WINDOW_DAYS
from project_analytics.models import CumulativeBucket, DailyBucket, TaskRecord
from project_analytics.utils import local_day

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_DAYS = 14


def normalize_window_days(value: Any, default: int = DEFAULT_WINDOW_DAYS) -> int:
    """
    Normalize a requested window to 7, 14 or 30 days.

    Accepts ints, numeric strings and the dashboard's time-range tokens
    ("7days", "14days", "30days"). Anything else falls back to ``default``.
    """
    if default not in VALID_WINDOW_DAYS:
        default = DEFAULT_WINDOW_DAYS

    if isinstance(value, bool):
        candidate = None
    elif isinstance(value, int):
        candidate = value
    elif isinstance(value, str):
        token = value.strip().lower()
        if token.endswith("days"):
            token = token[:-len("days")]
        candidate = int(token) if token.isdigit() else None
    else:
        candidate = None

    if candidate in VALID_WINDOW_DAYS:
        return candidate

    logger.debug("Unsupported window %r, using %d days", value, default)
    return default


def window_dates(window_days: int, today: date) -> List[date]:
    """Calendar days of the window, oldest first, ending on ``today``."""
    return [today - timedelta(days=offset) for offset in range(window_days - 1, -1, -1)]


def build_daily_buckets(
    tasks: Sequence[TaskRecord],
    window_days: int,
    today: date
) -> List[DailyBucket]:
    """
    Count tasks created and completed on each day of the window.

    Args:
        tasks: Task records of the project
        window_days: Number of days, already normalized
        today: Last day of the window (local calendar day)

    Returns:
        Exactly ``window_days`` buckets in ascending date order
    """
    dates = window_dates(window_days, today)

    created_by_date: Dict[date, int] = defaultdict(int)
    completed_by_date: Dict[date, int] = defaultdict(int)

    for task in tasks:
        created_by_date[local_day(task.created_at)] += 1
        if task.completed:
            completed_by_date[local_day(task.completion_timestamp)] += 1

    return [
        DailyBucket(
            date=day,
            created=created_by_date.get(day, 0),
            completed=completed_by_date.get(day, 0),
        )
        for day in dates
    ]


def calculate_cumulative_activity(buckets: Sequence[DailyBucket]) -> List[CumulativeBucket]:
    """Running created/completed totals and the backlog between them."""
    cumulative_created = 0
    cumulative_completed = 0
    result = []

    for bucket in buckets:
        cumulative_created += bucket.created
        cumulative_completed += bucket.completed
        result.append(CumulativeBucket(
            date=bucket.date,
            created=bucket.created,
            completed=bucket.completed,
            cumulative_created=cumulative_created,
            cumulative_completed=cumulative_completed,
            backlog=cumulative_created - cumulative_completed,
        ))

    return result
