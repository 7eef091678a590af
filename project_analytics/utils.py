# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Date and rounding helpers shared by the calculators."""

import math
from datetime import date, datetime, time, timedelta
from typing import Optional

SECONDS_PER_DAY = 60 * 60 * 24


def round_to(value: float, decimals: int = 1) -> float:
    """Round half up (towards +infinity), the way the dashboard rounds."""
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def to_local(value: datetime) -> datetime:
    """Naive local datetime; aware values are converted to local time first."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min)


def end_of_day(day: date) -> datetime:
    return datetime.combine(day, time.max)


def end_of_week(day: date) -> datetime:
    """End of the upcoming Saturday (today when today is Saturday)."""
    # date.weekday(): Monday=0 .. Saturday=5, Sunday=6
    days_to_saturday = (5 - day.weekday()) % 7
    return end_of_day(day + timedelta(days=days_to_saturday))


def days_between(start: datetime, end: datetime) -> float:
    """Elapsed days between two timestamps, fractional."""
    return (to_local(end) - to_local(start)).total_seconds() / SECONDS_PER_DAY


def local_day(value: Optional[datetime]) -> Optional[date]:
    """Calendar day of a timestamp in local time."""
    if value is None:
        return None
    return to_local(value).date()
