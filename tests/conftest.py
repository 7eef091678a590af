# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Pytest configuration and fixtures for all tests.

This file ensures the project root is in the Python path so the package
imports without being installed, and provides a frozen reference time with
builders for tasks, members and snapshots around it.
"""

import sys
from datetime import datetime, time, timedelta
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import pytest for fixtures
import pytest

from project_analytics.models import (
    DailyBucket,
    MemberRecord,
    ProjectSnapshot,
    ProjectSummary,
    TaskRecord,
)

# Wednesday; the week ends on Saturday 2026-10-17
NOW = datetime(2026, 10, 14, 12, 0, 0)


@pytest.fixture
def now():
    """Frozen reference time."""
    return NOW


@pytest.fixture
def today():
    return NOW.date()


@pytest.fixture
def make_task():
    """Build a task relative to NOW; offsets are in days."""
    counter = {"value": 0}

    def _make_task(
        task_id=None,
        created_days_ago=0,
        completed=False,
        completed_days_ago=None,
        due_in_days=None,
        archived=False,
        assigned_to=None,
        legacy=False,
    ):
        counter["value"] += 1
        created_at = NOW - timedelta(days=created_days_ago)
        updated_at = created_at
        completed_at = None
        if completed:
            days = created_days_ago if completed_days_ago is None else completed_days_ago
            updated_at = NOW - timedelta(days=days)
            # Legacy records only carry the last-modified timestamp
            completed_at = None if legacy else updated_at

        due_date = None
        if due_in_days is not None:
            due_date = datetime.combine(NOW.date() + timedelta(days=due_in_days), time(17, 0))

        return TaskRecord(
            id=task_id or f"TASK-{counter['value']}",
            title=f"Task {counter['value']}",
            completed=completed,
            archived=archived,
            due_date=due_date,
            created_at=created_at,
            updated_at=updated_at,
            completed_at=completed_at,
            assigned_to=assigned_to,
        )

    return _make_task


@pytest.fixture
def make_member():
    def _make_member(member_id, name):
        return MemberRecord(id=member_id, user_id=f"user_{member_id}", name=name)

    return _make_member


@pytest.fixture
def make_snapshot():
    def _make_snapshot(tasks=None, members=None):
        return ProjectSnapshot(
            project=ProjectSummary(
                id="PROJECT-1",
                title="Website Redesign",
                description="Marketing site refresh",
                created_at=NOW - timedelta(days=60),
                updated_at=NOW - timedelta(days=1),
            ),
            tasks=tasks or [],
            members=members or [],
        )

    return _make_snapshot


@pytest.fixture
def make_buckets():
    """Daily buckets ending on NOW's date from created/completed counts."""
    def _make_buckets(created, completed=None):
        if completed is None:
            completed = [0] * len(created)
        start = NOW.date() - timedelta(days=len(created) - 1)
        return [
            DailyBucket(date=start + timedelta(days=i), created=c, completed=d)
            for i, (c, d) in enumerate(zip(created, completed))
        ]

    return _make_buckets
