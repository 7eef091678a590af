# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Mock data generators for analytics testing and development.

Provides realistic project snapshots without needing a database behind
the engine.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from project_analytics.models import MemberRecord, ProjectSnapshot, ProjectSummary, TaskRecord


class MockDataGenerator:
    """Generates realistic project snapshots for the analytics engine"""

    # Realistic names for team members
    TEAM_MEMBERS = [
        "Alice Chen", "Bob Smith", "Charlie Johnson", "Diana Martinez",
        "Ethan Brown", "Fiona O'Neill", "George Kim", "Hannah Patel"
    ]

    COMPONENTS = [
        "Authentication", "API", "Database", "Frontend", "Backend",
        "DevOps", "Documentation", "Testing"
    ]

    TASK_TEMPLATES = [
        "Implement {feature}",
        "Fix bug in {component}",
        "Refactor {component} module",
        "Add tests for {feature}",
        "Update {component} documentation",
        "Optimize {feature} performance",
    ]

    FEATURES = [
        "user login", "dashboard", "reporting", "notifications",
        "data export", "search", "filtering", "pagination",
    ]

    def __init__(self, seed: int = 42, now: Optional[datetime] = None):
        """Initialize with a seed for reproducibility and a reference time"""
        self.random = random.Random(seed)
        self.now = now or datetime.now()
        self.task_counter = 1000

    def _generate_task_title(self) -> str:
        """Generate a realistic task title"""
        template = self.random.choice(self.TASK_TEMPLATES)
        return template.format(
            feature=self.random.choice(self.FEATURES),
            component=self.random.choice(self.COMPONENTS)
        )

    def generate_members(self, count: int = 4) -> List[MemberRecord]:
        """Generate project members with distinct names"""
        names = self.random.sample(self.TEAM_MEMBERS, min(count, len(self.TEAM_MEMBERS)))
        return [
            MemberRecord(id=f"MEMBER-{i}", user_id=f"user_{i}", name=name)
            for i, name in enumerate(names, start=1)
        ]

    def generate_task(
        self,
        members: Optional[List[MemberRecord]] = None,
        created_at: Optional[datetime] = None,
        completed: Optional[bool] = None,
        history_days: int = 30
    ) -> TaskRecord:
        """Generate a single task, completed with 60% probability by default"""
        self.task_counter += 1

        if created_at is None:
            created_at = self.now - timedelta(
                days=self.random.uniform(0, history_days - 1)
            )
        if completed is None:
            completed = self.random.random() < 0.6

        completed_at = None
        updated_at = created_at
        if completed:
            completed_at = min(created_at + timedelta(days=self.random.uniform(0.2, 6)), self.now)
            updated_at = completed_at

        due_date = None
        if self.random.random() < 0.7:
            due_date = created_at + timedelta(days=self.random.randint(1, 14))

        assigned_to = None
        if members and self.random.random() < 0.9:
            assigned_to = self.random.choice(members).id

        return TaskRecord(
            id=f"TASK-{self.task_counter}",
            title=self._generate_task_title(),
            completed=completed,
            archived=not completed and self.random.random() < 0.05,
            due_date=due_date,
            created_at=created_at,
            updated_at=updated_at,
            completed_at=completed_at,
            assigned_to=assigned_to,
        )

    def generate_snapshot(
        self,
        num_tasks: int = 40,
        num_members: int = 4,
        history_days: int = 30,
        project_id: str = "PROJECT-1"
    ) -> ProjectSnapshot:
        """Generate a complete project snapshot"""
        members = self.generate_members(num_members)
        tasks = [
            self.generate_task(members=members, history_days=history_days)
            for _ in range(num_tasks)
        ]

        return ProjectSnapshot(
            project=ProjectSummary(
                id=project_id,
                title="Customer Portal",
                description="Self-service portal for customer accounts",
                created_at=self.now - timedelta(days=history_days),
                updated_at=self.now,
            ),
            tasks=tasks,
            members=members,
        )
