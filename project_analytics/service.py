# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""Analytics service - main entry point for report generation."""

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from project_analytics.calculators import (
    analyze_time_series,
    assess_risk,
    build_daily_buckets,
    calculate_activity_trends,
    calculate_cumulative_activity,
    calculate_cycle_time,
    calculate_member_performance,
    calculate_on_time_delivery,
    calculate_project_health,
    calculate_task_metrics,
    calculate_tasks_by_due_date,
    calculate_throughput,
    estimate_completion,
    generate_insights,
    normalize_window_days,
)
from project_analytics.config import AnalyticsThresholds
from project_analytics.errors import InvalidInputError
from project_analytics.models import AnalyticsReport, BusinessMetrics, ProjectSnapshot
from project_analytics.utils import to_local

logger = logging.getLogger(__name__)

SnapshotInput = Union[ProjectSnapshot, Mapping[str, Any]]


def parse_snapshot(snapshot: Optional[SnapshotInput]) -> ProjectSnapshot:
    """
    Validate a snapshot given as a model or a plain mapping.

    Raises:
        InvalidInputError: if the snapshot is missing or malformed
    """
    if snapshot is None:
        raise InvalidInputError("Project snapshot is required")

    if isinstance(snapshot, ProjectSnapshot):
        return snapshot

    if not isinstance(snapshot, Mapping):
        raise InvalidInputError(
            "Project snapshot must be a mapping",
            details={'type': type(snapshot).__name__}
        )

    if snapshot.get("tasks") is None:
        raise InvalidInputError("Project snapshot has no task list", details={'field': 'tasks'})

    try:
        return ProjectSnapshot.model_validate(snapshot)
    except ValidationError as e:
        raise InvalidInputError(
            "Project snapshot is malformed",
            details={'errors': e.errors(include_url=False, include_context=False, include_input=False)}
        ) from e


class AnalyticsService:
    """Computes analytics reports from project snapshots."""

    def __init__(
        self,
        thresholds: Optional[AnalyticsThresholds] = None,
        clock: Optional[Callable[[], datetime]] = None,
        default_window_days: int = 14
    ):
        """
        Initialize analytics service.

        Args:
            thresholds: Rule table; defaults when omitted
            clock: Returns the current time; ``datetime.now`` when omitted
            default_window_days: Window used for unsupported window requests
        """
        self.thresholds = thresholds or AnalyticsThresholds()
        self.clock = clock or datetime.now
        self.default_window_days = default_window_days

    def compute_analytics(
        self,
        snapshot: Optional[SnapshotInput],
        window_days: Any = None,
        now: Optional[datetime] = None
    ) -> AnalyticsReport:
        """
        Compute the analytics report for one project.

        Args:
            snapshot: Project, tasks and members, already joined and authorized
            window_days: 7, 14 or 30; anything else uses the default window
            now: Reference time; the service clock when omitted

        Returns:
            Fully assembled AnalyticsReport

        Raises:
            InvalidInputError: if the snapshot is missing or malformed
        """
        data = parse_snapshot(snapshot)
        window = normalize_window_days(window_days, self.default_window_days)
        current = to_local(now or self.clock())
        today = current.date()

        logger.debug(
            "Computing analytics for project %s: %d tasks, %d members, %d-day window",
            data.project.id, len(data.tasks), len(data.members), window
        )

        tasks = data.tasks
        thresholds = self.thresholds

        # Time-bucketing
        buckets = build_daily_buckets(tasks, window, today)
        cumulative = calculate_cumulative_activity(buckets)

        # Aggregators
        task_metrics = calculate_task_metrics(tasks)
        tasks_by_due_date = calculate_tasks_by_due_date(tasks, today)
        member_performance = calculate_member_performance(data.members, tasks, today)

        # Time-series analysis
        analysis = analyze_time_series(buckets, today, thresholds.series)

        # Insights and risk
        insights = generate_insights(
            analysis, task_metrics, tasks_by_due_date, member_performance, buckets,
            thresholds.insights
        )
        business_metrics = BusinessMetrics(
            cycle_time=calculate_cycle_time(tasks),
            throughput=calculate_throughput(buckets, window),
            estimated_completion=estimate_completion(
                buckets, task_metrics.incomplete, today, thresholds.series.velocity_lookback_days
            ),
            on_time_delivery=calculate_on_time_delivery(tasks),
            risk_assessment=assess_risk(analysis, task_metrics, tasks_by_due_date, thresholds.risk),
        )

        report = AnalyticsReport(
            project=data.project,
            window_days=window,
            generated_at=current,
            task_metrics=task_metrics,
            tasks_by_due_date=tasks_by_due_date,
            task_activity_over_time=buckets,
            cumulative_activity=cumulative,
            member_performance=member_performance,
            time_series_analysis=analysis,
            ai_insights=insights,
            business_metrics=business_metrics,
            project_health=calculate_project_health(
                task_metrics, tasks_by_due_date, buckets, thresholds.health
            ),
            activity_trends=calculate_activity_trends(buckets),
        )

        logger.info(
            "Analytics report for project %s: %d insights, risk %s",
            data.project.id, len(insights), business_metrics.risk_assessment.level.value
        )
        return report


def compute_analytics(
    snapshot: Optional[SnapshotInput],
    window_days: Any = 14,
    now: Optional[datetime] = None,
    thresholds: Optional[AnalyticsThresholds] = None
) -> AnalyticsReport:
    """Compute a report with a one-off service."""
    return AnalyticsService(thresholds=thresholds).compute_analytics(snapshot, window_days, now)
