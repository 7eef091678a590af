"""
Calculators for the project analytics report.

Each calculator implements one part of the report, transforming task
records or daily buckets into report-ready models.
"""

from project_analytics.calculators.business_metrics import (
    calculate_cycle_time,
    calculate_on_time_delivery,
    calculate_throughput,
    estimate_completion,
)
from project_analytics.calculators.health import calculate_activity_trends, calculate_project_health
from project_analytics.calculators.insights import assess_risk, generate_insights
from project_analytics.calculators.member_performance import calculate_member_performance
from project_analytics.calculators.task_metrics import (
    calculate_task_metrics,
    calculate_tasks_by_due_date,
)
from project_analytics.calculators.time_buckets import (
    build_daily_buckets,
    calculate_cumulative_activity,
    normalize_window_days,
)
from project_analytics.calculators.time_series import analyze_time_series

__all__ = [
    'analyze_time_series',
    'assess_risk',
    'build_daily_buckets',
    'calculate_activity_trends',
    'calculate_cumulative_activity',
    'calculate_cycle_time',
    'calculate_member_performance',
    'calculate_on_time_delivery',
    'calculate_project_health',
    'calculate_task_metrics',
    'calculate_tasks_by_due_date',
    'calculate_throughput',
    'estimate_completion',
    'generate_insights',
    'normalize_window_days',
]
