"""
Project analytics engine.

Derives time-series statistics, forecasts, health and risk scores and
rule-based insights from a snapshot of a project's tasks and members.
"""

from project_analytics.errors import AnalyticsError, InvalidInputError
from project_analytics.models import AnalyticsReport, MemberRecord, ProjectSnapshot, TaskRecord
from project_analytics.service import AnalyticsService, compute_analytics

__all__ = [
    'AnalyticsError',
    'AnalyticsReport',
    'AnalyticsService',
    'InvalidInputError',
    'MemberRecord',
    'ProjectSnapshot',
    'TaskRecord',
    'compute_analytics',
]
