# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Data models for project analytics.

Inputs are the flat task/member snapshot supplied by the embedding system;
outputs are the pieces of the analytics report. Attributes are snake_case
and every model serializes with camelCase aliases, which is the shape the
dashboard consumes.
"""

from datetime import date as date_type
from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AnalyticsModel(BaseModel):
    """Base model with camelCase wire names"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenAnalyticsModel(AnalyticsModel):
    """Base model for values that never change once built"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


# Snapshot (input) models

class TaskRecord(AnalyticsModel):
    """A task as stored by the persistence layer"""
    id: str = Field(..., description="Unique identifier")
    title: Optional[str] = Field(None, description="Task title")
    completed: bool = Field(False, description="Completion flag")
    archived: bool = Field(False, description="Archived flag")
    due_date: Optional[datetime] = Field(None, description="Due timestamp")
    created_at: datetime = Field(..., description="Creation timestamp")
    updated_at: datetime = Field(..., description="Last-modified timestamp")
    completed_at: Optional[datetime] = Field(
        None, description="Set once when the task became completed"
    )
    assigned_to: Optional[str] = Field(None, description="Assigned member id")

    @property
    def completion_timestamp(self) -> datetime:
        """When the task was completed; legacy records fall back to last-modified."""
        return self.completed_at or self.updated_at


class MemberRecord(AnalyticsModel):
    """A project member with the user display name resolved"""
    id: str = Field(..., description="Member id referenced by TaskRecord.assigned_to")
    user_id: Optional[str] = Field(None, description="User account id")
    name: str = Field("", description="Display name")


class ProjectSummary(AnalyticsModel):
    """Project header echoed unchanged into the report"""
    id: str
    title: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ProjectSnapshot(AnalyticsModel):
    """Everything the engine needs about one project"""
    project: ProjectSummary
    tasks: List[TaskRecord] = Field(..., description="All tasks of the project")
    members: List[MemberRecord] = Field(default_factory=list, description="Project members")


# Time-bucketing models

class DailyBucket(FrozenAnalyticsModel):
    """One calendar day of created/completed counts"""
    date: date_type
    created: int = 0
    completed: int = 0


class CumulativeBucket(FrozenAnalyticsModel):
    """Daily bucket with running totals"""
    date: date_type
    created: int = 0
    completed: int = 0
    cumulative_created: int = 0
    cumulative_completed: int = 0
    backlog: int = 0


# Aggregated metrics

class TaskMetrics(AnalyticsModel):
    total: int = 0
    completed: int = 0
    incomplete: int = 0
    archived: int = 0


class TasksByDueDate(AnalyticsModel):
    overdue: int = 0
    due_today: int = 0
    due_this_week: int = 0
    due_later: int = 0
    no_due_date: int = 0


class MemberPerformance(AnalyticsModel):
    """Workload and delivery figures for one member"""
    user_id: Optional[str] = None
    name: str = ""
    tasks_assigned: int = 0
    tasks_completed: int = 0
    avg_completion_time: Optional[float] = Field(None, description="Days, 1 decimal")
    tasks_overdue: int = 0
    completion_rate: int = Field(0, description="Completed / assigned, percent")


# Time-series models

class TrendResult(AnalyticsModel):
    slope: float = 0.0
    intercept: float = 0.0
    r_squared: float = 0.0


class Anomaly(AnalyticsModel):
    index: int
    value: float
    z_score: float
    is_anomaly: bool = True


class SeasonalityResult(AnalyticsModel):
    has_seasonality: bool = False
    strength: float = 0.0
    pattern: List[float] = Field(default_factory=list)


class ForecastResult(AnalyticsModel):
    """Forecast values are None when there is not enough history"""
    created: List[Optional[float]] = Field(default_factory=list)
    completed: List[Optional[float]] = Field(default_factory=list)
    dates: List[str] = Field(default_factory=list)


class SeriesTrends(AnalyticsModel):
    created: TrendResult = Field(default_factory=TrendResult)
    completed: TrendResult = Field(default_factory=TrendResult)
    backlog: TrendResult = Field(default_factory=TrendResult)


class SeriesMovingAverages(AnalyticsModel):
    created: List[float] = Field(default_factory=list)
    completed: List[float] = Field(default_factory=list)


class SeriesAnomalies(AnalyticsModel):
    created: List[Anomaly] = Field(default_factory=list)
    completed: List[Anomaly] = Field(default_factory=list)


class SeriesSeasonality(AnalyticsModel):
    created: SeasonalityResult = Field(default_factory=SeasonalityResult)
    completed: SeasonalityResult = Field(default_factory=SeasonalityResult)


class TimeSeriesAnalysis(AnalyticsModel):
    trends: SeriesTrends = Field(default_factory=SeriesTrends)
    moving_averages: SeriesMovingAverages = Field(default_factory=SeriesMovingAverages)
    anomalies: SeriesAnomalies = Field(default_factory=SeriesAnomalies)
    seasonality: SeriesSeasonality = Field(default_factory=SeriesSeasonality)
    forecast: ForecastResult = Field(default_factory=ForecastResult)


# Insights, risk and health

class InsightType(str, Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    WARNING = "warning"
    INFO = "info"


class Insight(AnalyticsModel):
    type: InsightType
    title: str
    description: str
    metric: str


class RiskLevel(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class RiskAssessment(AnalyticsModel):
    score: int = 0
    level: RiskLevel = RiskLevel.LOW


class EstimatedCompletion(AnalyticsModel):
    date: str
    days_remaining: int


class BusinessMetrics(AnalyticsModel):
    cycle_time: Optional[float] = Field(None, description="Mean days from creation to completion")
    throughput: float = Field(0.0, description="Completed tasks per day in the window")
    estimated_completion: Optional[EstimatedCompletion] = None
    on_time_delivery: Optional[int] = Field(None, description="Percent of due tasks finished on time")
    risk_assessment: RiskAssessment = Field(default_factory=RiskAssessment)


class HealthStatus(str, Enum):
    EXCELLENT = "Excellent"
    GOOD = "Good"
    FAIR = "Fair"
    NEEDS_ATTENTION = "Needs Attention"


class HealthDetails(AnalyticsModel):
    completion_rate: int = 0
    overdue_rate: int = 0
    activity_level: int = 0


class ProjectHealth(AnalyticsModel):
    score: int = 0
    status: HealthStatus = HealthStatus.NEEDS_ATTENTION
    details: HealthDetails = Field(default_factory=HealthDetails)


class ActivityTrends(AnalyticsModel):
    """Percent change of the second half of the window over the first"""
    created: int = 0
    completed: int = 0


class AnalyticsReport(FrozenAnalyticsModel):
    """Complete analytics report for one project and window"""
    project: ProjectSummary
    window_days: int
    generated_at: datetime
    task_metrics: TaskMetrics
    tasks_by_due_date: TasksByDueDate
    task_activity_over_time: List[DailyBucket]
    cumulative_activity: List[CumulativeBucket]
    member_performance: List[MemberPerformance]
    time_series_analysis: TimeSeriesAnalysis
    ai_insights: List[Insight]
    business_metrics: BusinessMetrics
    project_health: ProjectHealth
    activity_trends: ActivityTrends
