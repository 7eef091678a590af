"""
Tests for insight generation and risk assessment.

Tests cover:
- Velocity and backlog trend rules
- Overdue rate and workload balance rules
- Recent anomaly and weekly pattern rules
- Risk score bands and levels
"""

from project_analytics.calculators.insights import assess_risk, generate_insights
from project_analytics.config import InsightThresholds, RiskThresholds
from project_analytics.models import (
    Anomaly,
    InsightType,
    MemberPerformance,
    RiskLevel,
    SeasonalityResult,
    SeriesAnomalies,
    SeriesSeasonality,
    SeriesTrends,
    TaskMetrics,
    TasksByDueDate,
    TimeSeriesAnalysis,
    TrendResult,
)


def make_analysis(velocity=0.0, backlog=0.0, anomalies=None, seasonality=None):
    return TimeSeriesAnalysis(
        trends=SeriesTrends(
            completed=TrendResult(slope=velocity),
            backlog=TrendResult(slope=backlog),
        ),
        anomalies=SeriesAnomalies(completed=anomalies or []),
        seasonality=SeriesSeasonality(completed=seasonality or SeasonalityResult()),
    )


def member(name, tasks_assigned):
    return MemberPerformance(user_id=name.lower(), name=name, tasks_assigned=tasks_assigned)


class TestTrendInsights:
    """Test velocity and backlog rules"""

    def test_increasing_velocity(self, make_buckets):
        """A rising completion trend is positive"""
        insights = generate_insights(
            make_analysis(velocity=0.5), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14)
        )

        assert len(insights) == 1
        assert insights[0].type == InsightType.POSITIVE
        assert insights[0].title == "Increasing Velocity"
        assert insights[0].metric == "+0.5 tasks/day"

    def test_decreasing_velocity(self, make_buckets):
        """A falling completion trend is negative"""
        insights = generate_insights(
            make_analysis(velocity=-0.25), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14)
        )

        assert insights[0].type == InsightType.NEGATIVE
        assert insights[0].title == "Decreasing Velocity"
        assert insights[0].metric == "-0.25 tasks/day"

    def test_velocity_at_threshold(self, make_buckets):
        """The threshold itself does not trigger"""
        insights = generate_insights(
            make_analysis(velocity=0.1), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14)
        )

        assert insights == []

    def test_growing_backlog(self, make_buckets):
        """A rising backlog is a warning"""
        insights = generate_insights(
            make_analysis(backlog=0.3), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14)
        )

        assert insights[0].type == InsightType.WARNING
        assert insights[0].title == "Growing Backlog"
        assert insights[0].metric == "+0.3 tasks/day"

    def test_shrinking_backlog(self, make_buckets):
        """A falling backlog is positive"""
        insights = generate_insights(
            make_analysis(backlog=-0.5), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14)
        )

        assert insights[0].type == InsightType.POSITIVE
        assert insights[0].title == "Shrinking Backlog"

    def test_custom_thresholds(self, make_buckets):
        """Raised trigger values silence the rule"""
        insights = generate_insights(
            make_analysis(velocity=0.5), TaskMetrics(), TasksByDueDate(), [], make_buckets([0] * 14),
            InsightThresholds(velocity_up_slope=1.0)
        )

        assert insights == []


class TestTaskInsights:
    """Test overdue and workload rules"""

    def test_high_overdue_rate(self, make_buckets):
        """More than 20% overdue is a warning"""
        insights = generate_insights(
            make_analysis(),
            TaskMetrics(total=10, completed=2, incomplete=8),
            TasksByDueDate(overdue=3),
            [],
            make_buckets([0] * 14)
        )

        assert insights[0].title == "High Overdue Rate"
        assert insights[0].description.startswith("30% of tasks are overdue.")
        assert insights[0].metric == "3 tasks"

    def test_overdue_rate_at_threshold(self, make_buckets):
        """Exactly 20% overdue does not trigger"""
        insights = generate_insights(
            make_analysis(),
            TaskMetrics(total=10, incomplete=10),
            TasksByDueDate(overdue=2),
            [],
            make_buckets([0] * 14)
        )

        assert insights == []

    def test_unbalanced_workload(self, make_buckets):
        """A disparity over 3x names the busiest and lightest members"""
        insights = generate_insights(
            make_analysis(), TaskMetrics(), TasksByDueDate(),
            [member("Alice", 8), member("Bob", 2)],
            make_buckets([0] * 14)
        )

        assert insights[0].title == "Unbalanced Workload"
        assert "Alice has 8 tasks while Bob has only 2" in insights[0].description
        assert insights[0].metric == "4x difference"

    def test_balanced_workload(self, make_buckets):
        """Equal workloads raise nothing"""
        insights = generate_insights(
            make_analysis(), TaskMetrics(), TasksByDueDate(),
            [member("Alice", 5), member("Bob", 5)],
            make_buckets([0] * 14)
        )

        assert insights == []

    def test_exactly_three_times(self, make_buckets):
        """A 3x disparity is tolerated"""
        insights = generate_insights(
            make_analysis(), TaskMetrics(), TasksByDueDate(),
            [member("Alice", 6), member("Bob", 2)],
            make_buckets([0] * 14)
        )

        assert insights == []

    def test_single_member(self, make_buckets):
        """One member cannot be unbalanced"""
        insights = generate_insights(
            make_analysis(), TaskMetrics(), TasksByDueDate(),
            [member("Alice", 12)],
            make_buckets([0] * 14)
        )

        assert insights == []


class TestAnomalyInsights:
    """Test the recent anomaly rule"""

    def test_recent_spike(self, make_buckets):
        """A spike in the last week is positive"""
        buckets = make_buckets([0] * 14)
        analysis = make_analysis(anomalies=[Anomaly(index=12, value=9, z_score=3.1)])

        insights = generate_insights(analysis, TaskMetrics(), TasksByDueDate(), [], buckets)

        assert insights[0].type == InsightType.POSITIVE
        assert insights[0].title == "Productivity Spike"
        assert "2026-10-13" in insights[0].description
        assert insights[0].metric == "9 tasks"

    def test_recent_drop(self, make_buckets):
        """A day with no completions is a drop"""
        buckets = make_buckets([0] * 14)
        analysis = make_analysis(anomalies=[Anomaly(index=10, value=0, z_score=-2.5)])

        insights = generate_insights(analysis, TaskMetrics(), TasksByDueDate(), [], buckets)

        assert insights[0].type == InsightType.NEGATIVE
        assert insights[0].title == "Productivity Drop"

    def test_low_value_below_mean_is_spike(self, make_buckets):
        """A nonzero count reads as a spike even below the mean"""
        buckets = make_buckets([0] * 14)
        analysis = make_analysis(anomalies=[Anomaly(index=13, value=1, z_score=-3.6)])

        insights = generate_insights(analysis, TaskMetrics(), TasksByDueDate(), [], buckets)

        assert insights[0].type == InsightType.POSITIVE
        assert insights[0].title == "Productivity Spike"
        assert "Unusual increase" in insights[0].description

    def test_oldest_recent_day(self, make_buckets):
        """The seventh-to-last bucket still counts as recent"""
        buckets = make_buckets([0] * 14)
        analysis = make_analysis(anomalies=[Anomaly(index=7, value=9, z_score=2.4)])

        insights = generate_insights(analysis, TaskMetrics(), TasksByDueDate(), [], buckets)

        assert len(insights) == 1

    def test_old_anomaly_ignored(self, make_buckets):
        """Anomalies before the last week raise nothing"""
        buckets = make_buckets([0] * 14)
        analysis = make_analysis(anomalies=[Anomaly(index=2, value=9, z_score=3.1)])

        insights = generate_insights(analysis, TaskMetrics(), TasksByDueDate(), [], buckets)

        assert insights == []


class TestWeeklyPattern:
    """Test the seasonality rule"""

    def test_pattern_names_bucket_weekdays(self, make_buckets):
        """Peak and dip are named after the weekdays of their buckets"""
        # Window starts on Thursday 2026-10-01
        buckets = make_buckets([0] * 14)
        seasonality = SeasonalityResult(
            has_seasonality=True,
            strength=0.85,
            pattern=[1.0, 5.0, 2.0, 2.0, 2.0, 2.0, 0.5],
        )

        insights = generate_insights(
            make_analysis(seasonality=seasonality), TaskMetrics(), TasksByDueDate(), [], buckets
        )

        assert insights[0].type == InsightType.INFO
        assert insights[0].title == "Weekly Pattern Detected"
        assert insights[0].description == (
            "Team productivity tends to peak on Fridays and dip on Wednesdays."
        )
        assert insights[0].metric == "85% confidence"

    def test_no_pattern(self, make_buckets):
        """Without seasonality nothing is raised"""
        seasonality = SeasonalityResult(has_seasonality=False, strength=0.3, pattern=[1.0] * 7)

        insights = generate_insights(
            make_analysis(seasonality=seasonality), TaskMetrics(), TasksByDueDate(), [],
            make_buckets([0] * 14)
        )

        assert insights == []


class TestInsightOrder:
    """Test rule ordering"""

    def test_rule_order(self, make_buckets):
        """Insights follow rule evaluation order"""
        insights = generate_insights(
            make_analysis(velocity=0.4, backlog=0.5),
            TaskMetrics(total=10, completed=2, incomplete=8),
            TasksByDueDate(overdue=5),
            [member("Alice", 10), member("Bob", 1)],
            make_buckets([0] * 14)
        )

        assert [i.title for i in insights] == [
            "Increasing Velocity",
            "Growing Backlog",
            "High Overdue Rate",
            "Unbalanced Workload",
        ]


class TestRiskAssessment:
    """Test risk scoring"""

    def test_single_overdue_task(self):
        """Overdue rate and completion rate each add 25"""
        risk = assess_risk(
            make_analysis(), TaskMetrics(total=1, incomplete=1), TasksByDueDate(overdue=1)
        )

        assert risk.score == 50
        assert risk.level == RiskLevel.MEDIUM

    def test_high_risk(self):
        """Every contribution at its top band"""
        risk = assess_risk(
            make_analysis(velocity=-0.3, backlog=0.4),
            TaskMetrics(total=10, completed=2, incomplete=8),
            TasksByDueDate(overdue=3)
        )

        assert risk.score == 100
        assert risk.level == RiskLevel.HIGH

    def test_low_risk(self):
        """A healthy project scores zero"""
        risk = assess_risk(
            make_analysis(velocity=0.2, backlog=-0.2),
            TaskMetrics(total=10, completed=8, incomplete=2),
            TasksByDueDate()
        )

        assert risk.score == 0
        assert risk.level == RiskLevel.LOW

    def test_middle_bands(self):
        """Lower bands add 15 and 5 points"""
        risk = assess_risk(
            make_analysis(velocity=-0.15, backlog=0.2),
            TaskMetrics(total=10, completed=6, incomplete=4),
            TasksByDueDate()
        )

        assert risk.score == 35
        assert risk.level == RiskLevel.MEDIUM

    def test_empty_project(self):
        """An empty project only carries the completion contribution"""
        risk = assess_risk(make_analysis(), TaskMetrics(), TasksByDueDate())

        assert risk.score == 25
        assert risk.level == RiskLevel.LOW

    def test_custom_levels(self):
        """Level cut-offs come from the thresholds"""
        risk = assess_risk(
            make_analysis(), TaskMetrics(), TasksByDueDate(),
            RiskThresholds(medium_level=20)
        )

        assert risk.level == RiskLevel.MEDIUM
