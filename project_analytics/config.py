# Copyright (c) 2025 Bytedance Ltd. and/or its affiliates
# SPDX-License-Identifier: MIT

"""
Configuration for the analytics engine and its HTTP service.

Service settings come from the environment (prefix ``ANALYTICS_``) or a
``.env`` file. Every heuristic threshold used by the engine lives in
``AnalyticsThresholds`` and can be overridden from a YAML file named by
``ANALYTICS_THRESHOLDS_FILE``.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from project_analytics.errors import ConfigurationError

logger = logging.getLogger(__name__)

VALID_WINDOW_DAYS = (7, 14, 30)


class Settings(BaseSettings):
    """Analytics service settings."""

    model_config = SettingsConfigDict(env_prefix="ANALYTICS_", env_file=".env", extra="ignore")

    # Service settings
    service_name: str = "Project Analytics"
    service_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8002

    # Engine settings
    default_window_days: int = 14
    thresholds_file: Optional[str] = None


class SeriesThresholds(BaseModel):
    """Parameters of the statistical primitives."""
    anomaly_z_score: float = Field(2.0, description="|z| above which a point is anomalous")
    moving_average_window: int = Field(7, description="Upper bound of the moving average window")
    seasonality_period: int = Field(7, description="Period of the weekly pattern")
    seasonality_strength: float = Field(0.7, description="Strength above which a pattern counts")
    forecast_periods: int = Field(7, description="Days forecast ahead")
    forecast_min_points: int = Field(10, description="History needed before forecasting")
    velocity_lookback_days: int = Field(14, description="Days averaged for the completion estimate")


class InsightThresholds(BaseModel):
    """Trigger values of the insight rules."""
    velocity_up_slope: float = 0.1
    velocity_down_slope: float = -0.1
    backlog_growing_slope: float = 0.2
    backlog_shrinking_slope: float = -0.1
    high_overdue_percentage: float = 20.0
    workload_disparity_ratio: float = 3.0
    recent_anomaly_days: int = 7


class RiskBand(BaseModel):
    """One step of a banded risk contribution."""
    limit: float
    points: int


class RiskThresholds(BaseModel):
    """
    Bands of the four risk contributions.

    Bands are checked in order and the first match wins. ``overdue_rate`` and
    ``backlog_slope`` match when the value is above ``limit``;
    ``velocity_slope`` and ``completion_rate`` match when it is below.
    """
    overdue_rate: List[RiskBand] = Field(default_factory=lambda: [
        RiskBand(limit=20, points=25),
        RiskBand(limit=10, points=15),
        RiskBand(limit=5, points=5),
    ])
    backlog_slope: List[RiskBand] = Field(default_factory=lambda: [
        RiskBand(limit=0.3, points=25),
        RiskBand(limit=0.1, points=15),
        RiskBand(limit=0, points=5),
    ])
    velocity_slope: List[RiskBand] = Field(default_factory=lambda: [
        RiskBand(limit=-0.2, points=25),
        RiskBand(limit=-0.1, points=15),
        RiskBand(limit=0, points=5),
    ])
    completion_rate: List[RiskBand] = Field(default_factory=lambda: [
        RiskBand(limit=30, points=25),
        RiskBand(limit=50, points=15),
        RiskBand(limit=70, points=5),
    ])
    high_level: int = 60
    medium_level: int = 30


class HealthThresholds(BaseModel):
    """Weights and status bands of the project health score."""
    completion_weight: float = 0.4
    overdue_weight: float = 0.3
    activity_weight: float = 0.3
    active_tasks_per_day: float = Field(10.0, description="Daily activity treated as 100%")
    recent_days: int = 7
    excellent: float = 80
    good: float = 60
    fair: float = 40


class AnalyticsThresholds(BaseModel):
    """Complete tunable rule table of the engine."""
    series: SeriesThresholds = Field(default_factory=SeriesThresholds)
    insights: InsightThresholds = Field(default_factory=InsightThresholds)
    risk: RiskThresholds = Field(default_factory=RiskThresholds)
    health: HealthThresholds = Field(default_factory=HealthThresholds)


def load_thresholds(path: Optional[str] = None) -> AnalyticsThresholds:
    """
    Load the threshold table, applying overrides from a YAML file.

    Args:
        path: YAML file with any subset of the ``AnalyticsThresholds`` keys.
            ``None`` returns the defaults.

    Returns:
        AnalyticsThresholds instance

    Raises:
        ConfigurationError: if the file cannot be read or does not validate
    """
    if not path:
        return AnalyticsThresholds()

    file_path = Path(path)
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(
            f"Could not load thresholds from {file_path}",
            details={'path': str(file_path), 'reason': str(e)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Thresholds file {file_path} must contain a mapping",
            details={'path': str(file_path)}
        )

    try:
        thresholds = AnalyticsThresholds.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid thresholds in {file_path}",
            details={'path': str(file_path), 'errors': e.errors(include_url=False)}
        ) from e

    logger.info("Loaded analytics thresholds from %s", file_path)
    return thresholds


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


@lru_cache()
def get_thresholds() -> AnalyticsThresholds:
    """Get the cached threshold table for the configured settings."""
    return load_thresholds(get_settings().thresholds_file)
