# Project Analytics - Analytics Router
"""
API endpoints computing a project analytics report.

The caller supplies the snapshot already joined and authorized; this router
does no data fetching and no access checks. A demo endpoint reports on a
generated sample project.
"""

import logging
from functools import lru_cache
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from project_analytics.config import get_settings, get_thresholds
from project_analytics.errors import InvalidInputError
from project_analytics.mock_data import MockDataGenerator
from project_analytics.models import AnalyticsReport, ProjectSnapshot
from project_analytics.service import AnalyticsService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["analytics"])


@lru_cache()
def get_analytics_service() -> AnalyticsService:
    """Service built from the configured thresholds and default window."""
    settings = get_settings()
    return AnalyticsService(
        thresholds=get_thresholds(),
        default_window_days=settings.default_window_days
    )


@router.post("", response_model=AnalyticsReport)
async def compute_project_analytics(
    snapshot: ProjectSnapshot,
    time_range: Optional[str] = Query(
        None, alias="timeRange", description="7days, 14days or 30days"
    ),
    window_days: Optional[str] = Query(
        None, alias="windowDays", description="7, 14 or 30; overrides timeRange"
    ),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """
    Compute analytics for a project snapshot.

    Unsupported windows fall back to the default window instead of failing.
    """
    window = window_days if window_days is not None else time_range

    try:
        return service.compute_analytics(snapshot, window)
    except InvalidInputError as e:
        logger.warning(f"Rejected analytics request for project {snapshot.project.id}: {e.message}")
        raise HTTPException(status_code=400, detail=e.to_dict())


@router.get("/demo", response_model=AnalyticsReport)
async def compute_demo_analytics(
    time_range: Optional[str] = Query(
        None, alias="timeRange", description="7days, 14days or 30days"
    ),
    window_days: Optional[str] = Query(
        None, alias="windowDays", description="7, 14 or 30; overrides timeRange"
    ),
    seed: int = Query(42, description="Seed of the generated project"),
    num_tasks: int = Query(40, alias="numTasks", ge=0, le=500),
    num_members: int = Query(4, alias="numMembers", ge=0, le=8),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Compute analytics for a generated sample project, for dashboard demos."""
    window = window_days if window_days is not None else time_range
    now = service.clock()

    generator = MockDataGenerator(seed=seed, now=now)
    snapshot = generator.generate_snapshot(
        num_tasks=num_tasks,
        num_members=num_members,
        history_days=30
    )
    logger.info(f"Serving demo analytics with seed {seed}: {num_tasks} tasks")
    return service.compute_analytics(snapshot, window, now=now)
