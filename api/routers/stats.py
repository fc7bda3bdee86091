"""Stats/dashboard API endpoints."""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from analytics.visualizations import CHARTS, render_png
from api.dependencies import get_service, unwrap
from models import StatisticsSnapshot, TimePeriod
from services import RoundService

router = APIRouter()


async def _snapshot(period: Optional[str], service: RoundService) -> StatisticsSnapshot:
    selected = unwrap(TimePeriod.parse(period))
    return unwrap(await service.statistics(selected))


@router.get("", response_model=StatisticsSnapshot)
async def get_statistics(
    period: Optional[str] = Query("all", description="all, ytd or YYYY-MM"),
    service: RoundService = Depends(get_service),
):
    return await _snapshot(period, service)


@router.get("/periods", response_model=List[str])
async def get_periods(service: RoundService = Depends(get_service)):
    """Months with at least one round, newest first."""
    return unwrap(await service.periods())


@router.get("/charts/{chart}.png")
async def get_chart(
    chart: str,
    period: Optional[str] = Query("all", description="all, ytd or YYYY-MM"),
    service: RoundService = Depends(get_service),
):
    if chart not in CHARTS:
        raise HTTPException(404, f"Unknown chart: {chart}")
    snapshot = await _snapshot(period, service)
    try:
        content = render_png(snapshot, chart)
    except RuntimeError as e:
        raise HTTPException(501, str(e))
    return Response(content=content, media_type="image/png")
