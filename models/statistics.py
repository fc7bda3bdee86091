from datetime import date as date_type
from pydantic import BaseModel, Field
from typing import List, Literal


class ScorePoint(BaseModel):
    """One point on the score trend line."""
    label: str
    date: date_type
    score: int


class MonthlyGroup(BaseModel):
    """Rounds of one calendar month rolled up."""
    key: str      # YYYY-MM
    label: str    # Mar 2025
    count: int
    spending: float
    wagers: float
    avg_score: float
    pnl: float
    wagers_percent: float
    expenses_percent: float


class SeriesPoint(BaseModel):
    """One bar/point of the P&L, wagers, expenses and percentage charts.

    Either a whole month (key YYYY-MM) or a single round (key YYYY-MM-DD),
    depending on the period being viewed.
    """
    key: str
    label: str
    spending: float
    wagers: float
    pnl: float
    wagers_percent: float
    expenses_percent: float
    score: float
    course: str = ""


class StatisticsSnapshot(BaseModel):
    """Everything the dashboard shows for one period."""
    period: str = "all"
    total_rounds: int = 0
    average_score: float = 0.0
    best_score: int = 0
    total_green_fee: float = 0.0
    total_caddy_fee: float = 0.0
    total_spending: float = 0.0
    total_wagers: float = 0.0
    avg_green_fee: float = 0.0
    avg_caddy_fee: float = 0.0
    net_pnl: float = 0.0
    months_played: int = 0
    avg_monthly_spending: float = 0.0
    avg_monthly_wagers: float = 0.0
    monthly: List[MonthlyGroup] = Field(default_factory=list)
    score_trend: List[ScorePoint] = Field(default_factory=list)
    series_granularity: Literal["month", "round"] = "month"
    series: List[SeriesPoint] = Field(default_factory=list)
