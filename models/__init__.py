from .base import BaseGolfModel
from .period import PeriodKind, TimePeriod
from .result import Failure, FailureKind, Result, Success
from .round import Round, RoundDraft
from .statistics import MonthlyGroup, ScorePoint, SeriesPoint, StatisticsSnapshot

__all__ = [
    "BaseGolfModel",
    "Failure",
    "FailureKind",
    "MonthlyGroup",
    "PeriodKind",
    "Result",
    "Round",
    "RoundDraft",
    "ScorePoint",
    "SeriesPoint",
    "StatisticsSnapshot",
    "Success",
    "TimePeriod",
]
